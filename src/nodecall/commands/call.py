"""
Call - Send a raw JSON-RPC request.

Params are given as a JSON array; the result is printed as JSON.
"""

from __future__ import annotations

import json
import sys

import click

from ._shared import rpc_client


@click.command("call")
@click.argument("method")
@click.argument("params_json", default="[]")
@click.option("--raw", is_flag=True, help="Print the full response envelope")
@click.pass_context
def call(ctx: click.Context, method: str, params_json: str, raw: bool) -> None:
    """
    Call METHOD with PARAMS_JSON (a JSON array) and print the result.

    Example: nodecall call eth_getBlockByNumber '["latest", false]'
    """
    try:
        params = json.loads(params_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="PARAMS_JSON")
    if not isinstance(params, list):
        raise click.BadParameter("must be a JSON array", param_hint="PARAMS_JSON")

    with rpc_client(ctx) as client:
        if raw:
            response = client.request(method, params)
            envelope = {"jsonrpc": "2.0", "id": response.id}
            if response.error is not None:
                envelope["error"] = {
                    "code": response.error.code,
                    "message": response.error.message,
                }
                if response.error.data is not None:
                    envelope["error"]["data"] = response.error.data
            else:
                envelope["result"] = response.result
            click.echo(json.dumps(envelope, indent=2))
            if response.error is not None:
                sys.exit(response.error.to_exception().exit_code)
            return

        result = client.call(method, params)
        click.echo(json.dumps(result, indent=2))
