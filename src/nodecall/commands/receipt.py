"""
Receipt - Look up, or wait for, a transaction receipt.
"""

from __future__ import annotations

import json
import sys

import click

from ..rpc import eth
from ._shared import rpc_client

_POSITIVE = click.FloatRange(min=0, min_open=True)


@click.command()
@click.argument("tx_hash")
@click.option("--wait", is_flag=True, help="Poll until the receipt is available")
@click.option("--timeout", default=120.0, type=_POSITIVE, show_default=True, help="Seconds to wait")
@click.option("--interval", default=2.0, type=_POSITIVE, show_default=True, help="Polling interval in seconds")
@click.option("--json", "as_json", is_flag=True, help="Print the full receipt as JSON")
@click.pass_context
def receipt(
    ctx: click.Context,
    tx_hash: str,
    wait: bool,
    timeout: float,
    interval: float,
    as_json: bool,
) -> None:
    """Show the receipt for TX_HASH."""
    with rpc_client(ctx) as client:
        if wait:
            result = eth.wait_for_receipt(client, tx_hash, timeout=timeout, poll_interval=interval)
        else:
            result = eth.get_transaction_receipt(client, tx_hash)

        if result is None:
            click.secho(f"Transaction {tx_hash} is pending or unknown.", fg="yellow")
            sys.exit(1)

        if as_json:
            click.echo(json.dumps(result, indent=2))
            return

        # Decode before printing so a malformed receipt maps to a protocol error
        block = eth.receipt_quantity(result, "blockNumber")
        gas_used = eth.receipt_quantity(result, "gasUsed")

    status = result.get("status")
    click.echo(f"  TX:       {tx_hash}")
    click.echo(f"  Block:    {block if block is not None else '?'}")
    click.echo(f"  Gas used: {gas_used if gas_used is not None else '?'}")
    if result.get("contractAddress"):
        click.echo(f"  Contract: {result['contractAddress']}")
    if status == "0x1":
        click.secho("  Status:   success", fg="green")
    elif status == "0x0":
        click.secho("  Status:   reverted", fg="red")
    else:
        click.echo(f"  Status:   {status or 'unknown'}")
