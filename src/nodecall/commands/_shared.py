from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

import click

from ..config import ConfigError, EndpointConfig
from ..rpc.client import RpcClient
from ..rpc.errors import RpcError


@contextmanager
def rpc_client(ctx: click.Context) -> Iterator[RpcClient]:
    """Open a client for the command and map failures to exit codes."""
    config: EndpointConfig = ctx.obj["config"]
    try:
        with RpcClient(config, transport=ctx.obj.get("transport")) as client:
            yield client
    except RpcError as exc:
        click.secho(f"ERROR ({exc.kind}): {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    except ConfigError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    except (TimeoutError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
