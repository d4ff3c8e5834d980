"""
nodecall CLI

Command-line client for Ethereum-compatible JSON-RPC nodes.

Configuration is read once at startup from the environment, ./.env and
~/.nodecall/.env, then overridden by the global options below.

Commands:
  call          - Raw JSON-RPC call
  block-number  - Latest block number
  chain-id      - Chain id
  gas-price     - Current gas price
  balance       - Balance of an address
  nonce         - Transaction count of an address
  receipt       - Transaction receipt (optionally wait for it)
  info          - Show effective configuration
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from . import __version__
from .config import LOG_LEVELS, ConfigError, load_config
from .log import setup_logging


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("N O D E C A L L", fg="bright_white", bold=True)
        + click.style(f"  v{__version__}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nodecall")
@click.option("--rpc-url", default=None, help="JSON-RPC endpoint (overrides NODECALL_RPC_URL)")
@click.option("--timeout", default=None, type=float, help="Request timeout in seconds")
@click.option("--retries", default=None, type=click.IntRange(min=0), help="Retries on transport errors")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (overrides LOG_LEVEL)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    timeout: Optional[float],
    retries: Optional[int],
    log_level: Optional[str],
) -> None:
    """nodecall: JSON-RPC client for Ethereum nodes."""
    ctx.ensure_object(dict)
    try:
        config = load_config().with_overrides(
            url=rpc_url,
            timeout=timeout,
            retries=retries,
            log_level=log_level.upper() if log_level else None,
        )
    except ConfigError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)

    setup_logging(config.log_level)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Commands ============

from .commands.call import call
from .commands.query import balance, block_number, chain_id, gas_price, nonce
from .commands.receipt import receipt

cli.add_command(call)
cli.add_command(block_number)
cli.add_command(chain_id)
cli.add_command(gas_price)
cli.add_command(balance)
cli.add_command(nonce)
cli.add_command(receipt)


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show the effective endpoint configuration."""
    _print_banner()

    click.secho("  Endpoint ───────────────────────────────", fg="cyan")
    click.echo()
    for key, value in ctx.obj["config"].masked().items():
        click.echo(
            click.style(f"  {key + ':':<15}", dim=True)
            + click.style(value, fg="bright_white")
        )
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """nodecall CLI entry point."""
    # Ensure UTF-8 output on Windows (for box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
