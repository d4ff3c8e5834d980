"""
Query - Read chain state through eth_* methods.

Covers the read-only calls a node operator reaches for most often:
block height, chain id, gas price, balances and nonces.
"""

from __future__ import annotations

import click

from ..hexutil import format_units, to_checksum_address
from ..rpc import eth
from ._shared import rpc_client


@click.command("block-number")
@click.pass_context
def block_number(ctx: click.Context) -> None:
    """Print the latest block number."""
    with rpc_client(ctx) as client:
        click.echo(eth.block_number(client))


@click.command("chain-id")
@click.pass_context
def chain_id(ctx: click.Context) -> None:
    """Print the chain id reported by the node."""
    with rpc_client(ctx) as client:
        click.echo(eth.chain_id(client))


@click.command("gas-price")
@click.option("--gwei", is_flag=True, help="Show the price in gwei instead of wei")
@click.pass_context
def gas_price(ctx: click.Context, gwei: bool) -> None:
    """Print the current gas price."""
    with rpc_client(ctx) as client:
        price = eth.gas_price(client)
    if gwei:
        click.echo(f"{format_units(price, 9)} gwei")
    else:
        click.echo(f"{price} wei")


@click.command()
@click.argument("address")
@click.option("--block", default="latest", show_default=True, help="Block tag or number")
@click.option(
    "--decimals",
    default=None,
    type=click.IntRange(min=0),
    help="Also show the balance scaled by this many decimals (18 for ETH)",
)
@click.pass_context
def balance(ctx: click.Context, address: str, block: str, decimals: int) -> None:
    """Print the balance of ADDRESS in wei."""
    with rpc_client(ctx) as client:
        wei = eth.get_balance(client, address, block)
    click.echo(f"Address: {to_checksum_address(address)}")
    click.echo(f"Balance: {wei} wei")
    if decimals is not None:
        click.echo(f"         {format_units(wei, decimals)}")


@click.command()
@click.argument("address")
@click.option("--block", default="latest", show_default=True, help="Block tag or number")
@click.pass_context
def nonce(ctx: click.Context, address: str, block: str) -> None:
    """Print the transaction count of ADDRESS."""
    with rpc_client(ctx) as client:
        click.echo(eth.get_nonce(client, address, block))
