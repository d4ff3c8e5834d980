"""
Typed wrappers over common read-only ``eth_*`` methods.

Quantities are decoded from hex to int. A node answering with something
that is not a quantity is treated as a protocol violation.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from loguru import logger

from ..hexutil import from_hex, is_address, is_hash32
from .client import RpcClient
from .errors import ProtocolError

BLOCK_TAGS = ("latest", "earliest", "pending", "safe", "finalized")


def _quantity(method: str, value: Any) -> int:
    try:
        return from_hex(value)
    except ValueError as exc:
        raise ProtocolError(f"{method} returned a non-quantity result: {value!r}") from exc


def normalize_block(block: str) -> str:
    """Accept a block tag, a 0x quantity or a decimal block number."""
    if block in BLOCK_TAGS:
        return block
    if block.lower().startswith("0x"):
        from_hex(block)
        return block.lower()
    if block.isdigit():
        return hex(int(block))
    raise ValueError(f"Invalid block identifier: {block!r}")


def _require_address(address: str) -> None:
    if not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")


def block_number(client: RpcClient) -> int:
    return _quantity("eth_blockNumber", client.call("eth_blockNumber", []))


def chain_id(client: RpcClient) -> int:
    return _quantity("eth_chainId", client.call("eth_chainId", []))


def gas_price(client: RpcClient) -> int:
    """Current gas price in wei."""
    return _quantity("eth_gasPrice", client.call("eth_gasPrice", []))


def get_balance(client: RpcClient, address: str, block: str = "latest") -> int:
    """
    Get the ETH balance of an address.

    Args:
        client: RPC client
        address: 0x-prefixed address
        block: Block tag or number

    Returns:
        Balance in wei
    """
    _require_address(address)
    result = client.call("eth_getBalance", [address, normalize_block(block)])
    return _quantity("eth_getBalance", result)


def get_nonce(client: RpcClient, address: str, block: str = "latest") -> int:
    """Transaction count of an address at ``block``."""
    _require_address(address)
    result = client.call("eth_getTransactionCount", [address, normalize_block(block)])
    return _quantity("eth_getTransactionCount", result)


def get_transaction_receipt(client: RpcClient, tx_hash: str) -> Optional[dict]:
    """Return the receipt, or None while the transaction is pending."""
    if not is_hash32(tx_hash):
        raise ValueError(f"Invalid transaction hash: {tx_hash!r}")
    receipt = client.call("eth_getTransactionReceipt", [tx_hash])
    if receipt is not None and not isinstance(receipt, dict):
        raise ProtocolError(f"eth_getTransactionReceipt returned {type(receipt).__name__}")
    return receipt


def receipt_quantity(receipt: dict, field: str) -> Optional[int]:
    """Decode a quantity field of a receipt; None if the node left it out."""
    value = receipt.get(field)
    if value is None:
        return None
    return _quantity(f"eth_getTransactionReceipt.{field}", value)


def wait_for_receipt(
    client: RpcClient,
    tx_hash: str,
    timeout: float = 120,
    poll_interval: float = 2.0,
) -> dict:
    """
    Poll for a transaction receipt.

    Args:
        client: RPC client
        tx_hash: Transaction hash
        timeout: Maximum wait time in seconds
        poll_interval: Polling interval in seconds

    Returns:
        Transaction receipt dict

    Raises:
        TimeoutError: If receipt not found within timeout
    """
    if poll_interval <= 0:
        raise ValueError("poll_interval must be positive")
    if timeout < 0:
        raise ValueError("timeout must not be negative")
    deadline = time.monotonic() + timeout
    attempt = 0
    while True:
        attempt += 1
        receipt = get_transaction_receipt(client, tx_hash)
        if receipt is not None:
            logger.success(f"Receipt for {tx_hash} found after {attempt} attempt(s)")
            return receipt
        if time.monotonic() + poll_interval > deadline:
            break
        logger.info(f"Receipt for {tx_hash} not available yet (attempt {attempt})")
        time.sleep(poll_interval)

    raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout:g}s")
