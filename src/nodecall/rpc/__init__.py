"""
JSON-RPC layer: client, envelope models, error taxonomy and eth_* helpers.

Uses httpx for HTTP; responses are validated against the JSON-RPC 2.0
envelope before any result is handed back.
"""

from .client import RpcClient
from .errors import ProtocolError, RemoteError, RpcError, TransportError
from .models import JsonValue, RpcErrorObject, RpcRequest, RpcResponse, parse_response

__all__ = [
    "RpcClient",
    "RpcError",
    "TransportError",
    "ProtocolError",
    "RemoteError",
    "JsonValue",
    "RpcRequest",
    "RpcResponse",
    "RpcErrorObject",
    "parse_response",
]
