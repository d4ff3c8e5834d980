"""
RPC error taxonomy.

Every failed call surfaces as one of three kinds:

- transport: the request never produced a usable HTTP response
- protocol:  the response does not look like a JSON-RPC 2.0 envelope
- remote:    the node answered with an ``error`` object
"""

from __future__ import annotations

from typing import Any, Optional


class RpcError(RuntimeError):
    kind: str = "rpc"
    exit_code: int = 1


class TransportError(RpcError):
    kind = "transport"
    exit_code = 2


class ProtocolError(RpcError):
    kind = "protocol"
    exit_code = 3


class RemoteError(RpcError):
    kind = "remote"
    exit_code = 4

    def __init__(self, code: int, message: str, data: Optional[Any] = None) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data
