"""
JSON-RPC 2.0 envelope models.

Parameters are restricted to plain JSON values so that what goes on the
wire is exactly what the caller passed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from .errors import ProtocolError, RemoteError

JSONRPC_VERSION = "2.0"

JsonValue = Union[str, int, float, bool, None, list["JsonValue"], dict[str, "JsonValue"]]

_MISSING = object()


def check_json_value(value: Any, path: str = "params") -> None:
    """Raise ValueError unless ``value`` is a plain JSON value."""
    if value is None or isinstance(value, (str, bool, int)):
        return
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise ValueError(f"{path}: non-finite float is not valid JSON")
        return
    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            check_json_value(item, f"{path}[{i}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValueError(f"{path}: object keys must be strings, got {type(key).__name__}")
            check_json_value(item, f"{path}.{key}")
        return
    raise ValueError(f"{path}: {type(value).__name__} is not JSON-serializable")


@dataclass(frozen=True)
class RpcRequest:
    method: str
    params: list[JsonValue] = field(default_factory=list)
    id: int = 1

    @classmethod
    def build(cls, method: str, params: Sequence[JsonValue], request_id: int) -> "RpcRequest":
        if not isinstance(method, str) or not method:
            raise ValueError("RPC method name must be a non-empty string")
        if isinstance(params, (str, bytes, dict)):
            raise ValueError("RPC params must be a sequence of values")
        params = list(params)
        check_json_value(params)
        return cls(method=method, params=params, id=request_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "method": self.method,
            "params": self.params,
            "id": self.id,
        }


@dataclass(frozen=True)
class RpcErrorObject:
    code: int
    message: str
    data: Optional[JsonValue] = None

    def to_exception(self) -> RemoteError:
        return RemoteError(self.code, self.message, self.data)


@dataclass(frozen=True)
class RpcResponse:
    """A parsed response envelope. Exactly one of result / error is set."""

    id: int
    result: JsonValue = None
    error: Optional[RpcErrorObject] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> JsonValue:
        """Return the result, or raise RemoteError for an error envelope."""
        if self.error is not None:
            raise self.error.to_exception()
        return self.result


def _parse_error_object(raw: Any) -> RpcErrorObject:
    if not isinstance(raw, dict):
        raise ProtocolError(f"'error' must be an object, got {type(raw).__name__}")
    code = raw.get("code")
    message = raw.get("message")
    # bool is an int subclass
    if not isinstance(code, int) or isinstance(code, bool):
        raise ProtocolError("'error.code' must be an integer")
    if not isinstance(message, str):
        raise ProtocolError("'error.message' must be a string")
    return RpcErrorObject(code=code, message=message, data=raw.get("data"))


def parse_response(payload: Any, expected_id: int) -> RpcResponse:
    """
    Validate a decoded response body against the JSON-RPC 2.0 envelope.

    Args:
        payload: Decoded JSON body
        expected_id: Id of the request this body answers

    Returns:
        RpcResponse carrying either the result or the error object

    Raises:
        ProtocolError: If the body is not a well-formed response to the request
    """
    if not isinstance(payload, dict):
        raise ProtocolError(f"Response must be a JSON object, got {type(payload).__name__}")

    if payload.get("jsonrpc") != JSONRPC_VERSION:
        raise ProtocolError(f"Unsupported jsonrpc version: {payload.get('jsonrpc')!r}")

    result = payload.get("result", _MISSING)
    error = payload.get("error", _MISSING)
    has_result = result is not _MISSING
    has_error = error is not _MISSING and error is not None

    if has_result and has_error:
        raise ProtocolError("Response carries both 'result' and 'error'")
    if not has_result and not has_error:
        raise ProtocolError("Response carries neither 'result' nor 'error'")

    response_id = payload.get("id")
    if has_error:
        # Servers answer parse/invalid-request errors with a null id
        if response_id is not None and response_id != expected_id:
            raise ProtocolError(f"Response id {response_id!r} does not match request id {expected_id}")
        return RpcResponse(id=expected_id, error=_parse_error_object(error))

    if response_id != expected_id:
        raise ProtocolError(f"Response id {response_id!r} does not match request id {expected_id}")
    return RpcResponse(id=expected_id, result=result)
