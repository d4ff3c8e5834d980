"""
JSON-RPC client.

Wraps one httpx.Client per endpoint. Each call allocates a fresh request id,
POSTs a single JSON-RPC 2.0 request and classifies the outcome as a result
or one of TransportError / ProtocolError / RemoteError.
"""

from __future__ import annotations

import itertools
import json
import threading
import time
from typing import Optional, Sequence

import httpx
from loguru import logger

from ..config import EndpointConfig
from .errors import ProtocolError, TransportError
from .models import JsonValue, RpcRequest, RpcResponse, parse_response


class RpcClient:
    """
    Client for a single JSON-RPC endpoint.

    Args:
        config: Endpoint configuration (URL, headers, auth, timeout, retries)
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        config: EndpointConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()
        self._http = httpx.Client(
            headers={"Content-Type": "application/json", **dict(config.headers)},
            auth=config.auth,
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def next_id(self) -> int:
        with self._id_lock:
            return next(self._ids)

    def call(self, method: str, params: Sequence[JsonValue] = ()) -> JsonValue:
        """
        Call ``method`` and return its decoded result.

        Raises:
            ValueError: If method is empty or params are not JSON values
            TransportError: Connection failure, timeout or non-JSON-RPC HTTP error
            ProtocolError: Malformed response envelope
            RemoteError: The node returned an error object
        """
        return self.request(method, params).unwrap()

    def request(self, method: str, params: Sequence[JsonValue] = ()) -> RpcResponse:
        """
        Call ``method`` and return the parsed envelope.

        Remote errors come back as ``RpcResponse.error`` instead of being
        raised. Transport errors are retried up to ``config.retries`` times.
        """
        attempts = self.config.retries + 1
        for attempt in range(1, attempts + 1):
            rpc_request = RpcRequest.build(method, params, self.next_id())
            try:
                return self._send(rpc_request)
            except TransportError as exc:
                if attempt >= attempts:
                    raise
                delay = self.config.retry_backoff * attempt
                logger.warning(
                    f"{method} (id={rpc_request.id}) transport failure, "
                    f"retry {attempt}/{self.config.retries} in {delay:g}s: {exc}"
                )
                time.sleep(delay)
        raise AssertionError("unreachable")

    def _send(self, rpc_request: RpcRequest) -> RpcResponse:
        logger.debug(f"-> {rpc_request.method} id={rpc_request.id} params={rpc_request.params}")
        try:
            response = self._http.post(self.config.url, json=rpc_request.to_dict())
        except httpx.DecodingError as exc:
            raise ProtocolError(f"Response body could not be decoded: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning(f"{rpc_request.method} (id={rpc_request.id}) failed: {exc!r}")
            raise TransportError(f"Request to {self.config.url} failed: {exc}") from exc

        if 300 <= response.status_code < 400:
            location = response.headers.get("Location", "?")
            raise TransportError(
                f"HTTP {response.status_code} redirect from {self.config.url} to {location}; "
                f"point the RPC URL at the final endpoint"
            )

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            if response.is_error:
                raise TransportError(
                    f"HTTP {response.status_code} from {self.config.url}: {response.text[:200]}"
                ) from exc
            raise ProtocolError(f"Response body is not valid JSON: {exc}") from exc

        if response.is_error and not (isinstance(payload, dict) and "error" in payload):
            raise TransportError(
                f"HTTP {response.status_code} from {self.config.url}: {response.text[:200]}"
            )

        parsed = parse_response(payload, rpc_request.id)
        if parsed.error is not None:
            logger.warning(
                f"{rpc_request.method} (id={rpc_request.id}) remote error "
                f"{parsed.error.code}: {parsed.error.message}"
            )
        else:
            logger.debug(f"<- {rpc_request.method} id={rpc_request.id} result={parsed.result!r}")
        return parsed

