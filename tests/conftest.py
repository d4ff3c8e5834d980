from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from loguru import logger

from nodecall.config import EndpointConfig
from nodecall.rpc.client import RpcClient

NODE_URL = "http://node.test/rpc"


def _result_reply(result: Any) -> Callable[[dict], dict]:
    """Handler body: answer every request with ``result``, echoing its id."""
    return lambda req: {"jsonrpc": "2.0", "id": req["id"], "result": result}


def _error_reply(code: int, message: str) -> Callable[[dict], dict]:
    return lambda req: {"jsonrpc": "2.0", "id": req["id"], "error": {"code": code, "message": message}}


class FakeNode:
    """httpx.MockTransport handler that records decoded JSON-RPC requests."""

    def __init__(self, reply: Callable[[dict], Any], status_code: int = 200) -> None:
        self.reply = reply
        self.status_code = status_code
        self.requests: list[dict] = []
        self.http_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        self.http_requests.append(request)
        return httpx.Response(self.status_code, json=self.reply(body))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture()
def fake_node() -> type[FakeNode]:
    return FakeNode


@pytest.fixture()
def rpc_result() -> Callable[[Any], Callable[[dict], dict]]:
    return _result_reply


@pytest.fixture()
def rpc_error() -> Callable[[int, str], Callable[[dict], dict]]:
    return _error_reply

@pytest.fixture()
def make_client() -> Callable[..., RpcClient]:
    clients: list[RpcClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], **config: Any) -> RpcClient:
        config.setdefault("url", NODE_URL)
        config.setdefault("retry_backoff", 0)
        client = RpcClient(EndpointConfig(**config), transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Isolate config loading from the developer's environment and .env files."""
    for key in list(os.environ):
        if key.startswith("NODECALL_") or key == "LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("nodecall.config.NODECALL_ENV", tmp_path / "home" / ".env")
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """The CLI points loguru at the runner's stderr; drop that sink afterwards."""
    yield
    logger.remove()
    logger.disable("nodecall")
