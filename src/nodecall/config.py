"""
Endpoint configuration.

Values come from the process environment first, then from ``./.env`` and
``~/.nodecall/.env``. The result is an immutable EndpointConfig that is
handed to RpcClient explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

NODECALL_DIR = Path.home() / ".nodecall"
NODECALL_ENV = NODECALL_DIR / ".env"

DEFAULT_RPC_URL = "https://sepolia.base.org"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_BACKOFF = 0.5
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    exit_code: int = 5


@dataclass(frozen=True)
class EndpointConfig:
    url: str = DEFAULT_RPC_URL
    headers: Mapping[str, str] = field(default_factory=dict)
    auth: Optional[tuple[str, str]] = None
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 0
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.url.startswith(("http://", "https://")):
            raise ConfigError(f"RPC URL must be http(s): {self.url!r}")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.retries < 0:
            raise ConfigError("retries must not be negative")
        if self.retry_backoff < 0:
            raise ConfigError("retry backoff must not be negative")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level!r}")

    def with_overrides(self, **changes) -> "EndpointConfig":
        """Return a copy with the non-None keyword arguments applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def masked(self) -> dict[str, str]:
        """Printable view with secrets hidden."""
        headers = {
            k: ("***" if k.lower() in _SECRET_HEADERS else v) for k, v in self.headers.items()
        }
        return {
            "url": self.url,
            "headers": ", ".join(f"{k}: {v}" for k, v in headers.items()) or "(none)",
            "auth": f"{self.auth[0]}:***" if self.auth else "(none)",
            "timeout": f"{self.timeout:g}s",
            "retries": str(self.retries),
            "retry_backoff": f"{self.retry_backoff:g}s",
            "log_level": self.log_level,
        }


_SECRET_HEADERS = {"authorization", "x-api-key"}


def parse_headers(raw: str) -> dict[str, str]:
    """Parse ``"Key: Value; Key2: Value2"`` into a dict."""
    headers: dict[str, str] = {}
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        if ":" not in chunk:
            raise ConfigError(f"Malformed header (expected 'Key: Value'): {chunk!r}")
        key, value = chunk.split(":", 1)
        key = key.strip()
        if not key:
            raise ConfigError(f"Malformed header (empty name): {chunk!r}")
        headers[key] = value.strip()
    return headers


def _number(env: Mapping[str, str], key: str, default: float, kind: type) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{key} must be {'an integer' if kind is int else 'a number'}, got {raw!r}") from None


def read_env(env_files: Optional[list[Path]] = None) -> dict[str, str]:
    """
    Merge .env files and the process environment.

    Later files lose to earlier ones; the process environment wins over all.
    """
    if env_files is None:
        env_files = [Path.cwd() / ".env", NODECALL_ENV]

    merged: dict[str, str] = {}
    for path in reversed(env_files):
        if path.is_file():
            merged.update({k: v for k, v in dotenv_values(path).items() if v is not None})
    merged.update({k: v for k, v in os.environ.items() if v != ""})
    return merged


def load_config(
    env: Optional[Mapping[str, str]] = None,
    env_files: Optional[list[Path]] = None,
) -> EndpointConfig:
    """
    Build an EndpointConfig from the environment.

    Args:
        env: Explicit mapping to read instead of env files + os.environ
        env_files: .env files to consult (default: ./.env, ~/.nodecall/.env)

    Returns:
        EndpointConfig

    Raises:
        ConfigError: If a value cannot be parsed
    """
    if env is None:
        env = read_env(env_files)

    headers = parse_headers(env.get("NODECALL_RPC_HEADERS", ""))
    api_key = env.get("NODECALL_API_KEY")
    if api_key:
        headers.setdefault("X-API-KEY", api_key)

    auth = None
    user = env.get("NODECALL_RPC_USER")
    if user:
        auth = (user, env.get("NODECALL_RPC_PASSWORD", ""))

    return EndpointConfig(
        url=env.get("NODECALL_RPC_URL") or DEFAULT_RPC_URL,
        headers=headers,
        auth=auth,
        timeout=_number(env, "NODECALL_TIMEOUT", DEFAULT_TIMEOUT, float),
        retries=int(_number(env, "NODECALL_RETRIES", 0, int)),
        retry_backoff=_number(env, "NODECALL_RETRY_BACKOFF", DEFAULT_RETRY_BACKOFF, float),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
