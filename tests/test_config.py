"""Unit tests for endpoint configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from nodecall.config import (
    DEFAULT_RPC_URL,
    ConfigError,
    EndpointConfig,
    load_config,
    parse_headers,
)


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config(env={})
        assert config.url == DEFAULT_RPC_URL
        assert config.timeout == 30.0
        assert config.retries == 0
        assert config.auth is None
        assert dict(config.headers) == {}
        assert config.log_level == "INFO"

    def test_full_env(self) -> None:
        config = load_config(
            env={
                "NODECALL_RPC_URL": "https://node.example/v1",
                "NODECALL_RPC_HEADERS": "X-Trace: abc; Accept-Encoding: gzip",
                "NODECALL_API_KEY": "k3y",
                "NODECALL_RPC_USER": "alice",
                "NODECALL_RPC_PASSWORD": "pw",
                "NODECALL_TIMEOUT": "5",
                "NODECALL_RETRIES": "2",
                "NODECALL_RETRY_BACKOFF": "0.1",
                "LOG_LEVEL": "debug",
            }
        )
        assert config.url == "https://node.example/v1"
        assert config.headers == {"X-Trace": "abc", "Accept-Encoding": "gzip", "X-API-KEY": "k3y"}
        assert config.auth == ("alice", "pw")
        assert config.timeout == 5.0
        assert config.retries == 2
        assert config.retry_backoff == 0.1
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "env",
        [
            {"NODECALL_TIMEOUT": "soon"},
            {"NODECALL_RETRIES": "1.5"},
            {"NODECALL_RETRIES": "-1"},
            {"NODECALL_RPC_URL": "ws://node.example"},
            {"LOG_LEVEL": "LOUD"},
            {"NODECALL_RPC_HEADERS": "no-colon"},
        ],
    )
    def test_invalid_values(self, env: dict) -> None:
        with pytest.raises(ConfigError):
            load_config(env=env)

    def test_env_file(self, clean_env: Path) -> None:
        (clean_env / ".env").write_text(
            "NODECALL_RPC_URL=http://from-dotenv:8545\nNODECALL_RETRIES=4\n", encoding="utf-8"
        )
        config = load_config()
        assert config.url == "http://from-dotenv:8545"
        assert config.retries == 4

    def test_environment_wins_over_env_file(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (clean_env / ".env").write_text("NODECALL_RPC_URL=http://from-dotenv:8545\n", encoding="utf-8")
        monkeypatch.setenv("NODECALL_RPC_URL", "http://from-env:8545")
        assert load_config().url == "http://from-env:8545"

    def test_home_env_file_is_fallback(self, clean_env: Path) -> None:
        home_env = clean_env / "home" / ".env"
        home_env.parent.mkdir()
        home_env.write_text("NODECALL_RPC_URL=http://home:8545\nNODECALL_TIMEOUT=9\n", encoding="utf-8")
        (clean_env / ".env").write_text("NODECALL_RPC_URL=http://cwd:8545\n", encoding="utf-8")
        config = load_config()
        assert config.url == "http://cwd:8545"
        assert config.timeout == 9.0


class TestEndpointConfig:
    def test_is_frozen(self) -> None:
        config = EndpointConfig()
        with pytest.raises(Exception):
            config.url = "http://other"  # type: ignore[misc]

    def test_with_overrides_skips_none(self) -> None:
        config = EndpointConfig(url="http://a:1").with_overrides(url=None, retries=3)
        assert config.url == "http://a:1"
        assert config.retries == 3

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ConfigError):
            EndpointConfig().with_overrides(timeout=0.0)

    def test_masked_hides_secrets(self) -> None:
        config = EndpointConfig(headers={"X-API-KEY": "secret", "X-Trace": "t"}, auth=("alice", "pw"))
        masked = config.masked()
        assert "secret" not in masked["headers"]
        assert "X-Trace: t" in masked["headers"]
        assert masked["auth"] == "alice:***"


def test_parse_headers_ignores_blank_chunks() -> None:
    assert parse_headers(" ; A: 1 ;; ") == {"A": "1"}
