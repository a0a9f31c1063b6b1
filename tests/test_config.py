"""Unit tests for configuration loading."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from courier.config import DEFAULT_RPC_URL, Config
from courier.errors import ConfigError

_KEYS = (
    "COURIER_RPC_URL",
    "COURIER_RETRIES",
    "COURIER_TIMEOUT",
    "COURIER_LIFETIME",
    "COURIER_DECIMALS",
    "COURIER_CHAIN_ID",
)


def _clean_env(**extra: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in _KEYS}
    env.update(extra)
    return env


class TestConfigLoad:
    def test_defaults(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = Config.load(tmp_path / "missing.env")
        assert config == Config()
        assert config.url == DEFAULT_RPC_URL

    def test_environment(self, tmp_path: Path) -> None:
        env = _clean_env(
            COURIER_RPC_URL="http://node:8545",
            COURIER_RETRIES="1",
            COURIER_TIMEOUT="2.5",
            COURIER_LIFETIME="300",
            COURIER_DECIMALS="9",
            COURIER_CHAIN_ID="31337",
        )
        with patch.dict(os.environ, env, clear=True):
            config = Config.load(tmp_path / "missing.env")
        assert config == Config(
            url="http://node:8545", retries=1, timeout=2.5, lifetime=300, decimals=9, chain_id=31337
        )

    def test_dotenv_file(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text("COURIER_RPC_URL=http://from-file\nCOURIER_DECIMALS=6\n", encoding="utf-8")
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = Config.load(env_path)
        assert config.url == "http://from-file"
        assert config.decimals == 6

    def test_environment_beats_dotenv(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text("COURIER_RPC_URL=http://from-file\n", encoding="utf-8")
        with patch.dict(os.environ, _clean_env(COURIER_RPC_URL="http://from-env"), clear=True):
            config = Config.load(env_path)
        assert config.url == "http://from-env"

    @pytest.mark.parametrize(
        "key, value",
        [("COURIER_RETRIES", "many"), ("COURIER_TIMEOUT", "0"), ("COURIER_DECIMALS", "99")],
    )
    def test_invalid(self, tmp_path: Path, key: str, value: str) -> None:
        with patch.dict(os.environ, _clean_env(**{key: value}), clear=True):
            with pytest.raises(ConfigError):
                Config.load(tmp_path / "missing.env")


class TestOverrides:
    def test_none_values_ignored(self) -> None:
        config = Config(retries=3).with_overrides(url="http://x", retries=None)
        assert config.url == "http://x"
        assert config.retries == 3

    def test_overrides_validated(self) -> None:
        with pytest.raises(ConfigError):
            Config().with_overrides(retries=-1)
