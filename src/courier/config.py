"""
Courier configuration.

Settings come from environment variables, after ``~/.courier/.env`` has been
loaded into the environment with python-dotenv.  CLI options declared with
``envvar=`` take precedence over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

COURIER_DIR = Path.home() / ".courier"
COURIER_ENV = COURIER_DIR / ".env"

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_RETRIES = 5
DEFAULT_TIMEOUT = 30.0
DEFAULT_LIFETIME = 60
DEFAULT_DECIMALS = 18


def _env_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Config:
    url: str = DEFAULT_RPC_URL
    retries: int = DEFAULT_RETRIES
    timeout: float = DEFAULT_TIMEOUT
    lifetime: int = DEFAULT_LIFETIME
    decimals: int = DEFAULT_DECIMALS
    chain_id: Optional[int] = None

    @classmethod
    def load(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Build a Config from the environment.

        Args:
            env_path: dotenv file to load first (default: ~/.courier/.env)

        Raises:
            ConfigError: If a numeric setting cannot be parsed
        """
        env_path = env_path or COURIER_ENV
        if env_path.exists():
            load_dotenv(env_path, override=False)

        config = cls(
            url=os.environ.get("COURIER_RPC_URL", DEFAULT_RPC_URL),
            retries=_env_number("COURIER_RETRIES", DEFAULT_RETRIES, int),
            timeout=_env_number("COURIER_TIMEOUT", DEFAULT_TIMEOUT, float),
            lifetime=_env_number("COURIER_LIFETIME", DEFAULT_LIFETIME, int),
            decimals=_env_number("COURIER_DECIMALS", DEFAULT_DECIMALS, int),
            chain_id=_env_number("COURIER_CHAIN_ID", None, int),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.retries < 0:
            raise ConfigError("retries must not be negative")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.lifetime <= 0:
            raise ConfigError("lifetime must be positive")
        if not 0 <= self.decimals <= 77:
            raise ConfigError("decimals must be between 0 and 77")

    def with_overrides(self, **changes) -> "Config":
        """Return a copy with the non-None values in ``changes`` applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        config = replace(self, **changes)
        config.validate()
        return config
