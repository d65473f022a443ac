"""Runtime settings, read from the environment once at startup."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class ConfigurationError(Exception):
    """An environment variable holds a value we cannot use."""


@dataclass(frozen=True)
class Settings:
    database_url: str = f"sqlite:///{_DATA_DIR / 'commerce.db'}"
    tx_timeout_seconds: float = 30.0
    ingest_concurrency: int = 8
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = cls()
        settings = cls(
            database_url=env.get("COMMERCE_DATABASE_URL", defaults.database_url),
            tx_timeout_seconds=_number(
                env, "COMMERCE_TX_TIMEOUT_SECONDS", defaults.tx_timeout_seconds, float
            ),
            ingest_concurrency=_number(
                env, "COMMERCE_INGEST_CONCURRENCY", defaults.ingest_concurrency, int
            ),
            log_level=env.get("COMMERCE_LOG_LEVEL", defaults.log_level).upper(),
        )
        if settings.tx_timeout_seconds <= 0:
            raise ConfigurationError("COMMERCE_TX_TIMEOUT_SECONDS must be positive")
        if settings.ingest_concurrency < 1:
            raise ConfigurationError("COMMERCE_INGEST_CONCURRENCY must be at least 1")
        return settings


def _number(env: Mapping[str, str], name: str, default, kind):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name}={raw!r} is not a valid {kind.__name__}") from exc
