"""Runtime settings, read from ``DEPHEALTH_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

import structlog

log = structlog.get_logger("dephealth.config")

_DEFAULT_PYPI_URL = "https://pypi.org"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("config.invalid_value", name=name, value=raw, default=default)
        return default
    if value <= 0:
        log.warning("config.invalid_value", name=name, value=raw, default=default)
        return default
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("config.invalid_value", name=name, value=raw, default=default)
        return default
    if value < 1:
        log.warning("config.invalid_value", name=name, value=raw, default=default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Tunables for registry lookups and external tool invocation."""

    pypi_url: str = _DEFAULT_PYPI_URL
    http_timeout: float = 10.0
    command_timeout: float = 120.0
    clone_timeout: float = 300.0
    lookup_concurrency: int = 10
    npm_bin: str = "npm"
    git_bin: str = "git"
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment, falling back to defaults."""
        origins = os.environ.get("DEPHEALTH_CORS_ORIGINS", "http://localhost:3000")
        return cls(
            pypi_url=os.environ.get("DEPHEALTH_PYPI_URL", _DEFAULT_PYPI_URL).rstrip("/"),
            http_timeout=_env_float("DEPHEALTH_HTTP_TIMEOUT", 10.0),
            command_timeout=_env_float("DEPHEALTH_COMMAND_TIMEOUT", 120.0),
            clone_timeout=_env_float("DEPHEALTH_CLONE_TIMEOUT", 300.0),
            lookup_concurrency=_env_int("DEPHEALTH_LOOKUP_CONCURRENCY", 10),
            npm_bin=os.environ.get("DEPHEALTH_NPM_BIN", "npm"),
            git_bin=os.environ.get("DEPHEALTH_GIT_BIN", "git"),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )
