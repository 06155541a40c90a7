"""
Process configuration read from environment variables.

Values are read once at startup into `Settings` and kept on `app.state`.
Blank or malformed numeric values fall back to their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    # asyncpg rejects libpq's sslmode in the DSN query string.
    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


ENRICH_STRATEGIES = ("batched", "fanout")


def enrich_strategy() -> str:
    raw = os.environ.get("ENRICH_STRATEGY", "").strip().lower()
    return raw if raw in ENRICH_STRATEGIES else "batched"


def cors_origins() -> tuple[str, ...]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_min_size: int = 1
    pool_max_size: int = 5
    acquire_timeout_s: float = 5.0
    command_timeout_s: float = 30.0
    enrich_strategy: str = "batched"
    enrich_concurrency: int = 8
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @classmethod
    def from_env(cls) -> "Settings":
        pool_max_size = max(1, _env_int("DB_POOL_MAX_SIZE", 5))
        return cls(
            database_url=database_url(),
            pool_min_size=min(max(0, _env_int("DB_POOL_MIN_SIZE", 1)), pool_max_size),
            pool_max_size=pool_max_size,
            acquire_timeout_s=_env_float("DB_ACQUIRE_TIMEOUT_S", 5.0),
            command_timeout_s=_env_float("DB_COMMAND_TIMEOUT_S", 30.0),
            enrich_strategy=enrich_strategy(),
            enrich_concurrency=max(1, _env_int("ENRICH_CONCURRENCY", 8)),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
            host=_env_str("API_HOST", "127.0.0.1"),
            port=_env_int("API_PORT", 8000),
            cors_origins=cors_origins(),
        )
