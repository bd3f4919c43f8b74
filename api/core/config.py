"""
Environment-driven settings.

All configuration comes from process environment variables. `main.run()`
loads a local `.env` file first (python-dotenv), so the same names work in
development and in containers.
"""

from __future__ import annotations

import os
import ssl
from dataclasses import dataclass
from pathlib import Path


DEFAULT_PORT = 3000
DEFAULT_DB_PORT = 5432
DEFAULT_POOL_SIZE = 10
DEFAULT_CA_PATH = "ca.pem"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


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


def listen_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def listen_port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class DatabaseSettings:
    host: str
    port: int
    user: str
    password: str
    database: str
    ssl_ca: str
    ssl_ca_path: str
    pool_size: int = DEFAULT_POOL_SIZE
    acquire_timeout: float = 10.0
    command_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> DatabaseSettings:
        pool_size = _env_int("DB_POOL_SIZE", DEFAULT_POOL_SIZE)
        return cls(
            host=_env_str("DB_HOST", "localhost"),
            port=_env_int("DB_PORT", DEFAULT_DB_PORT),
            user=_env_str("DB_USER"),
            # Passwords are taken verbatim.
            password=os.environ.get("DB_PASSWORD", ""),
            database=_env_str("DB_DATABASE"),
            ssl_ca=os.environ.get("DB_SSL_CA", "").strip(),
            ssl_ca_path=_env_str("DB_SSL_CA_PATH", DEFAULT_CA_PATH),
            # The pool never exceeds DEFAULT_POOL_SIZE connections.
            pool_size=min(pool_size, DEFAULT_POOL_SIZE) if pool_size > 0 else DEFAULT_POOL_SIZE,
            acquire_timeout=_env_float("DB_ACQUIRE_TIMEOUT", 10.0),
            command_timeout=_env_float("DB_COMMAND_TIMEOUT", 30.0),
        )


def build_ssl_context(settings: DatabaseSettings) -> ssl.SSLContext:
    """
    TLS is mandatory for the store connection.

    The CA certificate is taken from `DB_SSL_CA` (inline PEM) and falls back to
    the file at `DB_SSL_CA_PATH`. A missing CA is a startup error.
    """
    if settings.ssl_ca:
        # Containers often pass PEMs with escaped newlines.
        return ssl.create_default_context(cadata=settings.ssl_ca.replace("\\n", "\n"))

    ca_file = Path(settings.ssl_ca_path)
    if not ca_file.is_file():
        raise RuntimeError(
            f"No CA certificate: set DB_SSL_CA or provide the file {settings.ssl_ca_path!r}."
        )
    return ssl.create_default_context(cafile=str(ca_file))
