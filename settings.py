from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_COSMOS_ENDPOINT_ENV = "COSMOS_ENDPOINT"
_COSMOS_KEY_ENV = "COSMOS_KEY"
_COSMOS_DATABASE_ENV = "COSMOS_DATABASE"
_COSMOS_CONTAINER_ENV = "COSMOS_CONTAINER"
_HOST_ENV = "HOST"
_PORT_ENV = "PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_BACKEND_ENV = "RECORD_STORE_BACKEND"
_MEMORY_PATH_ENV = "MEMORY_STORE_PATH"

STORE_BACKENDS = ("cosmos", "memory")


@dataclass(frozen=True)
class Settings:
    cosmos_endpoint: Optional[str]
    cosmos_key: Optional[str]
    cosmos_database: Optional[str]
    cosmos_container: Optional[str]
    host: str
    port: int
    log_level: str
    store_backend: str
    memory_store_path: Optional[str]


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_backend(default: str) -> str:
    candidate = _read_str_env(_BACKEND_ENV, default).lower()
    return candidate if candidate in STORE_BACKENDS else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        cosmos_endpoint=_read_optional_env(_COSMOS_ENDPOINT_ENV),
        cosmos_key=_read_optional_env(_COSMOS_KEY_ENV),
        cosmos_database=_read_optional_env(_COSMOS_DATABASE_ENV),
        cosmos_container=_read_optional_env(_COSMOS_CONTAINER_ENV),
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_port(3000),
        log_level=_read_log_level("INFO"),
        store_backend=_read_backend("cosmos"),
        memory_store_path=_read_optional_env(_MEMORY_PATH_ENV),
    )
