"""
Environment-driven settings.

Every helper reads `os.environ` at call time, so tests can monkeypatch the
environment without reloading modules. Blank or invalid values fall back to
the documented default.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def seed_comics() -> bool:
    return _env_bool("SEED_COMICS", True)
