# src/todo_cli/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app, built once in the CLI entrypoint.
- Everything below the CLI receives settings by injection (tests pass a SimpleNamespace).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

STORAGE_BACKENDS = ("file", "memory")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


ENV_VARS = {
    _k("APP_NAME"): "Program name shown in help and logs (default: todo).",
    _k("LOG_LEVEL"): "Console logging level (default: WARNING).",
    _k("DATA_DIR"): "Local data directory (default: .local/todo).",
    _k("STORE_PATH"): "JSON store path (default: <data_dir>/store.json).",
    _k("STORAGE"): "Storage backend: file or memory (default: file).",
    _k("BCRYPT_ROUNDS"): "bcrypt cost factor, 4..31 (default: 12).",
    _k("LOG_FILE"): "Also write <data_dir>/todo.log (true/false, default: true).",
}


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Storage ----
    storage_backend: str
    data_dir: Path
    store_path: Path

    # ---- Security ----
    bcrypt_rounds: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo").strip() or "todo"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_to_file = _env_bool(_k("LOG_FILE"), True)

        storage_backend = _env(_k("STORAGE"), "file").strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            storage_backend = "file"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "store.json")

        # bcrypt accepts cost factors 4..31.
        bcrypt_rounds = min(31, max(4, _env_int(_k("BCRYPT_ROUNDS"), 12)))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            storage_backend=storage_backend,
            data_dir=data_dir,
            store_path=store_path,
            bcrypt_rounds=bcrypt_rounds,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings; .env is loaded on first use and never overrides real env vars."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
