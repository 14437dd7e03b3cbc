# src/todo_list/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No mutable module-level state: get_settings() caches an immutable instance.
- Bad values fall back to defaults instead of failing at startup.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
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


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path

    # ---- Storage keys ----
    tasks_key: str
    counter_key: str

    # ---- Behaviour ----
    max_text_length: int
    error_clear_seconds: float
    confirm_deletes: bool
    ephemeral: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo").strip() or "todo"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.sqlite3")

        tasks_key = _env(_k("TASKS_KEY"), "todoApp_tasks").strip() or "todoApp_tasks"
        counter_key = (
            _env(_k("COUNTER_KEY"), "todoApp_taskIdCounter").strip() or "todoApp_taskIdCounter"
        )

        max_text_length = _env_int(_k("MAX_TEXT_LENGTH"), 200)
        if max_text_length < 1:
            max_text_length = 200

        error_clear_seconds = _env_float(_k("ERROR_CLEAR_SECONDS"), 3.0)
        confirm_deletes = _env_bool(_k("CONFIRM_DELETES"), True)
        ephemeral = _env_bool(_k("EPHEMERAL"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            tasks_key=tasks_key,
            counter_key=counter_key,
            max_text_length=max_text_length,
            error_clear_seconds=error_clear_seconds,
            confirm_deletes=confirm_deletes,
            ephemeral=ephemeral,
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Real environment always wins over .env.
    load_dotenv(override=False)
    return Settings.from_env()
