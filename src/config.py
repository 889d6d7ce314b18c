"""Settings loaded from environment variables (+ the .env nearest the working directory).

One Settings object per invocation; the CLI builds it at startup and the
--file option can still override the tasks path afterwards.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TODO"
DEFAULT_TASKS_FILE = Path.home() / ".tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True)
class Settings:
    tasks_file: Path
    log_level: str
    log_file: Optional[Path]

    @staticmethod
    def from_env(dotenv: bool = True) -> "Settings":
        env_file = find_dotenv(usecwd=True) if dotenv else ""
        if env_file:
            load_dotenv(env_file, override=False)
        return Settings(
            tasks_file=_env_path(_k("TASKS_FILE"), DEFAULT_TASKS_FILE),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_file=_env_path(_k("LOG_FILE"), None),
        )
