# src/tag_agenda/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Environment variables (prefix AGENDA_):
- AGENDA_APP_NAME    display name (default: agenda)
- AGENDA_LOG_LEVEL   console log level (default: WARNING)
- AGENDA_DATA_DIR    local data directory for logs (default: .local/agenda)
- AGENDA_LOG_FILE    also write a full log file under the data dir (default: true)
- AGENDA_CLOCK       initial clock "dd.mm.yy hh:mm" (default: now)
- AGENDA_TAG_MARKER  character printed before each tag (default: #)
- AGENDA_PROMPT      console prompt (default: "agenda> ")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "AGENDA"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_opt(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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
    data_dir: Path
    log_to_file: bool

    # ---- Agenda ----
    initial_clock: Optional[str]
    tag_marker: str

    # ---- Console ----
    prompt: str

    @staticmethod
    def from_env() -> "Settings":
        marker = _env(_k("TAG_MARKER"), "#").strip() or "#"
        return Settings(
            app_name=_env(_k("APP_NAME"), "agenda"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/agenda")),
            log_to_file=_env_bool(_k("LOG_FILE"), True),
            initial_clock=_env_opt(_k("CLOCK")),
            tag_marker=marker[0],
            prompt=_env(_k("PROMPT"), "agenda> "),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
