from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def _bool_env(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _list_env(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [value.strip() for value in raw.split(",") if value.strip()]


@dataclass(frozen=True)
class Settings:
    debug_mode: bool
    log_level: str
    csv_filename: str
    max_upload_bytes: int
    cors_origins: List[str]

    @classmethod
    def from_env(cls) -> "Settings":
        debug_mode = _bool_env("DEBUG_MODE")
        return cls(
            debug_mode=debug_mode,
            log_level=os.getenv(
                "SCOREBOARD_LOG_LEVEL", "DEBUG" if debug_mode else "INFO"
            ).strip().upper(),
            csv_filename=os.getenv("SCOREBOARD_CSV_FILENAME", "match_stats.csv").strip(),
            max_upload_bytes=int(
                os.getenv("SCOREBOARD_MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))
            ),
            cors_origins=_list_env("SCOREBOARD_CORS_ORIGINS") or list(DEFAULT_CORS_ORIGINS),
        )
