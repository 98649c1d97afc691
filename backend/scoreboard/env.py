from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv


def _candidates() -> List[Path]:
    explicit = os.getenv("SCOREBOARD_ENV_FILE", "").strip()
    if explicit:
        return [Path(explicit)]
    return [
        Path(__file__).resolve().parents[1] / ".env",
        Path(__file__).resolve().parents[2] / ".env",
    ]


def load_env() -> List[Path]:
    """Load ``.env`` files and return the ones found.

    ``SCOREBOARD_ENV_FILE`` points at a single file and disables the lookup in
    the backend directory and repository root. Variables already set in the
    environment win over file values.
    """
    loaded: List[Path] = []
    for path in _candidates():
        if path.is_file():
            load_dotenv(path)
            loaded.append(path)
    if not loaded and not os.getenv("SCOREBOARD_ENV_FILE"):
        load_dotenv()
    return loaded

