"""Runtime settings, read from the environment.

A ``.env`` file in the working directory is loaded first, so local
overrides do not need to be exported by hand.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Repo root when installed in editable mode.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _get_path(name: str, fallback: Path) -> Path:
    raw_value = os.getenv(name)
    return Path(raw_value).expanduser() if raw_value else fallback


@dataclass(frozen=True)
class Settings:
    data_dir: Path = field(
        default_factory=lambda: _get_path("PHARMACART_DATA_DIR", _DEFAULT_DATA_DIR)
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("PHARMACART_LOG_LEVEL", "WARNING").upper()
    )


def load_settings() -> Settings:
    return Settings()
