from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "Timeboard"
APP_AUTHOR = "Timeboard"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
LOG_DIR = DATA_DIR / "logs"
EXPORT_DIR = DATA_DIR / "exports"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
