from __future__ import annotations
import os
from pathlib import Path

import appdirs


APP_ID = "quarkpad" # name of the per-user data directory
DATA_FILE_NAME = "data.toml" # library document inside it
DATA_DIR_ENV = "QUARKPAD_DATA_DIR" # overrides the platform data dir


def app_data_dir(override: Path | None = None) -> Path:
    """Return (and create) the per-user application-data directory."""
    override = override or os.environ.get(DATA_DIR_ENV)
    if override:
        path = Path(override)
    else:
        path = Path(appdirs.user_data_dir(APP_ID, False))
    path.mkdir(parents=True, exist_ok=True)
    return path


def data_file_path(data_dir: Path | None = None) -> Path:
    return app_data_dir(data_dir) / DATA_FILE_NAME
