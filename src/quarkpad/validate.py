from __future__ import annotations
from pathlib import Path

# Form field validators. Each returns an error message, or None when the value is acceptable.

NAME_REQUIRED = "Game name is required"
PATH_REQUIRED = "Path is required"
FILE_MISSING = "File does not exist"
DIR_MISSING = "Directory does not exist"


def validate_game_name(value: str) -> str | None:
    if not value.strip():
        return NAME_REQUIRED
    return None


def validate_file_path(value: str) -> str | None:
    if not value.strip():
        return PATH_REQUIRED
    if not Path(value).is_file():
        return FILE_MISSING
    return None


def validate_dir_path(value: str) -> str | None:
    if not value.strip():
        return PATH_REQUIRED
    if not Path(value).is_dir():
        return DIR_MISSING
    return None
