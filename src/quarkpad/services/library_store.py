from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

import tomli_w

from ..core.models import LibraryData, ModelFieldError
from ..paths import data_file_path

log = logging.getLogger(__name__)


class LibraryLoadError(RuntimeError):
    """The library document exists but cannot be trusted."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not read library file {path}: {reason}")
        self.path = path
        self.reason = reason


def load_library(path: Path | None = None) -> LibraryData:
    """
    Read the library document.
    A missing or blank file is a fresh install and yields an empty library;
    a file that exists but does not parse raises LibraryLoadError.
    """
    path = path or data_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.info("No library file at %s, starting empty", path)
        return LibraryData()
    except UnicodeDecodeError as exc:
        log.error("Library file %s is not valid UTF-8", path)
        raise LibraryLoadError(path, str(exc)) from exc
    except OSError as exc:
        log.error("Cannot read library file %s: %s", path, exc)
        raise LibraryLoadError(path, str(exc)) from exc

    if not text.strip():
        log.info("Library file %s is empty, starting empty", path)
        return LibraryData()

    try:
        data = LibraryData.from_dict(tomllib.loads(text))
    except (tomllib.TOMLDecodeError, ModelFieldError) as exc:
        log.error("Library file %s is corrupt: %s", path, exc)
        raise LibraryLoadError(path, str(exc)) from exc

    log.info("Loaded library from %s (%d games)", path, len(data.games))
    return data


def save_library(data: LibraryData, path: Path | None = None) -> None:
    """Rewrite the whole document; the previous file stays intact until the new one is complete."""
    path = path or data_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = path.with_name(path.name + ".tmp")
    try:
        with tmp.open("wb") as f:
            tomli_w.dump(data.to_dict(), f)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    log.info("Saved library to %s (%d games)", path, len(data.games))
