from __future__ import annotations
import argparse
import functools
import logging
import os
from pathlib import Path

from .logging_setup import setup_logging
from .paths import data_file_path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="quarkpad", description="Run Windows games through umu and Proton")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding data.toml")
    parser.add_argument("--debug", action="store_true", help="Verbose logging, mirrored to quarkpad.log")
    args = parser.parse_args(argv)

    data_file = data_file_path(args.data_dir)

    if args.debug:
        setup_logging(logging.DEBUG, log_file=data_file.parent / "quarkpad.log")
    else:
        setup_logging(logging.INFO)
    log = logging.getLogger(__name__)

    # Kivy parses sys.argv on import unless told not to; our flags are already handled
    os.environ.setdefault("KIVY_NO_ARGS", "1")
    from .controller import LibraryController
    from .services.library_store import LibraryLoadError, load_library, save_library

    try:
        data = load_library(data_file)
    except LibraryLoadError as exc:
        log.error("%s", exc)
        log.error("Fix or move the file aside; Quarkpad will not overwrite a library it cannot read.")
        return 1

    # opens the window, so only once there is a library to show
    from .ui.app import QuarkpadApp

    controller = LibraryController(data, save=functools.partial(save_library, path=data_file))
    QuarkpadApp(controller).run()
    return 0
