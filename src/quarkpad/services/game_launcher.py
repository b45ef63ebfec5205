from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..core.models import Game, Settings

log = logging.getLogger(__name__)


# Every Direct3D / d3dcompiler / d3dx / dxgi / nvapi DLL is forced native,
# and winemenubuilder is disabled. Must match what umu/proton expect.
WINEDLLOVERRIDES = (
    "d3d10core,d3d11,d3d12,d3d12core,d3d8,d3d9,"
    "d3dcompiler_33,d3dcompiler_34,d3dcompiler_35,d3dcompiler_36,"
    "d3dcompiler_37,d3dcompiler_38,d3dcompiler_39,d3dcompiler_40,"
    "d3dcompiler_41,d3dcompiler_42,d3dcompiler_43,d3dcompiler_46,"
    "d3dcompiler_47,d3dx10,d3dx10_33,d3dx10_34,d3dx10_35,d3dx10_36,"
    "d3dx10_37,d3dx10_38,d3dx10_39,d3dx10_40,d3dx10_41,d3dx10_42,"
    "d3dx10_43,d3dx11_42,d3dx11_43,d3dx9_24,d3dx9_25,d3dx9_26,"
    "d3dx9_27,d3dx9_28,d3dx9_29,d3dx9_30,d3dx9_31,d3dx9_32,"
    "d3dx9_33,d3dx9_34,d3dx9_35,d3dx9_36,d3dx9_37,d3dx9_38,"
    "d3dx9_39,d3dx9_40,d3dx9_41,d3dx9_42,d3dx9_43,"
    "dxgi,nvapi,nvapi64,nvofapi64=n;winemenubuilder="
)

# Values that do not depend on the game or settings.
STATIC_ENV = {
    "WINEDEBUG": "-all",
    "DXVK_LOG_LEVEL": "debug",
    "PROTON_LOG": "1",
    "UMU_LOG": "debug",
    "WINEARCH": "win64",
    "WINEESYNC": "0",
    "WINEFSYNC": "1",
    "WINE_FULLSCREEN_FSR": "1",
    "DXVK_NVAPIHACK": "0",
    "DXVK_ENABLE_NVAPI": "1",
    "WINEDLLOVERRIDES": WINEDLLOVERRIDES,
    "WINE_LARGE_ADDRESS_AWARE": "1",
    "STORE": "none",
    "GAMEID": "umu-default",
    "PROTON_VERB": "run",
}

UMU_RUN = "umu-run"


class LaunchError(Exception):
    pass


class InvalidExePath(LaunchError):
    def __init__(self, exe_path: str):
        super().__init__(f"Executable path has no file name: {exe_path!r}")
        self.exe_path = exe_path


class SpawnFailed(LaunchError):
    def __init__(self, program: str, os_error: OSError | ValueError):
        super().__init__(f"Failed to start {program}: {os_error}")
        self.program = program
        self.os_error = os_error


@dataclass(frozen=True)
class LaunchCommand:
    program: str
    args: list[str]
    cwd: str
    env: dict[str, str]

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


def wine_binary(settings: Settings) -> Path:
    return Path(settings.proton_path) / "files" / "bin" / "wine"


def launcher_binary(settings: Settings) -> Path:
    return Path(settings.umu_path) / UMU_RUN


def _split_exe_path(exe_path: str) -> tuple[Path, str]:
    if not exe_path.strip() or exe_path.endswith(("/", os.sep)):
        raise InvalidExePath(exe_path)
    p = Path(exe_path)
    if p.name in {"", ".", ".."} or p.is_dir():
        raise InvalidExePath(exe_path)
    return p.parent, p.name


def compat_environment(game: Game, settings: Settings) -> dict[str, str]:
    """The variables layered on top of the parent environment for every launch."""
    env = {
        "WINEPREFIX": game.wine_prefix,
        "PROTONPATH": settings.proton_path,
        "GAME_NAME": game.name,
        "WINE": str(wine_binary(settings)),
    }
    env.update(STATIC_ENV)
    return env


def build_launch_command(game: Game, settings: Settings) -> LaunchCommand:
    exe_dir, exe_name = _split_exe_path(game.exe_path)
    env = dict(os.environ)
    env.update(compat_environment(game, settings))
    return LaunchCommand(
        program=str(launcher_binary(settings)),
        args=[exe_name],
        cwd=str(exe_dir),
        env=env,
    )


def launch_game(game: Game, settings: Settings) -> subprocess.Popen:
    """Start the game under umu-run. The child is not waited on."""
    cmd = build_launch_command(game, settings)
    log.info("Launch %s: %s (cwd=%s)", game.name, cmd.argv, cmd.cwd)
    try:
        return subprocess.Popen(cmd.argv, cwd=cmd.cwd, env=cmd.env)
    except (OSError, ValueError) as exc:
        # ValueError: NUL byte in an argument, cwd or env value
        log.exception("Failed to launch game: %s", game.name)
        raise SpawnFailed(cmd.program, exc) from exc
