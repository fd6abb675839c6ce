from __future__ import annotations

import logging
import ntpath
import os
import platform
import posixpath
from typing import Callable, List, Mapping, Optional

from .fs import path_exists

logger = logging.getLogger(__name__)


def normalize_system(system: str) -> str:
    s = system.lower()
    return {
        "win32": "windows",
        "cygwin": "windows",
        "macos": "darwin",
        "osx": "darwin",
    }.get(s, s)


def _under(environ: Mapping[str, str], var: str, rel: str, *, join: Callable[..., str]) -> str:
    """Join ``rel`` under an environment root; an unset root yields "" (never exists)."""
    root = environ.get(var) or ""
    if not root:
        return ""
    return join(root, rel)


def candidate_paths(system: str, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Ordered install-location guesses for one platform."""

    env = os.environ if environ is None else environ
    s = normalize_system(system)

    if s == "windows":
        return [
            r"C:\Program Files\Stardew Valley",
            r"C:\Program Files (x86)\Stardew Valley",
            _under(env, "LocalAppData", "StardewValley", join=ntpath.join),
            r"D:\Games\Stardew Valley",
        ]
    if s == "darwin":
        return [
            "/Applications/Stardew Valley.app/Contents/MacOS",
            _under(env, "HOME", "Applications/Stardew Valley.app/Contents/MacOS", join=posixpath.join),
        ]
    if s == "linux":
        return [
            _under(env, "HOME", ".local/share/Steam/steamapps/common/Stardew Valley", join=posixpath.join),
            _under(env, "HOME", ".steam/steamapps/common/Stardew Valley", join=posixpath.join),
            "/opt/stardew-valley",
        ]
    return []


def detect_game_path(
    system: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    exists: Callable[[str], bool] = path_exists,
) -> Optional[str]:
    sysname = system or platform.system()
    for candidate in candidate_paths(sysname, environ):
        if candidate and exists(candidate):
            logger.info("Detected game install at %s", candidate)
            return candidate

    logger.info("No game install detected for platform %s", sysname)
    return None
