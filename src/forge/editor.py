"""Launch an interactive editor on a template file."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional

from .errors import EditorError

__all__ = ["EDITOR_ENV_VARS", "editor_candidates", "is_wsl", "open_in_editor"]

LOGGER = logging.getLogger(__name__)

EDITOR_ENV_VARS = ("FORGE_EDITOR", "VISUAL", "EDITOR")

Which = Callable[[str], Optional[str]]


def is_wsl(proc_version: Path = Path("/proc/version")) -> bool:
    """Return ``True`` when running under the Windows Subsystem for Linux."""

    try:
        return "microsoft" in proc_version.read_text(encoding="utf-8").lower()
    except OSError:
        return False


def _wsl_to_windows(path: Path) -> str:
    try:
        result = subprocess.run(
            ["wslpath", "-w", str(path)],
            capture_output=True,
            check=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return str(path)
    return result.stdout.strip() or str(path)


def editor_candidates(
    path: Path,
    environ: Mapping[str, str] | None = None,
    *,
    which: Which = shutil.which,
    platform: str | None = None,
) -> list[list[str]]:
    """Return editor command lines to try, in priority order.

    ``$FORGE_EDITOR``, ``$VISUAL`` and ``$EDITOR`` come first, then the
    installed fallbacks: VS Code, vim, nano and, on Windows, notepad.
    """

    env = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform
    candidates: list[list[str]] = []

    for name in EDITOR_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            candidates.append([*shlex.split(value), str(path)])

    if which("code"):
        target = _wsl_to_windows(path) if is_wsl() else str(path)
        candidates.append(["code", "--wait", target])
    for fallback in ("vim", "nano"):
        if which(fallback):
            candidates.append([fallback, str(path)])
    if platform.startswith("win"):
        candidates.append(["notepad.exe", str(path)])

    return candidates


def open_in_editor(
    path: Path,
    environ: Mapping[str, str] | None = None,
    *,
    which: Which = shutil.which,
    platform: str | None = None,
) -> None:
    """Open ``path`` in the first editor that exits successfully.

    Raises :class:`EditorError` when every candidate fails or none is available.
    """

    for command in editor_candidates(path, environ, which=which, platform=platform):
        try:
            result = subprocess.run(command)
        except OSError as exc:
            LOGGER.warning("Failed to launch editor %s: %s", command[0], exc)
            continue
        if result.returncode == 0:
            return
        LOGGER.warning("Editor %s exited with status %d", command[0], result.returncode)

    raise EditorError(f"failed to open editor for {path}")
