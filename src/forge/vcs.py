"""Version control initialization for freshly scaffolded projects."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import VcsError

__all__ = ["git_init"]

LOGGER = logging.getLogger(__name__)


def git_init(path: Path) -> None:
    """Run ``git init`` inside ``path``.

    Raises :class:`VcsError` when git is not installed or exits non-zero.
    """

    try:
        subprocess.run(
            ["git", "init"],
            cwd=path,
            capture_output=True,
            check=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise VcsError("git executable not found") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise VcsError(f"git init failed in {path}: {detail}") from exc
    LOGGER.info("Initialized git repository in %s", path)
