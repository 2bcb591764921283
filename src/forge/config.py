"""Location of the per-user template store."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigError

__all__ = ["APP_NAME", "OVERRIDES_FILENAME", "ForgeSettings"]

APP_NAME = "forge"
OVERRIDES_FILENAME = "local_templates.json"


@dataclass(frozen=True, slots=True)
class ForgeSettings:
    """Filesystem locations used by the template store.

    Attributes
    ----------
    templates_dir:
        Directory holding the consolidated override file and any legacy
        per-key template files awaiting migration. It does not need to exist.
    """

    templates_dir: Path

    @property
    def overrides_file(self) -> Path:
        """Path of the consolidated ``local_templates.json`` file."""

        return self.templates_dir / OVERRIDES_FILENAME

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        platform: str | None = None,
    ) -> "ForgeSettings":
        """Derive the user template directory from the environment.

        Parameters
        ----------
        environ:
            Environment mapping to consult, defaults to :data:`os.environ`.
        platform:
            Platform identifier in :data:`sys.platform` form, used to choose
            between ``APPDATA`` and ``XDG_CONFIG_HOME``.
        """

        env = os.environ if environ is None else environ
        platform = sys.platform if platform is None else platform

        if platform.startswith("win"):
            base = env.get("APPDATA")
        else:
            base = env.get("XDG_CONFIG_HOME")

        if base:
            config_root = Path(base)
        elif env.get("HOME"):
            config_root = Path(env["HOME"]) / ".config"
        else:
            raise ConfigError("could not determine user config directory for templates")

        return cls(templates_dir=config_root / APP_NAME / "templates")
