"""Scaffold new projects from named architecture templates.

Built-in templates ship with the package and are layered with the user's own
templates from ``local_templates.json`` in the per-user config directory. The
resolved template is then materialized on disk by :class:`ProjectScaffolder`,
both programmatically and via the ``forge`` command line interface.
"""

from __future__ import annotations

from .config import ForgeSettings
from .content import FileKind, seed_content
from .errors import (
    ConfigError,
    DestinationExists,
    EditorError,
    ForgeError,
    IoError,
    KeyNotFound,
    ValidationError,
    VcsError,
)
from .models import Template, validate_template
from .registry import AddResult, TemplateRegistry
from .scaffold import ProjectScaffolder, ScaffoldReport
from .store import TemplateStore

__all__ = [
    "AddResult",
    "ConfigError",
    "DestinationExists",
    "EditorError",
    "FileKind",
    "ForgeError",
    "ForgeSettings",
    "IoError",
    "KeyNotFound",
    "ProjectScaffolder",
    "ScaffoldReport",
    "Template",
    "TemplateRegistry",
    "TemplateStore",
    "ValidationError",
    "VcsError",
    "seed_content",
    "validate_template",
]

__version__ = "0.1.0"
