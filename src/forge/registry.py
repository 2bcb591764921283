"""Add, save and remove user templates in the consolidated override file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .editor import open_in_editor
from .models import Template, validate_template
from .store import TemplateStore

__all__ = ["AddResult", "TemplateRegistry", "skeleton_template"]

LOGGER = logging.getLogger(__name__)

EditorLauncher = Callable[[Path], None]


def skeleton_template(key: str) -> Template:
    """Return the starter template written by :meth:`TemplateRegistry.add`."""

    return Template(
        name=f"{key} Template",
        description="Edit this description",
        structure=["src", "tests"],
        files={".gitignore": "backend"},
    )


@dataclass(frozen=True, slots=True)
class AddResult:
    """Outcome of :meth:`TemplateRegistry.add`."""

    key: str
    path: Path
    created: bool


class TemplateRegistry:
    """Mutations of the user's consolidated template file.

    Every method performs its own read-modify-write cycle against the file;
    built-in templates are never modified.
    """

    def __init__(self, store: TemplateStore, editor: EditorLauncher = open_in_editor) -> None:
        self.store = store
        self.editor = editor

    def save(self, key: str, template: Template) -> None:
        """Validate ``template`` and store it under ``key``.

        A missing or corrupt override file is treated as empty so that a first
        save always succeeds.
        """

        validate_template(template)
        templates = self.store.load_overrides(strict=False)
        templates[key] = template
        self.store.write_overrides(templates)
        LOGGER.info("Saved template '%s' to %s", key, self.store.overrides_file)

    def remove(self, key: str) -> bool:
        """Remove ``key`` from the override file; ``False`` if it was not there."""

        if not self.store.overrides_file.is_file():
            return False
        templates = self.store.load_overrides(strict=True)
        if key not in templates:
            return False
        del templates[key]
        self.store.write_overrides(templates)
        LOGGER.info("Removed template '%s' from %s", key, self.store.overrides_file)
        return True

    def add(self, key: str, *, edit: bool = True) -> AddResult:
        """Create a skeleton for ``key`` or open the existing entry for editing.

        Existing templates, built-in or user defined, are never replaced; the
        override file is simply handed to the editor.
        """

        path = self.store.overrides_file
        created = key not in self.store.resolve()
        if created:
            self.save(key, skeleton_template(key))
        if edit:
            self.editor(path)
        return AddResult(key=key, path=path, created=created)
