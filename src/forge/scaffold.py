"""Materialize a resolved template as a project directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .content import seed_content
from .errors import DestinationExists, IoError, ValidationError, VcsError
from .models import Template, is_safe_relative_path, validate_template
from .template import TemplateRenderer
from .vcs import git_init as default_git_init

__all__ = ["ProjectScaffolder", "README_TEMPLATE", "ScaffoldReport"]

LOGGER = logging.getLogger(__name__)


README_TEMPLATE = """# {{ project }}

{{ description|strip }}

Scaffolded by forge from the **{{ template_name }}** architecture.

## Structure

{{ structure|sorted|bullets }}
"""


@dataclass(slots=True)
class ScaffoldReport:
    """What :meth:`ProjectScaffolder.create` did.

    ``git_initialized`` is ``None`` when no repository was requested and
    ``False`` when initialization failed; ``vcs_error`` then holds the reason.
    """

    path: Path
    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    readme: bool = False
    git_initialized: bool | None = None
    vcs_error: str | None = None


def _is_populated(path: Path) -> bool:
    if not path.exists():
        return False
    if not path.is_dir():
        return True
    try:
        return any(path.iterdir())
    except OSError as exc:
        raise IoError(path, f"failed to inspect destination ({exc.strerror or exc})") from exc


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IoError(path, f"failed to create directory ({exc.strerror or exc})") from exc


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise IoError(path, f"failed to write file ({exc.strerror or exc})") from exc


class ProjectScaffolder:
    """Create a project's directories and seed files from a :class:`Template`.

    Creation is best effort: when a step fails an :class:`IoError` is raised
    and whatever was created before it stays on disk.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        vcs_init: Callable[[Path], None] = default_git_init,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.vcs_init = vcs_init

    def render_readme(self, name: str, template: Template) -> str:
        context = {
            "project": name,
            "template_name": template.name,
            "description": template.description,
            "structure": list(dict.fromkeys(template.structure)),
        }
        return self.renderer.render_string(README_TEMPLATE, context)

    def create(
        self,
        name: str,
        template: Template,
        *,
        git_init: bool = False,
        readme_gen: bool = True,
        force: bool = False,
        base_dir: str | Path | None = None,
    ) -> ScaffoldReport:
        """Create project ``name`` inside ``base_dir`` (the working directory by default).

        Raises :class:`DestinationExists` without touching the disk when the
        destination already holds something and ``force`` is false. With
        ``force`` only the template's own paths are written; unrelated files
        are left alone.
        """

        if not name.strip():
            raise ValueError("project name must not be empty")
        if not is_safe_relative_path(name):
            raise ValidationError(
                f"project name '{name}' must be relative and must not contain '..'",
                path=name,
            )
        validate_template(template)

        base = Path.cwd() if base_dir is None else Path(base_dir)
        destination = base / name
        if not force and _is_populated(destination):
            raise DestinationExists(destination)

        report = ScaffoldReport(path=destination)
        _make_dir(destination)

        for entry in dict.fromkeys(template.structure):
            _make_dir(destination / entry)
            report.directories.append(entry)
            LOGGER.debug("Created directory %s", destination / entry)

        for relative_path, kind in template.files.items():
            target = destination / relative_path
            _make_dir(target.parent)
            _write_file(target, seed_content(relative_path, kind))
            report.files.append(relative_path)
            LOGGER.debug("Wrote %s (%s)", target, kind)

        if readme_gen:
            readme_path = destination / "README.md"
            if readme_path.exists() and not force:
                LOGGER.info("Keeping existing %s", readme_path)
            else:
                _write_file(readme_path, self.render_readme(name, template))
                report.readme = True

        if git_init:
            try:
                self.vcs_init(destination)
            except VcsError as exc:
                LOGGER.warning("Version control initialization failed: %s", exc)
                report.git_initialized = False
                report.vcs_error = str(exc)
            else:
                report.git_initialized = True

        LOGGER.info("Created project '%s' from template '%s' at %s", name, template.name, destination)
        return report
