"""Template resolution: built-ins, legacy migration and user overrides."""

from __future__ import annotations

import contextlib
import logging
import os
from importlib import resources
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .config import OVERRIDES_FILENAME, ForgeSettings
from .errors import ConfigError, IoError, KeyNotFound
from .models import TEMPLATE_MAP_ADAPTER, Template, TemplateMap, dump_template_map

__all__ = ["BUILTIN_RESOURCE", "TemplateStore", "load_builtin_templates"]

LOGGER = logging.getLogger(__name__)

BUILTIN_RESOURCE = "architectures.json"


def _parse_template_map(data: bytes | str, source: str) -> TemplateMap:
    try:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
    except UnicodeDecodeError as exc:
        raise ConfigError(
            f"failed to parse templates from {source}: not valid UTF-8 ({exc.reason})"
        ) from exc
    try:
        return TEMPLATE_MAP_ADAPTER.validate_json(text)
    except PydanticValidationError as exc:
        raise ConfigError(f"failed to parse templates from {source}: {exc}") from exc


def load_builtin_templates() -> TemplateMap:
    """Parse the template set embedded in the package."""

    asset = resources.files("forge").joinpath("data").joinpath(BUILTIN_RESOURCE)
    text = asset.read_text(encoding="utf-8")
    return _parse_template_map(text, f"embedded {BUILTIN_RESOURCE}")


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise IoError(path, f"failed to read ({exc.strerror or exc})") from exc


def _parse_legacy(path: Path, data: bytes) -> TemplateMap | None:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    try:
        return TEMPLATE_MAP_ADAPTER.validate_json(text)
    except PydanticValidationError:
        pass
    try:
        return {path.stem: Template.model_validate_json(text)}
    except PydanticValidationError:
        return None


class TemplateStore:
    """Resolve the key to template mapping from the package and the user directory.

    Nothing is cached: every :meth:`resolve` call rereads the disk, so the
    consolidated override file is always the source of truth between calls.
    """

    def __init__(self, settings: ForgeSettings | None = None) -> None:
        self.settings = settings or ForgeSettings.from_env()

    @property
    def templates_dir(self) -> Path:
        return self.settings.templates_dir

    @property
    def overrides_file(self) -> Path:
        return self.settings.overrides_file

    def load_overrides(self, *, strict: bool = True) -> TemplateMap:
        """Load the consolidated override file.

        A missing file yields an empty mapping. A malformed file raises
        :class:`ConfigError` unless ``strict`` is false, in which case it is
        treated as empty.
        """

        path = self.overrides_file
        if not path.is_file():
            return {}
        data = _read_bytes(path)
        try:
            return _parse_template_map(data, str(path))
        except ConfigError:
            if strict:
                raise
            LOGGER.warning("Ignoring unreadable override file %s", path)
            return {}

    def write_overrides(self, templates: TemplateMap) -> None:
        """Replace the consolidated override file with ``templates``."""

        path = self.overrides_file
        staging = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with staging.open("w", encoding="utf-8") as handle:
                handle.write(dump_template_map(templates))
            os.replace(staging, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                staging.unlink(missing_ok=True)
            raise IoError(path, f"failed to write templates ({exc.strerror or exc})") from exc
        LOGGER.debug("Wrote %d template(s) to %s", len(templates), path)

    def legacy_files(self) -> list[Path]:
        """Return per-key ``*.json`` files awaiting migration, sorted by name."""

        directory = self.templates_dir
        if not directory.is_dir():
            return []
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise IoError(directory, f"failed to list templates directory ({exc.strerror or exc})") from exc
        return [
            entry
            for entry in entries
            if entry.suffix == ".json" and entry.name != OVERRIDES_FILENAME and entry.is_file()
        ]

    def migrate_legacy_files(self) -> TemplateMap:
        """Fold legacy per-key files into the consolidated override file.

        Each file is read as a ``{key: template}`` map, then as a single
        template keyed by the file stem; files matching neither shape are left
        in place. The merged file is written and reread before any source is
        deleted. Returns the migrated entries.
        """

        migrated: TemplateMap = {}
        sources: list[Path] = []
        for path in self.legacy_files():
            parsed = _parse_legacy(path, _read_bytes(path))
            if parsed is None:
                LOGGER.warning("Skipping %s: not a template or template map", path)
                continue
            migrated.update(parsed)
            sources.append(path)

        if not sources:
            return {}

        consolidated = self.load_overrides(strict=True)
        consolidated.update(migrated)
        self.write_overrides(consolidated)

        persisted = self.load_overrides(strict=True)
        missing = [key for key in migrated if persisted.get(key) != migrated[key]]
        if missing:
            raise IoError(self.overrides_file, f"migrated templates not persisted: {', '.join(missing)}")

        for path in sources:
            try:
                path.unlink()
            except OSError as exc:
                raise IoError(path, f"failed to remove migrated file ({exc.strerror or exc})") from exc
            LOGGER.info("Migrated legacy template file %s", path)

        return migrated

    def resolve(self) -> TemplateMap:
        """Return built-in templates overridden by the user's templates."""

        resolved = load_builtin_templates()
        if self.templates_dir.is_dir():
            self.migrate_legacy_files()
            resolved.update(self.load_overrides(strict=True))
        return resolved

    def get(self, key: str) -> Template:
        """Resolve and return the template registered under ``key``."""

        templates = self.resolve()
        try:
            return templates[key]
        except KeyError:
            raise KeyNotFound(key) from None
