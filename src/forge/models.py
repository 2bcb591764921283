"""Template data model and path-safety validation."""

from __future__ import annotations

import json
from pathlib import PurePosixPath, PureWindowsPath
from typing import Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .errors import ValidationError

__all__ = [
    "Template",
    "TemplateMap",
    "TEMPLATE_MAP_ADAPTER",
    "dump_template_map",
    "is_safe_relative_path",
    "validate_template",
]


class Template(BaseModel):
    """Named architecture descriptor: directories to create and seed files to write."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Display label for the architecture.")
    description: str = Field(..., description="Short human readable summary.")
    structure: List[str] = Field(..., description="Relative directories to create.")
    files: Dict[str, str] = Field(
        ...,
        description="Relative file path mapped to a content kind hint such as 'backend'.",
    )

    def unsafe_paths(self) -> list[str]:
        """Return every ``structure`` entry or ``files`` key that is not a safe relative path."""

        candidates = [*self.structure, *self.files]
        return [path for path in candidates if not is_safe_relative_path(path)]


TemplateMap = Dict[str, Template]
TEMPLATE_MAP_ADAPTER: TypeAdapter[TemplateMap] = TypeAdapter(TemplateMap)


def is_safe_relative_path(path: str) -> bool:
    """Return ``True`` when ``path`` is relative and never climbs above its base.

    The path is judged under both POSIX and Windows rules so a template written
    on one platform cannot escape the project directory on the other.
    """

    for flavour in (PurePosixPath, PureWindowsPath):
        pure = flavour(path)
        if pure.anchor:
            return False
        if ".." in pure.parts:
            return False
    return True


def validate_template(template: Template) -> None:
    """Raise :class:`ValidationError` if ``template`` declares an unsafe path."""

    for entry in template.structure:
        if not is_safe_relative_path(entry):
            raise ValidationError(
                f"structure entry '{entry}' must be relative and must not contain '..'",
                path=entry,
            )
    for filename in template.files:
        if not is_safe_relative_path(filename):
            raise ValidationError(
                f"file '{filename}' must be relative and must not contain '..'",
                path=filename,
            )


def dump_template_map(templates: Mapping[str, Template]) -> str:
    """Serialize ``templates`` as pretty-printed JSON with sorted keys."""

    payload = {key: templates[key].model_dump(mode="json") for key in sorted(templates)}
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
