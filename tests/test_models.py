from __future__ import annotations

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from forge.errors import ValidationError
from forge.models import (
    TEMPLATE_MAP_ADAPTER,
    Template,
    dump_template_map,
    is_safe_relative_path,
    validate_template,
)


@pytest.mark.parametrize(
    "path",
    ["src", "src/api", "tests/unit/", ".gitignore", "docs/ARCHITECTURE.md", "a..b", "./src"],
)
def test_relative_paths_are_safe(path: str):
    assert is_safe_relative_path(path)


@pytest.mark.parametrize(
    "path",
    ["/etc", "..", "../outside", "src/../../x", "C:\\Windows", "C:relative", "\\\\server\\share", "src\\..\\..\\x"],
)
def test_absolute_or_climbing_paths_are_unsafe(path: str):
    assert not is_safe_relative_path(path)


def test_validate_template_accepts_safe_template(api_template: Template):
    validate_template(api_template)


def test_validate_template_rejects_unsafe_structure(api_template: Template):
    template = api_template.model_copy(update={"structure": ["src", "../escape"]})
    with pytest.raises(ValidationError) as excinfo:
        validate_template(template)
    assert excinfo.value.path == "../escape"


def test_validate_template_rejects_absolute_file(api_template: Template):
    template = api_template.model_copy(update={"files": {"/tmp/evil": "backend"}})
    with pytest.raises(ValidationError):
        validate_template(template)
    assert template.unsafe_paths() == ["/tmp/evil"]


def test_template_rejects_unknown_fields():
    with pytest.raises(PydanticValidationError):
        Template.model_validate(
            {"name": "x", "description": "y", "structure": [], "files": {}, "extra": 1}
        )


def test_dump_template_map_is_sorted_and_reparses(api_template: Template):
    other = Template(name="B", description="", structure=[], files={})
    text = dump_template_map({"zeta": other, "alpha": api_template})

    assert list(json.loads(text)) == ["alpha", "zeta"]
    assert text.endswith("\n")
    reparsed = TEMPLATE_MAP_ADAPTER.validate_json(text)
    assert reparsed == {"alpha": api_template, "zeta": other}
    assert dump_template_map(reparsed) == text
