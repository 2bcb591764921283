from __future__ import annotations

from pathlib import Path

import pytest

from forge.content import GITIGNORE_BODIES, FileKind
from forge.errors import DestinationExists, IoError, ValidationError, VcsError
from forge.models import Template
from forge.scaffold import ProjectScaffolder


def _snapshot(root: Path) -> dict[str, str | None]:
    return {
        str(path.relative_to(root)): path.read_text(encoding="utf-8") if path.is_file() else None
        for path in sorted(root.rglob("*"))
    }


@pytest.fixture()
def vcs_calls() -> list[Path]:
    return []


@pytest.fixture()
def scaffolder(vcs_calls: list[Path]) -> ProjectScaffolder:
    return ProjectScaffolder(vcs_init=vcs_calls.append)


def test_creates_expected_structure(tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template):
    report = scaffolder.create("myapi", api_template, readme_gen=True, base_dir=tmp_path)

    project = tmp_path / "myapi"
    assert report.path == project
    assert (project / "src").is_dir()
    assert (project / "tests").is_dir()
    assert (project / ".gitignore").read_text(encoding="utf-8") == GITIGNORE_BODIES[FileKind.BACKEND]
    readme = (project / "README.md").read_text(encoding="utf-8")
    assert "myapi" in readme
    assert "API" in readme
    assert report.readme is True
    assert report.git_initialized is None


def test_defaults_to_current_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, scaffolder: ProjectScaffolder, api_template: Template
):
    monkeypatch.chdir(tmp_path)
    scaffolder.create("here", api_template)
    assert (tmp_path / "here" / "src").is_dir()


def test_duplicate_and_nested_entries(tmp_path: Path, scaffolder: ProjectScaffolder):
    template = Template(
        name="Nested",
        description="",
        structure=["src/a/b", "src", "src/a/b"],
        files={"deep/nested/notes.md": "docs", "config/app.toml": "mystery"},
    )

    report = scaffolder.create("proj", template, readme_gen=False, base_dir=tmp_path)

    project = tmp_path / "proj"
    assert report.directories == ["src/a/b", "src"]
    assert (project / "src" / "a" / "b").is_dir()
    assert (project / "deep" / "nested" / "notes.md").read_text(encoding="utf-8") == "# notes\n"
    assert (project / "config" / "app.toml").read_text(encoding="utf-8") == ""
    assert not (project / "README.md").exists()


def test_existing_non_empty_destination_requires_force(
    tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template
):
    project = tmp_path / "proj"
    project.mkdir()
    (project / "notes.txt").write_text("mine", encoding="utf-8")

    with pytest.raises(DestinationExists):
        scaffolder.create("proj", api_template, base_dir=tmp_path)
    assert sorted(p.name for p in project.iterdir()) == ["notes.txt"]

    scaffolder.create("proj", api_template, force=True, base_dir=tmp_path)
    assert (project / "src").is_dir()
    assert (project / "notes.txt").read_text(encoding="utf-8") == "mine"


def test_empty_destination_is_reused(tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template):
    (tmp_path / "proj").mkdir()
    scaffolder.create("proj", api_template, base_dir=tmp_path)
    assert (tmp_path / "proj" / "README.md").exists()


def test_forced_creation_is_idempotent(tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template):
    scaffolder.create("proj", api_template, readme_gen=True, force=True, base_dir=tmp_path)
    first = _snapshot(tmp_path / "proj")
    scaffolder.create("proj", api_template, readme_gen=True, force=True, base_dir=tmp_path)

    assert _snapshot(tmp_path / "proj") == first


def test_existing_readme_kept_without_force(tmp_path: Path, scaffolder: ProjectScaffolder):
    template = Template(name="Docs", description="", structure=[], files={"README.md": "docs"})

    report = scaffolder.create("proj", template, readme_gen=True, base_dir=tmp_path)

    assert report.readme is False
    assert (tmp_path / "proj" / "README.md").read_text(encoding="utf-8") == "# README\n"


def test_unsafe_template_rejected_before_mutation(tmp_path: Path, scaffolder: ProjectScaffolder):
    template = Template(name="Bad", description="", structure=["../escape"], files={})

    with pytest.raises(ValidationError):
        scaffolder.create("proj", template, base_dir=tmp_path)
    assert not (tmp_path / "proj").exists()
    assert not (tmp_path / "escape").exists()


def test_filesystem_error_carries_path_and_keeps_earlier_work(tmp_path: Path, scaffolder: ProjectScaffolder):
    template = Template(
        name="Clash",
        description="",
        structure=["src", "src/module.py/inner"],
        files={"src/module.py": "python"},
    )
    project = tmp_path / "proj"
    project.mkdir()
    (project / "src").mkdir()
    (project / "src" / "module.py").write_text("", encoding="utf-8")

    with pytest.raises(IoError) as excinfo:
        scaffolder.create("proj", template, force=True, base_dir=tmp_path)

    assert excinfo.value.path == project / "src" / "module.py" / "inner"
    assert (project / "src").is_dir()


def test_git_init_invoked_with_destination(
    tmp_path: Path, scaffolder: ProjectScaffolder, vcs_calls: list[Path], api_template: Template
):
    report = scaffolder.create("proj", api_template, git_init=True, base_dir=tmp_path)

    assert vcs_calls == [tmp_path / "proj"]
    assert report.git_initialized is True


def test_git_failure_is_reported_not_rolled_back(tmp_path: Path, api_template: Template):
    def failing_init(path: Path) -> None:
        raise VcsError("git executable not found")

    report = ProjectScaffolder(vcs_init=failing_init).create(
        "proj", api_template, git_init=True, base_dir=tmp_path
    )

    assert report.git_initialized is False
    assert report.vcs_error == "git executable not found"
    assert (tmp_path / "proj" / "src").is_dir()


def test_empty_name_rejected(tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template):
    with pytest.raises(ValueError):
        scaffolder.create("  ", api_template, base_dir=tmp_path)


def test_render_readme_is_deterministic(scaffolder: ProjectScaffolder, api_template: Template):
    readme = scaffolder.render_readme("myapi", api_template)

    assert readme == scaffolder.render_readme("myapi", api_template)
    assert readme.startswith("# myapi\n\nd\n")
    assert "**API**" in readme
    assert "- `src`\n- `tests`" in readme


def test_force_replaces_existing_readme(tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template):
    project = tmp_path / "proj"
    project.mkdir()
    (project / "README.md").write_text("custom notes", encoding="utf-8")

    report = scaffolder.create("proj", api_template, readme_gen=True, force=True, base_dir=tmp_path)

    assert report.readme is True
    assert (project / "README.md").read_text(encoding="utf-8") == scaffolder.render_readme(
        "proj", api_template
    )


@pytest.mark.parametrize("name", ["../outside", "nested/../../up", "/tmp/absolute"])
def test_name_outside_base_dir_rejected(
    tmp_path: Path, scaffolder: ProjectScaffolder, api_template: Template, name: str
):
    base = tmp_path / "base"
    base.mkdir()

    with pytest.raises(ValidationError):
        scaffolder.create(name, api_template, base_dir=base)
    assert list(base.iterdir()) == []
    assert not (tmp_path / "outside").exists()
