from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from forge.config import ForgeSettings  # noqa: E402
from forge.models import Template  # noqa: E402
from forge.store import TemplateStore  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every platform config variable at a per-test directory."""

    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("FORGE_EDITOR", "VISUAL", "EDITOR"):
        monkeypatch.delenv(name, raising=False)
    return config_home


@pytest.fixture()
def settings(isolated_config: Path) -> ForgeSettings:
    return ForgeSettings(templates_dir=isolated_config / "forge" / "templates")


@pytest.fixture()
def store(settings: ForgeSettings) -> TemplateStore:
    return TemplateStore(settings)


@pytest.fixture()
def api_template() -> Template:
    return Template(
        name="API",
        description="d",
        structure=["src", "tests"],
        files={".gitignore": "backend"},
    )
