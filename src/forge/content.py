"""Seed file content selected by a template's kind hints.

Templates map each file path to a free-form hint string. The hint is parsed
into :class:`FileKind`; unknown hints become :attr:`FileKind.GENERIC`, so
content selection is total:

* ``.gitignore`` files receive the canned ignore body for their kind.
* Markdown files receive a single heading derived from the file stem.
* Every other file is created empty.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

__all__ = ["FileKind", "GITIGNORE_BODIES", "seed_content"]


class FileKind(str, Enum):
    """Closed set of content flavours a template file can request."""

    BACKEND = "backend"
    FRONTEND = "frontend"
    PYTHON = "python"
    NODE = "node"
    RUST = "rust"
    GO = "go"
    JAVA = "java"
    MOBILE = "mobile"
    DOCS = "docs"
    GENERIC = "generic"

    @classmethod
    def parse(cls, hint: str) -> "FileKind":
        """Map ``hint`` to a member, falling back to :attr:`GENERIC`."""

        try:
            return cls(hint.strip().lower())
        except ValueError:
            return cls.GENERIC


_COMMON_IGNORES = """# Editors and OS files
.DS_Store
Thumbs.db
.idea/
.vscode/
*.swp

# Environment
.env
.env.local
"""

_PYTHON_IGNORES = """# Python
__pycache__/
*.py[cod]
*.egg-info/
.venv/
venv/
.pytest_cache/
.mypy_cache/
.coverage
build/
dist/
"""

_NODE_IGNORES = """# Node
node_modules/
npm-debug.log*
yarn-error.log*
.pnpm-store/
dist/
build/
coverage/
"""

GITIGNORE_BODIES: dict[FileKind, str] = {
    FileKind.BACKEND: _COMMON_IGNORES + "\n" + _PYTHON_IGNORES + "\n# Logs and data\nlogs/\n*.log\n*.sqlite3\n",
    FileKind.FRONTEND: _COMMON_IGNORES + "\n" + _NODE_IGNORES + "\n# Framework caches\n.next/\n.cache/\n.parcel-cache/\n",
    FileKind.PYTHON: _COMMON_IGNORES + "\n" + _PYTHON_IGNORES,
    FileKind.NODE: _COMMON_IGNORES + "\n" + _NODE_IGNORES,
    FileKind.RUST: _COMMON_IGNORES + "\n# Rust\ntarget/\n**/*.rs.bk\n",
    FileKind.GO: _COMMON_IGNORES + "\n# Go\nbin/\n*.exe\n*.test\n*.out\nvendor/\n",
    FileKind.JAVA: _COMMON_IGNORES + "\n# Java\ntarget/\n*.class\n*.jar\n.gradle/\nbuild/\n",
    FileKind.MOBILE: _COMMON_IGNORES
    + "\n"
    + _NODE_IGNORES
    + "\n# Mobile builds\n.expo/\nios/Pods/\nandroid/.gradle/\n*.apk\n*.ipa\n",
    FileKind.DOCS: _COMMON_IGNORES + "\n# Generated docs\nsite/\n_build/\n",
    FileKind.GENERIC: _COMMON_IGNORES + "\n# Build output\nbuild/\ndist/\n*.log\n",
}


def seed_content(path: str, kind: str | FileKind) -> str:
    """Return the initial body for the template file at ``path``."""

    file_kind = kind if isinstance(kind, FileKind) else FileKind.parse(kind)
    pure = PurePosixPath(path.replace("\\", "/"))

    if pure.name == ".gitignore":
        return GITIGNORE_BODIES[file_kind]
    if pure.suffix.lower() == ".md":
        return f"# {pure.stem}\n"
    return ""
