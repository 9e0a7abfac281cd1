"""
Project root and common path utilities.

All tools resolve their default locations from a single project root:

    <root>/api      rustdoc output tree (aliases.js, <crate>/.../sidebar-items.js)
    <root>/index    JSON exports written by extract-doc-index

The root is taken from the DOCINDEX_ROOT environment variable when set,
otherwise from the nearest ancestor of the working directory that holds a
pyproject.toml, otherwise the working directory itself.
"""

import os
from pathlib import Path


ROOT_ENV_VAR = "DOCINDEX_ROOT"
ROOT_MARKER = "pyproject.toml"

DOC_ROOT_NAME = "api"
OUTPUT_DIR_NAME = "index"

ALIASES_FILE_NAME = "aliases.js"
SIDEBAR_FILE_NAME = "sidebar-items.js"


def get_project_root(start: Path | None = None) -> Path:
    """
    Locate the project root.

    Order of precedence:
        1. DOCINDEX_ROOT environment variable
        2. Nearest ancestor of `start` (default: cwd) containing pyproject.toml
        3. `start` itself
    """
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()

    start = (start or Path.cwd()).resolve()
    for candidate in [start, *start.parents]:
        if (candidate / ROOT_MARKER).exists():
            return candidate
    return start


def get_doc_root(root: Path) -> Path:
    """Get the default rustdoc output directory."""
    return root / DOC_ROOT_NAME


def get_output_dir(root: Path) -> Path:
    """Get the default directory for JSON exports."""
    return root / OUTPUT_DIR_NAME


def get_aliases_path(doc_root: Path) -> Path:
    """Get the alias table file inside a doc tree."""
    return doc_root / ALIASES_FILE_NAME


def get_schemas_dir() -> Path:
    """Get the directory holding the shipped JSON Schemas."""
    return Path(__file__).resolve().parent.parent / "schemas"


def resolve_path(value: str | Path, root: Path) -> Path:
    """Resolve a CLI path argument; relative paths are taken from the project root."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()

