"""Shared fixtures for docindex-tools tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from docindex_tools.rust_docs.aliases import AliasTable, load_aliases
from docindex_tools.rust_docs.sidebar import SidebarIndex, load_sidebar


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def doc_root() -> Path:
    """Real rustdoc output slice: aliases.js plus two vulkano sidebars."""
    return FIXTURES_DIR / "api"


@pytest.fixture
def aliases_path(doc_root: Path) -> Path:
    return doc_root / "aliases.js"


@pytest.fixture
def aliases_text(aliases_path: Path) -> str:
    return aliases_path.read_text(encoding="utf-8")


@pytest.fixture
def alias_table(aliases_path: Path) -> AliasTable:
    return load_aliases(aliases_path)


@pytest.fixture
def framebuffer_path(doc_root: Path) -> Path:
    return doc_root / "vulkano" / "framebuffer" / "sidebar-items.js"


@pytest.fixture
def framebuffer_sidebar(framebuffer_path: Path) -> SidebarIndex:
    return load_sidebar(framebuffer_path, "vulkano::framebuffer")


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated project root so CLI defaults never touch the working tree."""
    monkeypatch.setenv("DOCINDEX_ROOT", str(tmp_path))
    return tmp_path
