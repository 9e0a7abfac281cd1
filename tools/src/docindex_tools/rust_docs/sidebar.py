"""
Per-module sidebar indices (sidebar-items.js).

rustdoc writes one sidebar-items.js into every module directory of a doc
tree, e.g. api/vulkano/framebuffer/sidebar-items.js:

    initSidebarItems({"enum":[["LoadOp","Describes what ..."]],"fn":[["ensure_image_view_compatible","..."]]});

Each category (item kind) maps to ordered [name, description] pairs. The
description may be empty, and older generators write null for it.
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Sequence

from docindex_tools.shared import (
    PATH_SEPARATOR,
    SIDEBAR_BLOCKS,
    SIDEBAR_FILE_NAME,
    DocIndexParseError,
    line_col,
    parse_js_literal,
    read_text,
    skip_whitespace,
)


CALL_PATTERN = re.compile(r'initSidebarItems\s*\(')


@dataclass(frozen=True)
class SidebarEntry:
    """One item listed in a module's sidebar."""
    name: str
    desc: str | None = ""

    @property
    def description(self) -> str:
        return self.desc or ""

    def href(self, category: str) -> str:
        """Page URL relative to the module directory."""
        if category == "mod":
            return f"{self.name}/index.html"
        return f"{category}.{self.name}.html"

    def to_pair(self) -> list[str | None]:
        return [self.name, self.desc]


class SidebarIndex(Mapping):
    """
    Read-only mapping of category -> ordered SidebarEntry tuple.

    `module_path` is the module the sidebar belongs to ("vulkano::framebuffer")
    when known. Equality compares categories and entries only.
    """

    def __init__(
        self,
        categories: Mapping[str, Sequence[SidebarEntry]] | None = None,
        module_path: str | None = None,
    ):
        self.module_path = module_path
        self._categories: dict[str, tuple[SidebarEntry, ...]] = {
            category: tuple(entries) for category, entries in (categories or {}).items()
        }

    def __getitem__(self, category: str) -> tuple[SidebarEntry, ...]:
        return self._categories[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        label = self.module_path or "<unknown module>"
        return f"SidebarIndex({label}, {self.item_count()} items)"

    def categories(self) -> list[str]:
        return list(self._categories)

    def entries(self, category: str) -> list[SidebarEntry]:
        return list(self._categories.get(category, ()))

    def item_count(self) -> int:
        return sum(len(entries) for entries in self._categories.values())

    def find(self, name: str, category: str | None = None) -> list[tuple[str, SidebarEntry]]:
        """All (category, entry) pairs with this item name."""
        return [
            (cat, entry)
            for cat, entries in self._categories.items()
            if category is None or cat == category
            for entry in entries
            if entry.name == name
        ]

    def blocks(self) -> list[tuple[str, str, list[SidebarEntry]]]:
        """
        Categories in the order the sidebar renders them, with headings.

        Known kinds follow SIDEBAR_BLOCKS; any other category is appended in
        stored order under its own name.
        """
        result = []
        known = set()
        for category, title in SIDEBAR_BLOCKS:
            known.add(category)
            if self._categories.get(category):
                result.append((category, title, list(self._categories[category])))
        for category, entries in self._categories.items():
            if category not in known and entries:
                result.append((category, category, list(entries)))
        return result

    def to_dict(self) -> dict[str, list[list[str | None]]]:
        return {
            category: [entry.to_pair() for entry in entries]
            for category, entries in self._categories.items()
        }

    @classmethod
    def from_dict(cls, data: Any, module_path: str | None = None) -> "SidebarIndex":
        """
        Build an index from {category: [[name, desc], ...]}.

        Raises DocIndexParseError when a category is not a list of pairs.
        """
        if not isinstance(data, Mapping):
            raise DocIndexParseError(
                f"sidebar items must be an object, got {type(data).__name__}"
            )

        categories = {}
        for category, pairs in data.items():
            if not isinstance(pairs, list):
                raise DocIndexParseError(
                    f"sidebar category {category!r} must be a list, got {type(pairs).__name__}"
                )
            entries = []
            for i, pair in enumerate(pairs):
                where = f"sidebar category {category!r} item {i}"
                if not isinstance(pair, list) or len(pair) != 2:
                    raise DocIndexParseError(f"{where} must be a [name, description] pair")
                name, desc = pair
                if not isinstance(name, str):
                    raise DocIndexParseError(f"{where}: name must be a string")
                if desc is not None and not isinstance(desc, str):
                    raise DocIndexParseError(f"{where}: description must be a string or null")
                entries.append(SidebarEntry(name, desc))
            categories[category] = entries
        return cls(categories, module_path)


# =============================================================================
# sidebar-items.js reading and writing
# =============================================================================

def parse_sidebar_js(
    text: str,
    module_path: str | None = None,
    source: str | None = None,
) -> SidebarIndex:
    """Parse the contents of a sidebar-items.js file."""
    try:
        pos = skip_whitespace(text, 0)
        call = CALL_PATTERN.match(text, pos)
        if not call:
            raise _positioned(text, pos, "expected initSidebarItems({...});")

        value_start = skip_whitespace(text, call.end())
        value, pos = parse_js_literal(text, value_start)

        pos = skip_whitespace(text, pos)
        if not text.startswith(")", pos):
            raise _positioned(text, pos, "expected ')' after sidebar items")
        pos = skip_whitespace(text, pos + 1)
        if text.startswith(";", pos):
            pos = skip_whitespace(text, pos + 1)
        if pos < len(text):
            raise _positioned(text, pos, "unexpected content after initSidebarItems(...)")

        try:
            return SidebarIndex.from_dict(value, module_path)
        except DocIndexParseError as e:
            line, column = line_col(text, value_start)
            raise DocIndexParseError(e.message, line=line, column=column) from None
    except DocIndexParseError as e:
        if source:
            raise e.with_source(source) from None
        raise


def _positioned(text: str, pos: int, message: str) -> DocIndexParseError:
    line, column = line_col(text, pos)
    return DocIndexParseError(message, line=line, column=column)


def dump_sidebar_js(index: SidebarIndex) -> str:
    """Serialize a sidebar in the generator's compact form."""
    body = json.dumps(index.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return f"initSidebarItems({body});"


def load_sidebar(path: Path, module_path: str | None = None) -> SidebarIndex:
    """Load a sidebar-items.js file."""
    return parse_sidebar_js(read_text(path), module_path=module_path, source=str(path))


# =============================================================================
# Doc tree discovery
# =============================================================================

def module_path_for(sidebar_file: Path, doc_root: Path) -> str:
    """
    Derive a module path from a sidebar file's location.

    api/vulkano/framebuffer/sidebar-items.js under api/ -> "vulkano::framebuffer"
    """
    relative = sidebar_file.resolve().parent.relative_to(doc_root.resolve())
    return PATH_SEPARATOR.join(relative.parts)


def iter_sidebar_files(doc_root: Path) -> Iterator[tuple[str, Path]]:
    """Yield (module_path, file) for every sidebar in a doc tree, sorted by module path."""
    found = [
        (module_path_for(path, doc_root), path)
        for path in doc_root.rglob(SIDEBAR_FILE_NAME)
        if path.is_file()
    ]
    yield from sorted(found)


def load_sidebar_catalog(doc_root: Path) -> dict[str, SidebarIndex]:
    """Load every sidebar in a doc tree, keyed by module path."""
    if not doc_root.is_dir():
        raise FileNotFoundError(f"Doc root not found: {doc_root}")
    return {
        module_path: load_sidebar(path, module_path)
        for module_path, path in iter_sidebar_files(doc_root)
    }


def normalize_module_path(value: str) -> str:
    """Accept "vulkano::framebuffer", "vulkano/framebuffer" or "vulkano.framebuffer"."""
    parts = re.split(r'::|/|\.', value.strip().strip("/"))
    return PATH_SEPARATOR.join(part for part in parts if part)
