"""
Structural checks for alias tables and sidebars, and JSON Schema checks for
the JSON exports.

Check functions return lists of messages. Messages starting with
"warning:" describe suspicious but legal data; everything else is an error.
"""

import json
from collections.abc import Mapping
from typing import Any

import jsonschema

from docindex_tools.shared import (
    SIDEBAR_CATEGORIES,
    get_schemas_dir,
    is_known_item_type,
)
from docindex_tools.rust_docs.aliases import AliasEntry, AliasTable
from docindex_tools.rust_docs.sidebar import SidebarEntry, SidebarIndex


WARNING_PREFIX = "warning:"

SCHEMA_FILES = {
    "aliases": "alias_table.schema.json",
    "sidebars": "sidebar_catalog.schema.json",
}


def is_warning(message: str) -> bool:
    return message.startswith(WARNING_PREFIX)


def split_messages(messages: list[str]) -> tuple[list[str], list[str]]:
    """Split check output into (errors, warnings)."""
    errors = [m for m in messages if not is_warning(m)]
    warnings = [m for m in messages if is_warning(m)]
    return errors, warnings


def check_alias_table(table: AliasTable) -> list[str]:
    """
    Check alias table invariants.

    - every crate maps to a mapping of symbol -> list of entries
    - every entry has a known item-kind code, a name and a non-empty path
    - an entry's crate matches the crate it is filed under (warning)
    """
    messages = []

    for crate in table:
        symbols = table[crate]
        if not isinstance(symbols, Mapping):
            messages.append(f"ALIASES[{crate!r}]: expected a mapping, got {type(symbols).__name__}")
            continue

        for symbol, entries in symbols.items():
            where = f"ALIASES[{crate!r}][{symbol!r}]"
            if not symbol.strip():
                messages.append(f"{where}: empty symbol token")
            if not isinstance(entries, (list, tuple)):
                messages.append(f"{where}: expected a list, got {type(entries).__name__}")
                continue

            for i, entry in enumerate(entries):
                entry_where = f"{where}[{i}]"
                if not isinstance(entry, AliasEntry):
                    messages.append(f"{entry_where}: expected an alias entry, got {type(entry).__name__}")
                    continue
                if not is_known_item_type(entry.ty):
                    messages.append(f"{entry_where}: unknown item-kind code {entry.ty!r}")
                if not entry.name:
                    messages.append(f"{entry_where}: empty item name")
                if not entry.path:
                    messages.append(f"{entry_where}: empty path")
                if entry.crate != crate:
                    messages.append(
                        f"{WARNING_PREFIX} {entry_where}: entry crate {entry.crate!r} "
                        f"filed under {crate!r}"
                    )

    return messages


def check_sidebar(index: SidebarIndex) -> list[str]:
    """
    Check sidebar invariants.

    - every category maps to a list of (name, description) entries
    - every name is non-empty
    - categories outside the known sidebar kinds (warning)
    """
    messages = []
    label = index.module_path or "sidebar"

    for category in index:
        where = f"{label}[{category!r}]"
        if category not in SIDEBAR_CATEGORIES:
            messages.append(f"{WARNING_PREFIX} {where}: unknown sidebar category")

        entries = index[category]
        if not isinstance(entries, (list, tuple)):
            messages.append(f"{where}: expected a list, got {type(entries).__name__}")
            continue

        for i, entry in enumerate(entries):
            if not isinstance(entry, SidebarEntry):
                messages.append(f"{where}[{i}]: expected a (name, description) entry")
                continue
            if not entry.name:
                messages.append(f"{where}[{i}]: empty item name")

    return messages


def check_sidebar_catalog(catalog: Mapping[str, SidebarIndex]) -> list[str]:
    """Run check_sidebar over every module in a catalog."""
    messages = []
    for module_path, index in catalog.items():
        if not module_path:
            messages.append(f"{WARNING_PREFIX} sidebar at doc root has an empty module path")
        messages.extend(check_sidebar(index))
    return messages


# =============================================================================
# JSON Schema validation of exports
# =============================================================================

def load_schema(kind: str) -> dict:
    """Load the JSON Schema for an export kind ("aliases" or "sidebars")."""
    if kind not in SCHEMA_FILES:
        raise ValueError(f"Unknown export kind: {kind!r} (expected one of {sorted(SCHEMA_FILES)})")
    with open(get_schemas_dir() / SCHEMA_FILES[kind], encoding="utf-8") as f:
        return json.load(f)


def validate_export(data: Any, kind: str) -> list[str]:
    """
    Validate an exported JSON document against its schema.

    Returns one message per violation, prefixed with its JSON path.
    """
    schema = load_schema(kind)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema, format_checker=jsonschema.FormatChecker())

    errors = sorted(validator.iter_errors(data), key=lambda e: e.json_path)
    return [f"{error.json_path}: {error.message}" for error in errors]
