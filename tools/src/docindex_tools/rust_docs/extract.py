#!/usr/bin/env python3
"""
extract-doc-index: Export a rustdoc tree's alias table and sidebars to JSON.

Reads aliases.js and every <crate>/<module...>/sidebar-items.js under the
doc root and writes JSON snapshots that other tools (and non-JS consumers)
can load without a JavaScript reader.

Usage:
    uv run extract-doc-index                      # Default doc root (api/)
    uv run extract-doc-index --doc-root target/doc
    uv run extract-doc-index --force              # Re-extract even if exists

Output:
    index/index.json
    index/aliases.json
    index/sidebars.json
"""

import argparse
import sys
from collections.abc import Mapping
from datetime import date
from pathlib import Path

from docindex_tools.shared import (
    CURRENT_SCHEMA_VERSION,
    DocIndexError,
    get_aliases_path,
    get_doc_root,
    get_output_dir,
    get_project_root,
    is_supported,
    load_json,
    resolve_path,
    save_json,
    stamp,
)
from docindex_tools.rust_docs.aliases import AliasTable, load_aliases
from docindex_tools.rust_docs.sidebar import SidebarIndex, load_sidebar_catalog


ALIASES_EXPORT = "aliases.json"
SIDEBARS_EXPORT = "sidebars.json"
INDEX_EXPORT = "index.json"


def build_alias_export(table: AliasTable, source: str) -> dict:
    """Build the aliases.json document."""
    return stamp({
        "source": source,
        "extraction_date": str(date.today()),
        "total_crates": len(table),
        "non_empty_crates": len(table.non_empty_crates()),
        "total_entries": table.entry_count(),
        "crates": table.to_dict(),
    })


def build_sidebar_export(catalog: Mapping[str, SidebarIndex], source: str) -> dict:
    """Build the sidebars.json document."""
    return stamp({
        "source": source,
        "extraction_date": str(date.today()),
        "total_modules": len(catalog),
        "total_items": sum(index.item_count() for index in catalog.values()),
        "modules": {
            module_path: index.to_dict() for module_path, index in catalog.items()
        },
    })


def build_index(
    doc_root: Path,
    table: AliasTable | None,
    catalog: Mapping[str, SidebarIndex],
) -> dict:
    """Build the index.json summary."""
    modules = [
        {
            "module": module_path,
            "categories": {category: len(index[category]) for category in index},
            "items": index.item_count(),
        }
        for module_path, index in catalog.items()
    ]
    return stamp({
        "source": str(doc_root),
        "extraction_date": str(date.today()),
        "aliases": {
            "file": ALIASES_EXPORT if table is not None else None,
            "crates": len(table) if table is not None else 0,
            "non_empty_crates": table.non_empty_crates() if table is not None else [],
            "symbols": len(table.symbols()) if table is not None else 0,
            "entries": table.entry_count() if table is not None else 0,
        },
        "sidebars": {
            "file": SIDEBARS_EXPORT,
            "modules": modules,
        },
    })


def _check_version(data: dict, path: Path) -> None:
    if not isinstance(data, dict) or not is_supported(data):
        raise DocIndexError(f"{path}: unsupported or missing export schema version")


def load_alias_export(path: Path) -> AliasTable:
    """Load an alias table back from aliases.json."""
    data = load_json(path)
    _check_version(data, path)
    return AliasTable.from_dict(data.get("crates", {}))


def load_sidebar_export(path: Path) -> dict[str, SidebarIndex]:
    """Load a sidebar catalog back from sidebars.json."""
    data = load_json(path)
    _check_version(data, path)
    return {
        module_path: SidebarIndex.from_dict(items, module_path)
        for module_path, items in data.get("modules", {}).items()
    }


def extract(doc_root: Path, output_dir: Path) -> dict:
    """
    Load a doc tree and write all exports.

    A doc tree without aliases.js is still exported (sidebars only).
    Returns the index document.
    """
    if not doc_root.is_dir():
        raise FileNotFoundError(f"Doc root not found: {doc_root}")

    aliases_path = get_aliases_path(doc_root)
    table = None
    if aliases_path.exists():
        table = load_aliases(aliases_path)
        print(f"  {aliases_path.name}: {len(table)} crate(s), {table.entry_count()} alias entries")
    else:
        print(f"  Warning: {aliases_path} not found, skipping alias table")

    catalog = load_sidebar_catalog(doc_root)
    for module_path, index in catalog.items():
        print(f"  {module_path}: {index.item_count()} item(s)")

    output_dir.mkdir(parents=True, exist_ok=True)

    if table is not None:
        aliases_file = output_dir / ALIASES_EXPORT
        save_json(aliases_file, build_alias_export(table, aliases_path.name))
        print(f"\nSaved: {aliases_file}")

    sidebars_file = output_dir / SIDEBARS_EXPORT
    save_json(sidebars_file, build_sidebar_export(catalog, doc_root.name))
    print(f"Saved: {sidebars_file}")

    index_data = build_index(doc_root, table, catalog)
    index_file = output_dir / INDEX_EXPORT
    save_json(index_file, index_data)
    print(f"Saved: {index_file}")

    return index_data


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export a rustdoc tree's alias table and sidebars to JSON"
    )
    parser.add_argument(
        "--doc-root", "-d",
        type=str,
        default=None,
        help="rustdoc output directory (default: <project>/api)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Directory for JSON exports (default: <project>/index)",
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Re-extract even if output exists",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    root = get_project_root()

    doc_root = resolve_path(args.doc_root, root) if args.doc_root else get_doc_root(root)
    output_dir = resolve_path(args.output, root) if args.output else get_output_dir(root)

    if not doc_root.is_dir():
        print(f"ERROR: Doc root not found at {doc_root}", file=sys.stderr)
        print("Pass --doc-root or set DOCINDEX_ROOT", file=sys.stderr)
        return 1

    index_file = output_dir / INDEX_EXPORT
    if index_file.exists() and not args.force:
        print(f"Output exists: {index_file}")
        print("Use --force to re-extract")
        return 0

    print(f"Scanning {doc_root}...")
    try:
        index_data = extract(doc_root, output_dir)
    except (DocIndexError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"\n{'='*60}")
    print("EXTRACTION COMPLETE")
    print(f"{'='*60}")
    print(f"Schema:         v{CURRENT_SCHEMA_VERSION}")
    print(f"Crates:         {index_data['aliases']['crates']}")
    print(f"Alias entries:  {index_data['aliases']['entries']}")
    print(f"Modules:        {len(index_data['sidebars']['modules'])}")

    return 0


if __name__ == "__main__":
    exit(main())
