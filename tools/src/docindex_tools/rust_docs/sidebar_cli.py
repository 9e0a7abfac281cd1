#!/usr/bin/env python3
"""
show-sidebar: Print the navigation sidebar of a documented module.

Usage:
    uv run show-sidebar --list
    uv run show-sidebar --module vulkano::framebuffer
    uv run show-sidebar --module vulkano/framebuffer --kind fn
    uv run show-sidebar --module vulkano::command_buffer::sys --json
"""

import argparse
import json
import sys

from docindex_tools.shared import (
    DocIndexError,
    get_doc_root,
    get_project_root,
    resolve_path,
)
from docindex_tools.rust_docs.sidebar import (
    SidebarIndex,
    load_sidebar_catalog,
    normalize_module_path,
)


def print_sidebar(index: SidebarIndex, kind: str | None = None) -> None:
    """Print a sidebar block by block."""
    print(f"\n{'='*60}")
    print(f" {index.module_path}")
    print(f"{'='*60}")

    blocks = [b for b in index.blocks() if kind is None or b[0] == kind]
    if not blocks:
        print("\n(no items)")
        return

    for category, title, entries in blocks:
        print(f"\n{title} ({len(entries)})")
        for entry in entries:
            line = f"  {entry.name}"
            if entry.description:
                line += f" - {entry.description}"
            print(line)


def list_modules(catalog: dict[str, SidebarIndex]) -> None:
    print("=" * 60)
    print("DOCUMENTED MODULES")
    print("=" * 60)
    for module_path, index in catalog.items():
        counts = ", ".join(f"{category}: {len(index[category])}" for category in index)
        print(f"{module_path}  ({counts})")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the navigation sidebar of a documented module"
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--module", "-m",
        type=str,
        help="Module path (vulkano::framebuffer or vulkano/framebuffer)",
    )
    target.add_argument(
        "--list", "-l",
        action="store_true",
        help="List all modules with sidebars",
    )
    parser.add_argument(
        "--kind", "-k",
        type=str,
        default=None,
        help="Show only one item category (struct, enum, fn, trait, ...)",
    )
    parser.add_argument(
        "--doc-root", "-d",
        type=str,
        default=None,
        help="rustdoc output directory (default: <project>/api)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    root = get_project_root()
    doc_root = resolve_path(args.doc_root, root) if args.doc_root else get_doc_root(root)

    try:
        catalog = load_sidebar_catalog(doc_root)
    except (DocIndexError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.list:
        if args.json:
            print(json.dumps(
                {path: index.item_count() for path, index in catalog.items()},
                indent=2,
            ))
        else:
            list_modules(catalog)
        return 0

    module_path = normalize_module_path(args.module)
    index = catalog.get(module_path)
    if index is None:
        print(f"ERROR: No sidebar for module {module_path!r} under {doc_root}", file=sys.stderr)
        print("Run with --list to see documented modules", file=sys.stderr)
        return 1

    if args.json:
        items = index.to_dict()
        if args.kind:
            items = {args.kind: items.get(args.kind, [])}
        print(json.dumps({"module": module_path, "items": items}, indent=2, ensure_ascii=False))
    else:
        print_sidebar(index, args.kind)

    return 0


if __name__ == "__main__":
    exit(main())
