#!/usr/bin/env python3
"""
validate-doc-index: Validate a rustdoc tree's alias table and sidebars.

Checks performed:

1. Alias table - every crate maps to symbol -> list of records; every record
   has a known item-kind code, a name and a non-empty path
2. Sidebars - every category maps to [name, description] pairs with names
3. Export schema (optional) - aliases.json / sidebars.json against the
   shipped JSON Schemas

Exit Codes:
    0 - All checks pass
    1 - Alias table validation failed
    2 - Sidebar validation failed
    3 - Export schema validation failed
    4 - Multiple failures (combination of above)

Usage:
    uv run validate-doc-index
    uv run validate-doc-index --doc-root target/doc
    uv run validate-doc-index --export index
    uv run validate-doc-index --strict       # Warnings fail the run
"""

import argparse
import sys
from pathlib import Path

from docindex_tools.shared import (
    DocIndexError,
    get_aliases_path,
    get_doc_root,
    get_project_root,
    load_json,
    resolve_path,
)
from docindex_tools.rust_docs.aliases import load_aliases
from docindex_tools.rust_docs.extract import ALIASES_EXPORT, SIDEBARS_EXPORT
from docindex_tools.rust_docs.sidebar import load_sidebar, iter_sidebar_files
from docindex_tools.rust_docs.validation import (
    check_alias_table,
    check_sidebar_catalog,
    split_messages,
    validate_export,
)


EXIT_OK = 0
EXIT_ALIASES = 1
EXIT_SIDEBARS = 2
EXIT_SCHEMA = 3
EXIT_MULTIPLE = 4


def validate_aliases(doc_root: Path) -> tuple[list[str], list[str]]:
    """Returns (errors, warnings) for the doc tree's aliases.js."""
    aliases_path = get_aliases_path(doc_root)
    if not aliases_path.exists():
        return [], [f"warning: {aliases_path} not found"]
    try:
        table = load_aliases(aliases_path)
    except DocIndexError as e:
        return [str(e)], []
    return split_messages(check_alias_table(table))


def validate_sidebars(doc_root: Path) -> tuple[list[str], list[str], int]:
    """Returns (errors, warnings, files checked) for every sidebar-items.js."""
    errors = []
    catalog = {}
    count = 0
    for module_path, path in iter_sidebar_files(doc_root):
        count += 1
        try:
            catalog[module_path] = load_sidebar(path, module_path)
        except DocIndexError as e:
            errors.append(str(e))
    check_errors, warnings = split_messages(check_sidebar_catalog(catalog))
    return errors + check_errors, warnings, count


def validate_exports(export_dir: Path) -> list[str]:
    """Schema-check aliases.json and sidebars.json in an export directory."""
    errors = []
    for file_name, kind in ((ALIASES_EXPORT, "aliases"), (SIDEBARS_EXPORT, "sidebars")):
        path = export_dir / file_name
        if not path.exists():
            errors.append(f"{path}: not found")
            continue
        try:
            data = load_json(path)
        except DocIndexError as e:
            errors.append(str(e))
            continue
        errors.extend(f"{file_name}: {message}" for message in validate_export(data, kind))
    return errors


def print_messages(title: str, errors: list[str], warnings: list[str]) -> None:
    status = "FAIL" if errors else "OK"
    print(f"\n{title}: {status} ({len(errors)} error(s), {len(warnings)} warning(s))")
    for message in errors:
        print(f"  ERROR: {message}")
    for message in warnings:
        print(f"  Warning: {message.removeprefix('warning:').strip()}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate a rustdoc tree's alias table and sidebars",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0  All checks pass
  1  Alias table validation failed
  2  Sidebar validation failed
  3  Export schema validation failed
  4  Multiple failures (combination of above)
""",
    )
    parser.add_argument(
        "--doc-root", "-d",
        type=str,
        default=None,
        help="rustdoc output directory (default: <project>/api)",
    )
    parser.add_argument(
        "--export", "-e",
        type=str,
        default=None,
        help="Also schema-check the JSON exports in this directory",
    )
    parser.add_argument(
        "--skip-tree",
        action="store_true",
        help="Skip doc tree checks (only useful with --export)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    root = get_project_root()
    failures = set()

    if not args.skip_tree:
        doc_root = resolve_path(args.doc_root, root) if args.doc_root else get_doc_root(root)
        if not doc_root.is_dir():
            print(f"ERROR: Doc root not found at {doc_root}", file=sys.stderr)
            return EXIT_ALIASES

        print(f"Validating {doc_root}...")

        alias_errors, alias_warnings = validate_aliases(doc_root)
        print_messages("Alias table", alias_errors, alias_warnings)
        if alias_errors or (args.strict and alias_warnings):
            failures.add(EXIT_ALIASES)

        sidebar_errors, sidebar_warnings, count = validate_sidebars(doc_root)
        print_messages(f"Sidebars [{count} file(s)]", sidebar_errors, sidebar_warnings)
        if sidebar_errors or (args.strict and sidebar_warnings):
            failures.add(EXIT_SIDEBARS)

    if args.export:
        export_dir = resolve_path(args.export, root)
        schema_errors = validate_exports(export_dir)
        print_messages(f"Export schema [{export_dir}]", schema_errors, [])
        if schema_errors:
            failures.add(EXIT_SCHEMA)

    print(f"\n{'='*60}")
    if not failures:
        print("ALL CHECKS PASSED")
        return EXIT_OK
    print("VALIDATION FAILED")
    if len(failures) > 1:
        return EXIT_MULTIPLE
    return failures.pop()


if __name__ == "__main__":
    exit(main())
