#!/usr/bin/env python3
"""
search-aliases: Look up the items an operator or symbol is an alias for.

Queries the alias table the way the documentation search box does when a
user types a symbol such as `+=`, `[]` or `{:?}`.

Usage:
    uv run search-aliases --symbol "+"
    uv run search-aliases --symbol "==" --crate nom
    uv run search-aliases --symbol "*" --current-crate nom --json
    uv run search-aliases --symbol "?" --aliases index/aliases.json
    uv run search-aliases --symbol=-=            # Tokens starting with "-" need "="

Options:
    --symbol TEXT         Symbol token to search for
    --crate NAME          Search only this crate
    --current-crate NAME  Rank this crate's hits first
    --doc-root DIR        rustdoc output directory (default: <project>/api)
    --aliases FILE        aliases.js or an exported aliases.json
    --json                Output results as JSON
"""

import argparse
import json
import sys
from pathlib import Path

from docindex_tools.shared import (
    DocIndexError,
    get_aliases_path,
    get_doc_root,
    get_project_root,
    resolve_path,
)
from docindex_tools.rust_docs.aliases import AliasHit, AliasTable, load_aliases, search_aliases
from docindex_tools.rust_docs.extract import load_alias_export


def load_table(path: Path) -> AliasTable:
    """Load aliases.js, or an aliases.json export when the suffix says so."""
    if path.suffix == ".json":
        return load_alias_export(path)
    return load_aliases(path)


def format_results(hits: list[AliasHit], symbol: str) -> None:
    """Print hits grouped by crate."""
    if not hits:
        print(f"No aliases found for {symbol!r}.")
        return

    by_crate: dict[str, list[AliasHit]] = {}
    for hit in hits:
        by_crate.setdefault(hit.entry.crate, []).append(hit)

    for crate, crate_hits in by_crate.items():
        print(f"\n{'='*60}")
        print(f" {crate}")
        print(f"{'='*60}")

        for i, hit in enumerate(crate_hits, 1):
            entry = hit.entry
            print(f"\n{i}. [{entry.kind}] {entry.path}::{entry.name}")
            if entry.desc:
                print(f"   {entry.desc}")
            print(f"   Link: {entry.href}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Look up the items a symbol is an alias for"
    )
    parser.add_argument(
        "--symbol", "-s",
        type=str,
        required=True,
        help="Symbol token to search for (e.g. '+=', '[]')",
    )
    parser.add_argument(
        "--crate", "-c",
        type=str,
        default=None,
        help="Search only this crate",
    )
    parser.add_argument(
        "--current-crate",
        type=str,
        default=None,
        help="Rank hits from this crate first",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--doc-root", "-d",
        type=str,
        default=None,
        help="rustdoc output directory (default: <project>/api)",
    )
    source.add_argument(
        "--aliases", "-a",
        type=str,
        default=None,
        help="aliases.js or exported aliases.json to search",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    root = get_project_root()

    if args.aliases:
        aliases_path = resolve_path(args.aliases, root)
    else:
        doc_root = resolve_path(args.doc_root, root) if args.doc_root else get_doc_root(root)
        aliases_path = get_aliases_path(doc_root)

    if not args.json:
        print(f"Loading {aliases_path}...", file=sys.stderr)

    try:
        table = load_table(aliases_path)
    except (DocIndexError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    hits = search_aliases(
        table,
        args.symbol,
        crate=args.crate,
        current_crate=args.current_crate,
    )

    if args.json:
        output = {
            "symbol": args.symbol.strip(),
            "crate": args.crate,
            "current_crate": args.current_crate,
            "total": len(hits),
            "results": [hit.to_dict() for hit in hits],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(f"Symbol: {args.symbol.strip()}")
        format_results(hits, args.symbol.strip())

        crates = {hit.entry.crate for hit in hits}
        print(f"\n{'='*60}")
        print(f"Total: {len(hits)} result(s) from {len(crates)} crate(s)")

    return 0


if __name__ == "__main__":
    exit(main())
