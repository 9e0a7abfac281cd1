"""
rustdoc Index Data

This package loads, queries and re-serializes the static data files rustdoc
writes next to generated documentation:

- aliases.js: symbol search aliases (crate -> symbol -> item records)
- sidebar-items.js: per-module navigation sidebars (kind -> [name, desc])

Tools:
- extract-doc-index: Export a doc tree to JSON
- search-aliases: Look up the items a symbol is an alias for
- show-sidebar: Print a module's navigation sidebar
- validate-doc-index: Check a doc tree and its JSON exports
"""

from .aliases import (
    AliasEntry,
    AliasHit,
    AliasTable,
    OperatorAliasMap,
    dump_aliases_js,
    load_aliases,
    parse_aliases_js,
    search_aliases,
)
from .sidebar import (
    SidebarEntry,
    SidebarIndex,
    dump_sidebar_js,
    iter_sidebar_files,
    load_sidebar,
    load_sidebar_catalog,
    module_path_for,
    normalize_module_path,
    parse_sidebar_js,
)

__all__ = [
    "AliasEntry",
    "AliasHit",
    "AliasTable",
    "OperatorAliasMap",
    "dump_aliases_js",
    "load_aliases",
    "parse_aliases_js",
    "search_aliases",
    "SidebarEntry",
    "SidebarIndex",
    "dump_sidebar_js",
    "iter_sidebar_files",
    "load_sidebar",
    "load_sidebar_catalog",
    "module_path_for",
    "normalize_module_path",
    "parse_sidebar_js",
]
