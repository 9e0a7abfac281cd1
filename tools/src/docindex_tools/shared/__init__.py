"""
Shared utilities for the doc index tools.

Modules:
- paths: Project root, doc tree and export path utilities
- constants: Item-kind codes, sidebar block order, record field names
- errors: DocIndexError hierarchy
- io: Text and JSON I/O utilities
- js_literal: Reader/writer for the JavaScript data literals rustdoc emits
- schema_version: Version detection for JSON exports
"""

from .paths import (
    ROOT_ENV_VAR,
    ALIASES_FILE_NAME,
    SIDEBAR_FILE_NAME,
    get_project_root,
    get_doc_root,
    get_output_dir,
    get_aliases_path,
    get_schemas_dir,
    resolve_path,
)

from .constants import (
    ITEM_TYPES,
    UNKNOWN_ITEM_TYPE,
    SIDEBAR_BLOCKS,
    SIDEBAR_CATEGORIES,
    ALIAS_RECORD_FIELDS,
    PATH_SEPARATOR,
    item_type_name,
    is_known_item_type,
)

from .errors import (
    DocIndexError,
    DocIndexParseError,
    JsLiteralError,
)

from .io import (
    read_text,
    load_json,
    save_json,
)

from .js_literal import (
    parse_js_literal,
    parse_js_string,
    dump_js_string,
    skip_whitespace,
    line_col,
)

from .schema_version import (
    SchemaVersion,
    CURRENT_SCHEMA_VERSION,
    detect_schema_version,
    is_supported,
    stamp,
)

__all__ = [
    # paths
    "ROOT_ENV_VAR",
    "ALIASES_FILE_NAME",
    "SIDEBAR_FILE_NAME",
    "get_project_root",
    "get_doc_root",
    "get_output_dir",
    "get_aliases_path",
    "get_schemas_dir",
    "resolve_path",
    # constants
    "ITEM_TYPES",
    "UNKNOWN_ITEM_TYPE",
    "SIDEBAR_BLOCKS",
    "SIDEBAR_CATEGORIES",
    "ALIAS_RECORD_FIELDS",
    "PATH_SEPARATOR",
    "item_type_name",
    "is_known_item_type",
    # errors
    "DocIndexError",
    "DocIndexParseError",
    "JsLiteralError",
    # io
    "read_text",
    "load_json",
    "save_json",
    # js_literal
    "parse_js_literal",
    "parse_js_string",
    "dump_js_string",
    "skip_whitespace",
    "line_col",
    # schema_version
    "SchemaVersion",
    "CURRENT_SCHEMA_VERSION",
    "detect_schema_version",
    "is_supported",
    "stamp",
]
