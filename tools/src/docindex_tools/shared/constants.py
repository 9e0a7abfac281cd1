"""
Shared constants for rustdoc index data.

ITEM_TYPES follows the itemTypes ordering rustdoc used when these search
files were generated; the integer `ty` field of an alias record is an
index into it.
"""

ITEM_TYPES = [
    "mod",
    "externcrate",
    "import",
    "struct",
    "enum",
    "fn",
    "type",
    "static",
    "trait",
    "impl",
    "tymethod",
    "method",
    "structfield",
    "variant",
    "macro",
    "primitive",
    "associatedtype",
    "constant",
    "associatedconstant",
    "union",
    "foreigntype",
    "keyword",
    "existential",
    "attr",
    "derive",
    "traitalias",
]

UNKNOWN_ITEM_TYPE = "unknown"

# Sidebar block order and headings, as the documentation front-end shows them
SIDEBAR_BLOCKS = [
    ("mod", "Modules"),
    ("macro", "Macros"),
    ("struct", "Structs"),
    ("enum", "Enums"),
    ("union", "Unions"),
    ("trait", "Traits"),
    ("fn", "Functions"),
    ("type", "Type Definitions"),
    ("constant", "Constants"),
    ("static", "Statics"),
    ("foreigntype", "Foreign Types"),
    ("keyword", "Keywords"),
    ("traitalias", "Trait Aliases"),
    ("primitive", "Primitive Types"),
]

SIDEBAR_CATEGORIES = {category for category, _ in SIDEBAR_BLOCKS}

# Field names of an alias record as written by the generator, in output order
ALIAS_RECORD_FIELDS = ("crate", "ty", "name", "desc", "p")

# Module path separator in alias records and sidebar lookups
PATH_SEPARATOR = "::"


def item_type_name(code: int) -> str:
    """Map an item-kind code to its name ("unknown" if out of range)."""
    if isinstance(code, int) and not isinstance(code, bool) and 0 <= code < len(ITEM_TYPES):
        return ITEM_TYPES[code]
    return UNKNOWN_ITEM_TYPE


def is_known_item_type(code: int) -> bool:
    """Check whether an item-kind code is in the generator's closed set."""
    return item_type_name(code) != UNKNOWN_ITEM_TYPE
