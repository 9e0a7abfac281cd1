"""
Schema version detection for JSON exports.

Schema versions:
- v1.0: aliases.json holds {"crates": {crate: {symbol: [record, ...]}}};
        sidebars.json holds {"modules": {module_path: {category: [[name, desc], ...]}}}

Exports without a schema_version field are treated as v1.0.
"""

from typing import Any, Dict, Literal

SchemaVersion = Literal["1.0"]

CURRENT_SCHEMA_VERSION: SchemaVersion = "1.0"
SUPPORTED_SCHEMA_VERSIONS = ("1.0",)


def detect_schema_version(data: Dict[str, Any]) -> str:
    """Detect the schema version of an export (default "1.0")."""
    return data.get("schema_version", "1.0")


def is_supported(data: Dict[str, Any]) -> bool:
    """Check whether this toolkit can read the export."""
    return detect_schema_version(data) in SUPPORTED_SCHEMA_VERSIONS


def stamp(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of `data` with schema_version set as its first key."""
    return {"schema_version": CURRENT_SCHEMA_VERSION, **{
        k: v for k, v in data.items() if k != "schema_version"
    }}
