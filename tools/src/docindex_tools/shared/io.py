"""
JSON and text I/O utilities.

Files are read as UTF-8; undecodable bytes and malformed JSON surface as
DocIndexParseError naming the file. JSON files are written with indent=2 and
a trailing newline, through a temporary file so a failed write never leaves a
truncated export behind.
"""

import json
from pathlib import Path
from typing import Any

from .errors import DocIndexParseError


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, raising FileNotFoundError with the path if absent."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocIndexParseError(
            f"invalid UTF-8 at byte {e.start}: {e.reason}", source=str(path)
        ) from e


def load_json(path: Path) -> Any:
    """Load a JSON document."""
    text = read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DocIndexParseError(
            f"invalid JSON: {e.msg}", source=str(path), line=e.lineno, column=e.colno
        ) from e


def save_json(path: Path, data: Any) -> None:
    """Save a JSON document with indent=2 and a trailing newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_bytes(content.encode("utf-8"))
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    tmp_path.replace(path)
