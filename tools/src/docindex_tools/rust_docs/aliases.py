"""
Search-alias tables (aliases.js).

rustdoc writes one aliases.js per doc tree:

    var ALIASES = {};
    ALIASES["adler32"] = {};
    ALIASES["nom"] = {"+":[{'crate':'nom','ty':8,'name':'Add','desc':'...','p':'nom::lib::std::ops'}],};

Each crate maps symbol tokens ("+", "[]", "{:?}", ...) to an ordered list
of cross-reference records. Duplicates are kept: the same trait can be
reachable through several path roots (nom::lib::std::cmp and
nom::lib::std::prelude::v1::v1).
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Sequence

from docindex_tools.shared import (
    ALIAS_RECORD_FIELDS,
    PATH_SEPARATOR,
    DocIndexParseError,
    dump_js_string,
    item_type_name,
    line_col,
    parse_js_literal,
    parse_js_string,
    read_text,
    skip_whitespace,
)


HEADER_PATTERN = re.compile(r'var\s+ALIASES\s*=\s*\{\s*\}\s*;?')
ASSIGNMENT_PATTERN = re.compile(r'ALIASES\s*\[')

HEADER_LINE = "var ALIASES = {};"


@dataclass(frozen=True)
class AliasEntry:
    """One cross-reference record for a symbol."""
    crate: str
    ty: int  # Item-kind code (index into ITEM_TYPES)
    name: str
    desc: str
    path: str  # Dotted module path, e.g. "nom::lib::std::ops"

    @property
    def kind(self) -> str:
        return item_type_name(self.ty)

    @property
    def href(self) -> str:
        """Documentation URL relative to the doc root."""
        base = "/".join(part for part in self.path.split(PATH_SEPARATOR) if part)
        if self.kind == "mod":
            page = f"{self.name}/index.html"
        else:
            page = f"{self.kind}.{self.name}.html"
        return f"{base}/{page}" if base else page

    def to_dict(self) -> dict[str, Any]:
        """Record in the generator's field order and naming."""
        return {
            "crate": self.crate,
            "ty": self.ty,
            "name": self.name,
            "desc": self.desc,
            "p": self.path,
        }

    @classmethod
    def from_dict(cls, record: Any, where: str = "") -> "AliasEntry":
        """
        Build an entry from a generator record.

        Raises DocIndexParseError if a field is missing or has the wrong type.
        """
        if not isinstance(record, dict):
            raise DocIndexParseError(f"{where}: alias record must be an object, got {type(record).__name__}")

        missing = [field for field in ALIAS_RECORD_FIELDS if field not in record]
        if missing:
            raise DocIndexParseError(f"{where}: alias record missing field(s): {', '.join(missing)}")

        for field in ("crate", "name", "desc", "p"):
            if not isinstance(record[field], str):
                raise DocIndexParseError(f"{where}: field '{field}' must be a string")
        ty = record["ty"]
        if not isinstance(ty, int) or isinstance(ty, bool):
            raise DocIndexParseError(f"{where}: field 'ty' must be an integer")

        return cls(
            crate=record["crate"],
            ty=ty,
            name=record["name"],
            desc=record["desc"],
            path=record["p"],
        )


@dataclass(frozen=True)
class AliasHit:
    """A search result: an alias entry and the symbol it was found under."""
    entry: AliasEntry
    alias: str

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.entry.to_dict(),
            "alias": self.alias,
            "kind": self.entry.kind,
            "href": self.entry.href,
        }


OperatorAliasMap = Mapping[str, tuple[AliasEntry, ...]]

_EMPTY_ALIAS_MAP: OperatorAliasMap = MappingProxyType({})


class AliasTable(Mapping):
    """
    Read-only mapping of crate name -> OperatorAliasMap.

    Indexing an unknown crate raises KeyError like any mapping; aliases_for()
    and lookup() treat absent keys as "no entry found".
    """

    def __init__(self, crates: Mapping[str, Mapping[str, Sequence[AliasEntry]]] | None = None):
        self._crates: dict[str, OperatorAliasMap] = {}
        for crate, symbols in (crates or {}).items():
            self._crates[crate] = MappingProxyType({
                symbol: tuple(entries) for symbol, entries in symbols.items()
            })

    def __getitem__(self, crate: str) -> OperatorAliasMap:
        return self._crates[crate]

    def __iter__(self) -> Iterator[str]:
        return iter(self._crates)

    def __len__(self) -> int:
        return len(self._crates)

    def __repr__(self) -> str:
        return f"AliasTable({len(self)} crates, {self.entry_count()} entries)"

    def crates(self) -> list[str]:
        return list(self._crates)

    def non_empty_crates(self) -> list[str]:
        return [crate for crate, symbols in self._crates.items() if symbols]

    def aliases_for(self, crate: str) -> OperatorAliasMap:
        return self._crates.get(crate, _EMPTY_ALIAS_MAP)

    def lookup(self, crate: str, symbol: str) -> list[AliasEntry]:
        return list(self.aliases_for(crate).get(symbol, ()))

    def symbols(self) -> list[str]:
        """Sorted union of all symbol tokens."""
        return sorted({symbol for symbols in self._crates.values() for symbol in symbols})

    def entry_count(self) -> int:
        return sum(
            len(entries)
            for symbols in self._crates.values()
            for entries in symbols.values()
        )

    def to_dict(self) -> dict[str, dict[str, list[dict[str, Any]]]]:
        return {
            crate: {
                symbol: [entry.to_dict() for entry in entries]
                for symbol, entries in symbols.items()
            }
            for crate, symbols in self._crates.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AliasTable":
        if not isinstance(data, Mapping):
            raise DocIndexParseError("alias table must be an object")
        return cls({crate: _build_symbol_map(crate, value) for crate, value in data.items()})


def _build_symbol_map(crate: str, value: Any) -> dict[str, list[AliasEntry]]:
    """Convert one crate's raw value into symbol -> entries."""
    if not isinstance(value, dict):
        raise DocIndexParseError(
            f"ALIASES[{crate!r}] must be an object, got {type(value).__name__}"
        )

    symbols = {}
    for symbol, records in value.items():
        where = f"ALIASES[{crate!r}][{symbol!r}]"
        if not isinstance(records, list):
            raise DocIndexParseError(f"{where} must be a list, got {type(records).__name__}")
        symbols[symbol] = [
            AliasEntry.from_dict(record, f"{where}[{i}]")
            for i, record in enumerate(records)
        ]
    return symbols


# =============================================================================
# aliases.js reading and writing
# =============================================================================

def parse_aliases_js(text: str, source: str | None = None) -> AliasTable:
    """
    Parse the contents of an aliases.js file.

    The `var ALIASES = {};` header is optional. A crate assigned twice keeps
    its later value.
    """
    crates: dict[str, dict[str, list[AliasEntry]]] = {}

    try:
        pos = skip_whitespace(text, 0)
        header = HEADER_PATTERN.match(text, pos)
        if header:
            pos = header.end()

        while True:
            pos = skip_whitespace(text, pos)
            if pos >= len(text):
                break

            statement_start = pos
            assignment = ASSIGNMENT_PATTERN.match(text, pos)
            if not assignment:
                raise _positioned(text, pos, "expected an ALIASES[\"crate\"] = {...}; statement")

            pos = skip_whitespace(text, assignment.end())
            crate, pos = parse_js_string(text, pos)
            pos = _expect(text, pos, "]")
            pos = _expect(text, pos, "=")
            value, pos = parse_js_literal(text, pos)

            pos = skip_whitespace(text, pos)
            if pos < len(text) and text[pos] == ";":
                pos += 1

            try:
                crates[crate] = _build_symbol_map(crate, value)
            except DocIndexParseError as e:
                line, column = line_col(text, statement_start)
                raise DocIndexParseError(e.message, line=line, column=column) from None
    except DocIndexParseError as e:
        if source:
            raise e.with_source(source) from None
        raise

    return AliasTable(crates)


def _expect(text: str, pos: int, token: str) -> int:
    pos = skip_whitespace(text, pos)
    if not text.startswith(token, pos):
        raise _positioned(text, pos, f"expected '{token}'")
    return pos + len(token)


def _positioned(text: str, pos: int, message: str) -> DocIndexParseError:
    line, column = line_col(text, pos)
    return DocIndexParseError(message, line=line, column=column)


def _dump_record(entry: AliasEntry) -> str:
    fields = []
    for field, value in entry.to_dict().items():
        rendered = str(value) if field == "ty" else dump_js_string(value, "'")
        fields.append(f"'{field}':{rendered}")
    return "{" + ",".join(fields) + "}"


def dump_aliases_js(table: AliasTable) -> str:
    """
    Serialize an alias table in the generator's byte format.

    One statement per crate, joined by newlines, no trailing newline. Every
    symbol entry in a non-empty map is followed by a comma.
    """
    lines = [HEADER_LINE]
    for crate in table:
        body = "".join(
            dump_js_string(symbol, '"') + ":[" + ",".join(_dump_record(e) for e in entries) + "],"
            for symbol, entries in table[crate].items()
        )
        lines.append("ALIASES[" + dump_js_string(crate, '"') + "] = {" + body + "};")
    return "\n".join(lines)


def load_aliases(path: Path) -> AliasTable:
    """Load an aliases.js file."""
    return parse_aliases_js(read_text(path), source=str(path))


# =============================================================================
# Search
# =============================================================================

def search_aliases(
    table: AliasTable,
    symbol: str,
    crate: str | None = None,
    current_crate: str | None = None,
) -> list[AliasHit]:
    """
    Find the items a symbol is an alias for.

    With `crate`, only that crate's entries are returned, in stored order.
    Otherwise every crate is searched: `current_crate` hits come first, then
    the rest; each group is sorted by item name, case-insensitively, keeping
    stored order between equal names.
    """
    query = symbol.strip()
    if not query:
        return []

    if crate is not None:
        return [AliasHit(entry, query) for entry in table.lookup(crate, query)]

    current: list[AliasEntry] = []
    others: list[AliasEntry] = []
    for name in table:
        entries = table.lookup(name, query)
        if name == current_crate:
            current.extend(entries)
        else:
            others.extend(entries)

    def by_name(entry: AliasEntry) -> str:
        return entry.name.lower()

    ordered = sorted(current, key=by_name) + sorted(others, key=by_name)
    return [AliasHit(entry, query) for entry in ordered]
