"""Tests for alias table parsing, lookup, search and re-serialization."""

from __future__ import annotations

from pathlib import Path

import pytest

from docindex_tools.shared import DocIndexParseError
from docindex_tools.rust_docs.aliases import (
    AliasEntry,
    AliasTable,
    dump_aliases_js,
    load_aliases,
    parse_aliases_js,
    search_aliases,
)


def _entry(name: str, crate: str = "nom", ty: int = 8, path: str = "nom::lib::std::ops") -> AliasEntry:
    return AliasEntry(crate=crate, ty=ty, name=name, desc=f"{name} docs", path=path)


class TestGeneratedAliases:
    """Properties of the real aliases.js fixture."""

    def test_crate_count(self, alias_table: AliasTable) -> None:
        assert len(alias_table) == 146
        assert alias_table.crates()[0] == "adler32"
        assert alias_table.crates()[-1] == "zstd_sys"

    def test_only_nom_has_aliases(self, alias_table: AliasTable) -> None:
        assert alias_table.non_empty_crates() == ["nom"]
        assert alias_table.entry_count() == 68
        assert len(alias_table["nom"]) == 35

    def test_adler32_is_empty_mapping(self, alias_table: AliasTable) -> None:
        assert dict(alias_table["adler32"]) == {}

    def test_nom_plus(self, alias_table: AliasTable) -> None:
        entries = alias_table["nom"]["+"]
        assert len(entries) == 2
        assert all(e.crate == "nom" and e.ty == 8 for e in entries)
        assert [e.name for e in entries] == ["AddAssign", "Add"]

    def test_every_crate_maps_symbols_to_sequences(self, alias_table: AliasTable) -> None:
        for crate in alias_table:
            for symbol, entries in alias_table[crate].items():
                assert isinstance(symbol, str)
                assert isinstance(entries, tuple)

    def test_item_kind_codes_and_paths(self, alias_table: AliasTable) -> None:
        codes = set()
        for symbols in alias_table.values():
            for entries in symbols.values():
                for entry in entries:
                    codes.add(entry.ty)
                    assert entry.path
        assert codes == {3, 8}

    def test_duplicates_across_path_roots_are_kept(self, alias_table: AliasTable) -> None:
        entries = alias_table["nom"]["=="]
        assert [e.name for e in entries] == ["PartialEq", "Eq", "PartialEq", "Eq"]
        assert entries[0].path == "nom::lib::std::cmp"
        assert entries[2].path == "nom::lib::std::prelude::v1::v1"

    def test_truncated_description_kept_verbatim(self, alias_table: AliasTable) -> None:
        deref_mut = [e for e in alias_table["nom"]["*"] if e.name == "DerefMut"][0]
        assert deref_mut.desc.endswith("`*v =…")

    def test_symbols_sorted_union(self, alias_table: AliasTable) -> None:
        symbols = alias_table.symbols()
        assert symbols == sorted(symbols)
        assert "{:?}" in symbols and "..=" in symbols


class TestRoundTrip:

    def test_dump_reproduces_generator_bytes(self, aliases_text: str) -> None:
        assert dump_aliases_js(parse_aliases_js(aliases_text)) == aliases_text

    def test_dict_round_trip_preserves_order(self, alias_table: AliasTable) -> None:
        rebuilt = AliasTable.from_dict(alias_table.to_dict())
        assert rebuilt == alias_table
        assert list(rebuilt["nom"]) == list(alias_table["nom"])
        assert rebuilt.crates() == alias_table.crates()

    def test_empty_table_dump(self) -> None:
        assert dump_aliases_js(AliasTable()) == "var ALIASES = {};"

    def test_dump_escapes_quotes(self) -> None:
        table = AliasTable({"x": {"'": [AliasEntry("x", 8, "Q", "it's", "x::q")]}})
        text = dump_aliases_js(table)
        assert "'desc':'it\\'s'" in text
        assert parse_aliases_js(text) == table


class TestLookup:

    def test_lookup_found(self, alias_table: AliasTable) -> None:
        assert [e.name for e in alias_table.lookup("nom", "?")] == ["Try"]

    def test_missing_crate_and_symbol_are_not_errors(self, alias_table: AliasTable) -> None:
        assert alias_table.lookup("no_such_crate", "+") == []
        assert alias_table.lookup("nom", "<=>") == []
        assert dict(alias_table.aliases_for("no_such_crate")) == {}

    def test_indexing_unknown_crate_raises_key_error(self, alias_table: AliasTable) -> None:
        with pytest.raises(KeyError):
            alias_table["no_such_crate"]

    def test_table_is_read_only(self, alias_table: AliasTable) -> None:
        with pytest.raises(TypeError):
            alias_table["nom"]["+"] = ()  # type: ignore[index]

    def test_lookup_returns_a_copy(self, alias_table: AliasTable) -> None:
        result = alias_table.lookup("nom", "+")
        result.clear()
        assert len(alias_table.lookup("nom", "+")) == 2


class TestAliasEntry:

    def test_kind_and_href_for_trait(self) -> None:
        entry = _entry("Add")
        assert entry.kind == "trait"
        assert entry.href == "nom/lib/std/ops/trait.Add.html"

    def test_href_for_struct(self) -> None:
        entry = _entry("RangeFull", ty=3)
        assert entry.href == "nom/lib/std/ops/struct.RangeFull.html"

    def test_href_for_module(self) -> None:
        entry = _entry("ops", ty=0, path="nom::lib::std")
        assert entry.href == "nom/lib/std/ops/index.html"

    def test_unknown_kind(self) -> None:
        assert _entry("X", ty=99).kind == "unknown"

    def test_to_dict_uses_generator_field_names(self) -> None:
        assert list(_entry("Add").to_dict()) == ["crate", "ty", "name", "desc", "p"]

    def test_from_dict_missing_field(self) -> None:
        with pytest.raises(DocIndexParseError, match="missing field"):
            AliasEntry.from_dict({"crate": "nom", "ty": 8, "name": "Add", "desc": ""})

    def test_from_dict_rejects_bool_ty(self) -> None:
        with pytest.raises(DocIndexParseError, match="'ty' must be an integer"):
            AliasEntry.from_dict({"crate": "nom", "ty": True, "name": "A", "desc": "", "p": "nom"})


class TestParseErrors:

    def test_header_is_optional(self) -> None:
        table = parse_aliases_js('ALIASES["a"] = {};')
        assert table.crates() == ["a"]

    def test_later_assignment_wins(self) -> None:
        text = (
            'var ALIASES = {};\n'
            'ALIASES["a"] = {"+":[{\'crate\':\'a\',\'ty\':8,\'name\':\'Add\',\'desc\':\'\',\'p\':\'a\'}],};\n'
            'ALIASES["a"] = {};'
        )
        assert dict(parse_aliases_js(text)["a"]) == {}

    def test_crate_value_must_be_object(self) -> None:
        with pytest.raises(DocIndexParseError, match="must be an object") as excinfo:
            parse_aliases_js('var ALIASES = {};\nALIASES["a"] = [];')
        assert excinfo.value.line == 2

    def test_symbol_value_must_be_list(self) -> None:
        with pytest.raises(DocIndexParseError, match="must be a list"):
            parse_aliases_js('ALIASES["a"] = {"+": {}};')

    def test_unexpected_statement(self) -> None:
        with pytest.raises(DocIndexParseError, match="expected an ALIASES"):
            parse_aliases_js('var ALIASES = {};\nfoo();')

    def test_load_error_names_the_file(self, tmp_path: Path) -> None:
        path = tmp_path / "aliases.js"
        path.write_text('ALIASES["a"] = {', encoding="utf-8")
        with pytest.raises(DocIndexParseError) as excinfo:
            load_aliases(path)
        assert str(excinfo.value).startswith(str(path))

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_aliases(tmp_path / "aliases.js")


class TestSearch:

    def test_all_crates_sorted_by_name(self, alias_table: AliasTable) -> None:
        hits = search_aliases(alias_table, "==")
        assert [h.entry.name for h in hits] == ["Eq", "Eq", "PartialEq", "PartialEq"]
        # Equal names keep stored order
        assert hits[0].entry.path == "nom::lib::std::cmp"
        assert all(h.alias == "==" for h in hits)

    def test_crate_filter_keeps_stored_order(self, alias_table: AliasTable) -> None:
        hits = search_aliases(alias_table, "+", crate="nom")
        assert [h.entry.name for h in hits] == ["AddAssign", "Add"]

    def test_query_is_stripped(self, alias_table: AliasTable) -> None:
        assert len(search_aliases(alias_table, "  ?  ")) == 1
        assert search_aliases(alias_table, "   ") == []

    def test_current_crate_first(self) -> None:
        table = AliasTable({
            "alpha": {"+": [_entry("Add", crate="alpha", path="alpha::ops")]},
            "beta": {"+": [_entry("Zadd", crate="beta", path="beta::ops"),
                           _entry("add", crate="beta", path="beta::ops")]},
        })
        hits = search_aliases(table, "+", current_crate="beta")
        assert [(h.entry.crate, h.entry.name) for h in hits] == [
            ("beta", "add"),
            ("beta", "Zadd"),
            ("alpha", "Add"),
        ]

    def test_no_hits(self, alias_table: AliasTable) -> None:
        assert search_aliases(alias_table, "<=>") == []

    def test_hit_to_dict(self, alias_table: AliasTable) -> None:
        hit = search_aliases(alias_table, "?")[0]
        data = hit.to_dict()
        assert data["alias"] == "?"
        assert data["kind"] == "trait"
        assert data["href"] == "nom/lib/std/ops/trait.Try.html"
        assert data["p"] == "nom::lib::std::ops"
