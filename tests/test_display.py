"""Tests for fixed-width rendering of tables and indexes."""

from typed_relations.catalog import Catalog
from typed_relations.display import (
    format_index,
    format_table,
    format_value,
    print_index,
    print_table,
)
from typed_relations.index import IndexKind
from typed_relations.table import Table


def make_studio(**kwargs):
    table = Table("studio", "name presNo", "String Integer", "name", catalog=Catalog(), **kwargs)
    table.insert(("Universal", 8888))
    table.insert(("Fox", 7777))
    return table


class TestFormatValue:
    """Tests for format_value."""

    def test_plain(self):
        assert format_value(1977) == "1977"
        assert format_value("Fox") == "Fox"

    def test_float(self):
        assert format_value(8.5) == "8.5"
        assert format_value(1 / 3) == "0.333333"

    def test_truncates(self):
        assert format_value("A_Very_Long_Movie_Title") == "A_Very_Long_..."
        assert len(format_value("x" * 40)) == 15


class TestFormatTable:
    """Tests for format_table."""

    def test_layout(self):
        text = format_table(make_studio())
        rule = "|-" + "-" * 30 + "-|"

        assert text.split("\n") == [
            "",
            " Table studio",
            rule,
            "|            name         presNo |",
            rule,
            "|       Universal           8888 |",
            "|             Fox           7777 |",
            rule,
        ]

    def test_limit(self):
        lines = format_table(make_studio(), limit=1).split("\n")
        assert "|       Universal           8888 |" in lines
        assert "|             Fox           7777 |" not in lines
        assert lines[-1] == " ... 1 more"

    def test_width(self):
        text = format_table(make_studio(), width=10)
        assert "|       name    presNo |" in text

    def test_print_table(self, capsys):
        print_table(make_studio())
        assert " Table studio" in capsys.readouterr().out


class TestFormatIndex:
    """Tests for format_index."""

    def test_entries_in_key_order(self):
        text = format_index(make_studio())

        assert text.split("\n") == [
            "",
            " Index for studio",
            "-------------------",
            "{ Fox } -> [Fox, 7777]",
            "{ Universal } -> [Universal, 8888]",
            "-------------------",
        ]

    def test_hash_index_in_key_order(self):
        text = format_index(make_studio(index_kind=IndexKind.HASH))
        assert text.index("{ Fox }") < text.index("{ Universal }")

    def test_no_index(self):
        text = format_index(make_studio(index_kind=IndexKind.NONE))
        assert "(no index)" in text

    def test_print_index(self, capsys):
        print_index(make_studio())
        assert "{ Fox } -> [Fox, 7777]" in capsys.readouterr().out
