"""Tests for the table definition DSL parser."""

import pytest

from typed_relations.parsing import ColumnSpec, InsertSpec, SchemaParser, TableSpec
from typed_relations.parsing.schema_lexer import SchemaLexer


class TestSchemaLexer:
    """Tests for the schema lexer."""

    def test_tokenize_table(self):
        """Test tokenizing a table definition."""
        lexer = SchemaLexer()
        lexer.build()

        tokens = lexer.tokenize("table studio (name: String) key (name);")
        token_types = [t.type for t in tokens]

        assert token_types == [
            "TABLE",
            "IDENTIFIER",
            "LPAREN",
            "IDENTIFIER",
            "COLON",
            "IDENTIFIER",
            "RPAREN",
            "KEY",
            "LPAREN",
            "IDENTIFIER",
            "RPAREN",
            "SEMICOLON",
        ]

    def test_tokenize_literals(self):
        """Test tokenizing integer, float, string and character literals."""
        lexer = SchemaLexer()
        lexer.build()

        tokens = lexer.tokenize("""12 -7 3.5 .25 1e3 "a \\"b\\"" 'c'""")

        assert [t.type for t in tokens] == [
            "INTEGER", "INTEGER", "FLOAT", "FLOAT", "FLOAT", "STRING", "CHAR",
        ]
        assert [t.value for t in tokens] == [12, -7, 3.5, 0.25, 1000.0, 'a "b"', "c"]

    def test_escaped_character(self):
        lexer = SchemaLexer()
        lexer.build()

        tokens = lexer.tokenize(r"'\n'")
        assert tokens[0].value == "\n"

    def test_comments_and_newlines_ignored(self):
        """Comments and newlines produce no tokens but advance line numbers."""
        lexer = SchemaLexer()
        lexer.build()

        tokens = lexer.tokenize("# a comment\n\ninsert")
        assert [t.type for t in tokens] == ["INSERT"]
        assert tokens[0].lineno == 3

    def test_illegal_character(self):
        """Test error on illegal character."""
        lexer = SchemaLexer()
        lexer.build()

        with pytest.raises(SyntaxError, match="Illegal character '@'"):
            lexer.tokenize("table @")


class TestSchemaParser:
    """Tests for the schema parser."""

    def test_parse_table(self):
        """Test parsing a table definition with a composite key."""
        parser = SchemaParser()
        specs = parser.parse(
            """
            table movie (title: String, year: Integer, length: Integer,
                         genre: String, studioName: String, producerNo: Integer)
                  key (title, year);
            """
        )

        assert len(specs) == 1
        spec = specs[0]
        assert isinstance(spec, TableSpec)
        assert spec.name == "movie"
        assert spec.attributes == ["title", "year", "length", "genre", "studioName", "producerNo"]
        assert spec.domains == ["String", "Integer", "Integer", "String", "String", "Integer"]
        assert spec.key == ["title", "year"]
        assert spec.lineno == 2

    def test_parse_table_without_key(self):
        parser = SchemaParser()
        specs = parser.parse("table t (a: int8)")

        assert specs == [TableSpec(name="t", columns=[ColumnSpec("a", "int8")], key=None, lineno=1)]

    def test_parse_insert(self):
        """Test parsing an insert statement."""
        parser = SchemaParser()
        specs = parser.parse('insert into movie values ("Star_Wars", 1977, 124.5, \'T\')')

        assert specs == [
            InsertSpec(table="movie", values=["Star_Wars", 1977, 124.5, "T"], lineno=1)
        ]

    def test_parse_script(self):
        """Statements come back in order; semicolons are optional."""
        parser = SchemaParser()
        specs = parser.parse(
            """
            table studio (name: String, presNo: Long) key (name)
            insert into studio values ("Fox", 7777)
            insert into studio values ("Universal", 8888);
            """
        )

        assert [type(s) for s in specs] == [TableSpec, InsertSpec, InsertSpec]
        assert [s.lineno for s in specs] == [2, 3, 4]

    def test_parse_empty(self):
        """An empty or comment-only script has no statements."""
        parser = SchemaParser()
        assert parser.parse("") == []
        assert parser.parse("# nothing here\n") == []

    def test_line_numbers_reset(self):
        """Each parse counts lines from 1."""
        parser = SchemaParser()
        parser.parse("\n\n\ntable a (x: int8)")
        specs = parser.parse("table b (x: int8)")
        assert specs[0].lineno == 1

    def test_syntax_error(self):
        parser = SchemaParser()
        with pytest.raises(SyntaxError, match="Syntax error at 'key'"):
            parser.parse("table t key (a)")

    def test_syntax_error_at_end(self):
        parser = SchemaParser()
        with pytest.raises(SyntaxError, match="end of input"):
            parser.parse("table t (a: int8")
