"""Parser for the table definition DSL."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from typed_relations.parsing.schema_lexer import SchemaLexer


@dataclass
class ColumnSpec:
    """An attribute and the name of its domain, before resolution."""

    name: str
    domain: str


@dataclass
class TableSpec:
    """A table definition before it is turned into a Table."""

    name: str
    columns: list[ColumnSpec]
    key: list[str] | None = None  # None means every attribute is part of the key
    lineno: int = 0

    @property
    def attributes(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def domains(self) -> list[str]:
        return [c.domain for c in self.columns]


@dataclass
class InsertSpec:
    """A literal tuple to insert into a named table."""

    table: str
    values: list[Any] = field(default_factory=list)
    lineno: int = 0


class SchemaParser:
    """Parser for table definitions and insert statements.

    Example::

        table movie (title: String, year: Integer) key (title, year);
        insert into movie values ("Star_Wars", 1977);
    """

    tokens = SchemaLexer.tokens

    def __init__(self) -> None:
        self.lexer = SchemaLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_script(self, p: yacc.YaccProduction) -> None:
        """script : statement_list"""
        p[0] = p[1]

    def p_script_empty(self, p: yacc.YaccProduction) -> None:
        """script :"""
        p[0] = []

    def p_statement_list_single(self, p: yacc.YaccProduction) -> None:
        """statement_list : statement"""
        p[0] = [p[1]]

    def p_statement_list_multiple(self, p: yacc.YaccProduction) -> None:
        """statement_list : statement_list statement"""
        p[0] = p[1] + [p[2]]

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : table_def
                     | table_def SEMICOLON
                     | insert_stmt
                     | insert_stmt SEMICOLON"""
        p[0] = p[1]

    def p_table_def(self, p: yacc.YaccProduction) -> None:
        """table_def : TABLE IDENTIFIER LPAREN column_list RPAREN key_clause"""
        p[0] = TableSpec(name=p[2], columns=p[4], key=p[6], lineno=p.lineno(1))

    def p_table_def_no_key(self, p: yacc.YaccProduction) -> None:
        """table_def : TABLE IDENTIFIER LPAREN column_list RPAREN"""
        p[0] = TableSpec(name=p[2], columns=p[4], lineno=p.lineno(1))

    def p_key_clause(self, p: yacc.YaccProduction) -> None:
        """key_clause : KEY LPAREN name_list RPAREN"""
        p[0] = p[3]

    def p_column_list_single(self, p: yacc.YaccProduction) -> None:
        """column_list : column"""
        p[0] = [p[1]]

    def p_column_list_multiple(self, p: yacc.YaccProduction) -> None:
        """column_list : column_list COMMA column"""
        p[0] = p[1] + [p[3]]

    def p_column(self, p: yacc.YaccProduction) -> None:
        """column : IDENTIFIER COLON IDENTIFIER"""
        p[0] = ColumnSpec(name=p[1], domain=p[3])

    def p_name_list_single(self, p: yacc.YaccProduction) -> None:
        """name_list : IDENTIFIER"""
        p[0] = [p[1]]

    def p_name_list_multiple(self, p: yacc.YaccProduction) -> None:
        """name_list : name_list COMMA IDENTIFIER"""
        p[0] = p[1] + [p[3]]

    def p_insert_stmt(self, p: yacc.YaccProduction) -> None:
        """insert_stmt : INSERT INTO IDENTIFIER VALUES LPAREN literal_list RPAREN"""
        p[0] = InsertSpec(table=p[3], values=p[6], lineno=p.lineno(1))

    def p_literal_list_single(self, p: yacc.YaccProduction) -> None:
        """literal_list : literal"""
        p[0] = [p[1]]

    def p_literal_list_multiple(self, p: yacc.YaccProduction) -> None:
        """literal_list : literal_list COMMA literal"""
        p[0] = p[1] + [p[3]]

    def p_literal(self, p: yacc.YaccProduction) -> None:
        """literal : INTEGER
                   | FLOAT
                   | STRING
                   | CHAR"""
        p[0] = p[1]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> list[TableSpec | InsertSpec]:
        """Parse a script and return its statements in order."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        # ply does not reset line numbers between inputs
        self.lexer.lexer.lineno = 1
        specs = self.parser.parse(data, lexer=self.lexer.lexer)
        if specs is None:
            specs = []
        return specs
