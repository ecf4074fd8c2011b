"""Parsing module for the table definition DSL."""

from typed_relations.parsing.schema_parser import (
    ColumnSpec,
    InsertSpec,
    SchemaParser,
    TableSpec,
)

__all__ = [
    "ColumnSpec",
    "InsertSpec",
    "SchemaParser",
    "TableSpec",
]
