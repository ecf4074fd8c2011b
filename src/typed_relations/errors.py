"""Exceptions raised by the relational engine."""

from __future__ import annotations

from pathlib import Path


class RelationError(Exception):
    """Base class for all typed_relations errors."""


class IncompatibleSchemaError(RelationError, ValueError):
    """Two tables disagree on arity or on the domain of a compared column."""


class UnknownAttributeError(RelationError, KeyError):
    """One or more attribute names do not exist on the table being queried."""

    def __init__(self, table: str, names: list[str]) -> None:
        self.table = table
        self.names = names
        super().__init__(f"Table '{table}' has no attribute(s): {', '.join(names)}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0])


class DomainViolationError(RelationError, TypeError):
    """A value does not belong to the domain of its column."""


class DuplicateTableError(RelationError, ValueError):
    """A table name is already held by another live table in the same catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' is already live in this catalog")


class UnknownDomainError(RelationError, ValueError):
    """A domain name could not be resolved."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown domain: '{name}'")


class StorageError(RelationError, OSError):
    """A table could not be saved to or loaded from its store."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])
