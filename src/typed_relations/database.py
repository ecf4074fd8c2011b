"""A set of named tables, built from the table definition DSL."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from typed_relations.catalog import Catalog
from typed_relations.errors import DomainViolationError
from typed_relations.index import IndexKind
from typed_relations.parsing import InsertSpec, SchemaParser, TableSpec
from typed_relations.storage import TableStore
from typed_relations.table import Table

logger = logging.getLogger(__name__)


class Database:
    """Named tables created and populated by scripts."""

    def __init__(
        self,
        tables: Iterable[Table] = (),
        *,
        index_kind: IndexKind = IndexKind.ORDERED,
        catalog: Catalog | None = None,
    ) -> None:
        """Initialize a database.

        Args:
            tables: Tables to start with.
            index_kind: Index implementation for tables created by scripts.
            catalog: Catalog for tables created by scripts.
        """
        self.index_kind = index_kind
        self.catalog = catalog
        self._tables: dict[str, Table] = {}
        self._parser = SchemaParser()
        for table in tables:
            self.add(table)

    @classmethod
    def parse(cls, script: str, **kwargs: Any) -> Database:
        """Create a database by running a script of table definitions and inserts.

        Args:
            script: DSL text.
            **kwargs: Passed on to the constructor.

        Returns:
            A new Database instance.
        """
        db = cls(**kwargs)
        db.execute(script)
        return db

    @classmethod
    def load(cls, store: TableStore, names: Iterable[str] | None = None, **kwargs: Any) -> Database:
        """Load saved tables (all of them unless names are given)."""
        db = cls(**kwargs)
        for name in names if names is not None else store.list_tables():
            db.add(store.load(name, index_kind=db.index_kind, catalog=db.catalog))
        return db

    def execute(self, script: str) -> None:
        """Run a script against this database.

        Raises:
            SyntaxError: If the script does not parse.
            ValueError: If a table is defined twice.
            KeyError: If an insert names an unknown table.
            DomainViolationError: If an inserted literal does not fit its column.
        """
        for spec in self._parser.parse(script):
            if isinstance(spec, TableSpec):
                self._create(spec)
            elif isinstance(spec, InsertSpec):
                self._insert(spec)

    def add(self, table: Table) -> None:
        """Add a table under its own name."""
        if table.name in self._tables:
            raise ValueError(f"Table '{table.name}' is already defined")
        self._tables[table.name] = table

    def save(self, store: TableStore) -> None:
        for table in self._tables.values():
            store.save(table)

    def names(self) -> list[str]:
        return list(self._tables)

    def _create(self, spec: TableSpec) -> None:
        if spec.name in self._tables:
            raise ValueError(f"Table '{spec.name}' is already defined (line {spec.lineno})")
        table = Table(
            spec.name,
            spec.attributes,
            spec.domains,
            spec.key if spec.key is not None else spec.attributes,
            index_kind=self.index_kind,
            catalog=self.catalog,
        )
        logger.debug("DDL> create table %s (%s)", table.name, " ".join(table.attributes))
        self._tables[table.name] = table

    def _insert(self, spec: InsertSpec) -> None:
        table = self._tables.get(spec.table)
        if table is None:
            raise KeyError(f"Unknown table '{spec.table}' (line {spec.lineno})")
        if len(spec.values) != len(table.domains):
            raise DomainViolationError(
                f"Insert into {table.name} has {len(spec.values)} values, "
                f"expected {len(table.domains)} (line {spec.lineno})"
            )
        try:
            values = [d.coerce(v) for d, v in zip(table.domains, spec.values)]
        except DomainViolationError as exc:
            raise DomainViolationError(f"{exc} (line {spec.lineno})") from exc
        if not table.insert(values):
            raise DomainViolationError(
                f"Insert into {table.name} rejected (line {spec.lineno})"
            )

    def __getitem__(self, name: str) -> Table:
        try:
            return self._tables[name]
        except KeyError:
            raise KeyError(f"Unknown table '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)
