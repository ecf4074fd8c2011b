"""Catalog of live tables and the counter used to name derived tables."""

from __future__ import annotations

import threading
import weakref
from typing import TYPE_CHECKING

from typed_relations.errors import DuplicateTableError

if TYPE_CHECKING:
    from typed_relations.table import Table


class Catalog:
    """Tracks live tables by name and hands out synthetic names.

    Tables are held weakly: a table leaves the catalog once the last
    reference to it is dropped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0
        self._tables: weakref.WeakValueDictionary[str, Table] = weakref.WeakValueDictionary()

    def next_name(self, base: str) -> str:
        """Return base followed by the next counter value not held by a live table."""
        with self._lock:
            while True:
                name = f"{base}{self._count}"
                self._count += 1
                if name not in self._tables:
                    return name

    def register(self, table: Table) -> None:
        """Register a table under its name.

        Raises:
            DuplicateTableError: If a different live table holds the name.
        """
        with self._lock:
            current = self._tables.get(table.name)
            if current is not None and current is not table:
                raise DuplicateTableError(table.name)
            self._tables[table.name] = table

    def get(self, name: str) -> Table | None:
        return self._tables.get(name)

    def names(self) -> list[str]:
        return sorted(self._tables.keys())

    def reset(self) -> None:
        """Forget all tables and restart the naming counter at zero."""
        with self._lock:
            self._count = 0
            self._tables.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)


default_catalog = Catalog()
