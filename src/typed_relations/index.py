"""Primary-key indexes mapping KeyType values to stored tuples."""

from __future__ import annotations

import bisect
from enum import Enum
from typing import Any, Iterator, Protocol

from typed_relations.key import KeyType

Row = tuple[Any, ...]


class IndexKind(Enum):
    """The index implementations a table can be built with."""

    NONE = "none"
    ORDERED = "ordered"
    HASH = "hash"


class Index(Protocol):
    """Capability interface shared by all index implementations."""

    def put(self, key: KeyType, row: Row) -> None: ...

    def get(self, key: KeyType) -> Row | None: ...

    def items(self) -> Iterator[tuple[KeyType, Row]]: ...

    def __contains__(self, key: object) -> bool: ...

    def __len__(self) -> int: ...


class OrderedIndex:
    """Index kept in ascending key order.

    Keys live in a sorted list maintained with bisect; the rows hang off a
    dict so exact lookups never touch the list.
    """

    def __init__(self) -> None:
        self._keys: list[KeyType] = []
        self._rows: dict[KeyType, Row] = {}

    def put(self, key: KeyType, row: Row) -> None:
        """Insert or overwrite the row stored under key."""
        if key not in self._rows:
            bisect.insort(self._keys, key)
        self._rows[key] = row

    def get(self, key: KeyType) -> Row | None:
        return self._rows.get(key)

    def items(self) -> Iterator[tuple[KeyType, Row]]:
        """Yield (key, row) pairs in ascending key order."""
        for key in self._keys:
            yield key, self._rows[key]

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[KeyType]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f"OrderedIndex({len(self)} keys)"


class HashIndex:
    """Dict-backed index; ordered traversal sorts on demand."""

    def __init__(self) -> None:
        self._rows: dict[KeyType, Row] = {}

    def put(self, key: KeyType, row: Row) -> None:
        self._rows[key] = row

    def get(self, key: KeyType) -> Row | None:
        return self._rows.get(key)

    def items(self) -> Iterator[tuple[KeyType, Row]]:
        for key in sorted(self._rows):
            yield key, self._rows[key]

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[KeyType]:
        return iter(sorted(self._rows))

    def __repr__(self) -> str:
        return f"HashIndex({len(self)} keys)"


def make_index(kind: IndexKind) -> Index | None:
    """Build an empty index of the given kind (None for IndexKind.NONE)."""
    if kind is IndexKind.ORDERED:
        return OrderedIndex()
    if kind is IndexKind.HASH:
        return HashIndex()
    return None
