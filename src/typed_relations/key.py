"""Composite primary-key values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(frozen=True, order=True)
class KeyType:
    """Immutable composite of a tuple's key-column values.

    Equality and hashing are by value; ordering is lexicographic over the
    components, which share a domain position by position.
    """

    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    @classmethod
    def of(cls, *values: Any) -> KeyType:
        """Build a key from its components, e.g. ``KeyType.of("Star_Wars", 1977)``."""
        return cls(values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __str__(self) -> str:
        return "{ " + ", ".join(str(v) for v in self.values) + " }"
