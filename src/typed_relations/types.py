"""Domain definitions for the typed_relations library."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Iterable

from typed_relations.errors import DomainViolationError, UnknownDomainError

FLOAT32_MAX = 3.4028234663852886e38


class Domain(Enum):
    """Scalar domains an attribute may be declared with."""

    INT64 = "int64"
    INT32 = "int32"
    INT16 = "int16"
    INT8 = "int8"
    FLOAT64 = "float64"
    FLOAT32 = "float32"
    CHARACTER = "character"
    STRING = "string"

    @property
    def bits(self) -> int | None:
        """Return the width in bits for integer domains, None otherwise."""
        widths = {
            Domain.INT64: 64,
            Domain.INT32: 32,
            Domain.INT16: 16,
            Domain.INT8: 8,
        }
        return widths.get(self)

    @property
    def is_integer(self) -> bool:
        return self.bits is not None

    @property
    def is_float(self) -> bool:
        return self in (Domain.FLOAT64, Domain.FLOAT32)

    @property
    def is_text(self) -> bool:
        return self in (Domain.CHARACTER, Domain.STRING)

    @property
    def classic_name(self) -> str:
        """Return the classic (Long/Integer/...) spelling of this domain."""
        return _CLASSIC_NAMES[self]

    def accepts(self, value: Any) -> bool:
        """Return whether value belongs to this domain."""
        if self.is_integer:
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            limit = 1 << (self.bits - 1)  # type: ignore[operator]
            return -limit <= value < limit
        if self.is_float:
            if not isinstance(value, float):
                return False
            if self is Domain.FLOAT32 and math.isfinite(value):
                return abs(value) <= FLOAT32_MAX
            return True
        if self is Domain.CHARACTER:
            return isinstance(value, str) and len(value) == 1
        return isinstance(value, str)

    def coerce(self, value: Any) -> Any:
        """Convert a literal to this domain's representation.

        Only lossless conversions are made: an int literal becomes a float for
        the float domains. Anything else must already belong to the domain.

        Raises:
            DomainViolationError: If the value cannot be represented.
        """
        if self.is_float and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if not self.accepts(value):
            raise DomainViolationError(
                f"Value {value!r} is not in domain {self.value}"
            )
        return value


_CLASSIC_NAMES: dict[Domain, str] = {
    Domain.INT64: "Long",
    Domain.INT32: "Integer",
    Domain.INT16: "Short",
    Domain.INT8: "Byte",
    Domain.FLOAT64: "Double",
    Domain.FLOAT32: "Float",
    Domain.CHARACTER: "Character",
    Domain.STRING: "String",
}

# Mapping from every accepted spelling to its Domain
DOMAIN_NAMES: dict[str, Domain] = {d.value: d for d in Domain}
DOMAIN_NAMES.update({name: d for d, name in _CLASSIC_NAMES.items()})


def resolve_domain(name: str | Domain) -> Domain:
    """Resolve a domain name (or pass through a Domain).

    Raises:
        UnknownDomainError: If the name is not a known domain spelling.
    """
    if isinstance(name, Domain):
        return name
    try:
        return DOMAIN_NAMES[name]
    except KeyError:
        raise UnknownDomainError(name) from None


def resolve_domains(names: str | Iterable[str | Domain]) -> tuple[Domain, ...]:
    """Resolve a whitespace-separated string or a sequence of domain names."""
    if isinstance(names, str):
        names = names.split()
    return tuple(resolve_domain(n) for n in names)


def split_names(names: str | Iterable[str]) -> tuple[str, ...]:
    """Split a whitespace-separated name string, or copy a sequence of names."""
    if isinstance(names, str):
        return tuple(names.split())
    return tuple(names)
