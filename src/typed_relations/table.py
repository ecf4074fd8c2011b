"""In-memory relations and the relational-algebra operators over them."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, Sequence, Union

from typed_relations.catalog import Catalog, default_catalog
from typed_relations.errors import (
    DomainViolationError,
    IncompatibleSchemaError,
    UnknownAttributeError,
)
from typed_relations.index import Index, IndexKind, make_index
from typed_relations.key import KeyType
from typed_relations.types import Domain, resolve_domains, split_names

logger = logging.getLogger(__name__)

Row = tuple[Any, ...]
Names = Union[str, Sequence[str]]
Predicate = Callable[[Row], bool]


class Table:
    """A relation: attribute names and domains, a primary key, tuples and an index.

    Tuples keep their insertion order. Every operator returns a new table with
    its own tuple list and index; only ``insert`` changes a table in place.
    """

    def __init__(
        self,
        name: str,
        attributes: Names,
        domains: str | Sequence[str | Domain],
        key: Names,
        tuples: Iterable[Sequence[Any]] | None = None,
        *,
        index_kind: IndexKind = IndexKind.ORDERED,
        catalog: Catalog | None = None,
    ) -> None:
        """Initialize a table.

        Args:
            name: Name of the relation.
            attributes: Attribute names, as a sequence or a whitespace-separated string.
            domains: Domains positionally aligned with the attributes.
            key: Primary-key attribute names, in key component order.
            tuples: Optional initial tuples; each must pass the domain check.
            index_kind: Which index implementation to maintain.
            catalog: Catalog that names derived tables (the default catalog if omitted).

        Raises:
            ValueError: If attributes and domains differ in length or an
                attribute name repeats.
            UnknownAttributeError: If a key attribute is not an attribute.
            DomainViolationError: If an initial tuple fails the domain check.
            DuplicateTableError: If another live table in the catalog has this name.
        """
        self.name = name
        self.attributes: tuple[str, ...] = split_names(attributes)
        self.domains: tuple[Domain, ...] = resolve_domains(domains)
        self.key: tuple[str, ...] = split_names(key)
        self.index_kind = index_kind
        self.catalog = catalog if catalog is not None else default_catalog

        if len(self.attributes) != len(self.domains):
            raise ValueError(
                f"Table '{name}' has {len(self.attributes)} attributes "
                f"but {len(self.domains)} domains"
            )
        repeated = sorted({a for a in self.attributes if self.attributes.count(a) > 1})
        if repeated:
            raise ValueError(f"Table '{name}' repeats attribute(s): {', '.join(repeated)}")
        missing = [k for k in self.key if k not in self.attributes]
        if missing:
            raise UnknownAttributeError(name, missing)

        self._key_cols = [self.attributes.index(k) for k in self.key]
        self.tuples: list[Row] = []
        self.index: Index | None = make_index(index_kind)

        if tuples is not None:
            for tup in tuples:
                tup = tuple(tup)
                problem = self._violation(tup)
                if problem is not None:
                    raise DomainViolationError(f"Table '{name}': {problem}")
                self._store(tup)

        self.catalog.register(self)

    @classmethod
    def from_strings(
        cls,
        name: str,
        attributes: str,
        domains: str,
        key: str,
        **kwargs: Any,
    ) -> Table:
        """Create an empty table from whitespace-separated schema strings.

        #usage Table.from_strings("movie", "title year", "String Integer", "title year")
        """
        table = cls(name, attributes, domains, key, **kwargs)
        logger.debug("DDL> create table %s (%s)", name, " ".join(table.attributes))
        return table

    # ------------------------------------------------------------------
    # Metadata and insertion
    # ------------------------------------------------------------------

    def col(self, attribute: str) -> int:
        """Return the column position of attribute, or -1 if there is none."""
        for i, name in enumerate(self.attributes):
            if name == attribute:
                return i
        return -1

    def columns(self, attributes: Names) -> list[int]:
        """Resolve attribute names to column positions.

        Raises:
            UnknownAttributeError: Naming every attribute that does not resolve.
        """
        names = split_names(attributes)
        cols = [self.col(a) for a in names]
        missing = [a for a, c in zip(names, cols) if c < 0]
        if missing:
            raise UnknownAttributeError(self.name, missing)
        return cols

    def key_of(self, tup: Sequence[Any]) -> KeyType:
        """Return the primary-key value of a tuple."""
        return KeyType(tuple(tup[c] for c in self._key_cols))

    def type_check(self, tup: Sequence[Any]) -> bool:
        """Return whether tup has this table's arity and every value is in its domain."""
        return self._violation(tuple(tup)) is None

    def insert(self, tup: Sequence[Any]) -> bool:
        """Insert a tuple, returning False (table unchanged) if it fails the domain check.

        On a key already present in the index the new tuple replaces the old
        index entry; both tuples stay in the tuple list.

        #usage movie.insert(("Star_Wars", 1977, 124, "sciFi", "Fox", 12345))
        """
        tup = tuple(tup)
        logger.debug("DML> insert into %s values ( %s )", self.name, tup)
        problem = self._violation(tup)
        if problem is not None:
            logger.warning("insert into %s rejected: %s", self.name, problem)
            return False
        self._store(tup)
        return True

    def _store(self, tup: Row) -> None:
        self.tuples.append(tup)
        if self.index is not None:
            self.index.put(self.key_of(tup), tup)

    def _violation(self, tup: Row) -> str | None:
        """Describe why tup does not fit this table, or return None if it does."""
        if len(tup) != len(self.attributes):
            return f"tuple has {len(tup)} values, expected {len(self.attributes)}"
        for attribute, domain, value in zip(self.attributes, self.domains, tup):
            if not domain.accepts(value):
                return f"value {value!r} of attribute {attribute} is not in domain {domain.value}"
        return None

    # ------------------------------------------------------------------
    # Relational algebra
    # ------------------------------------------------------------------

    def project(self, attributes: Names) -> Table:
        """Keep only the given attributes, dropping tuples that become duplicates.

        The key survives when every key attribute is projected; otherwise the
        projected attribute list becomes the key.

        #usage movie.project("title year studioName")
        """
        attrs = split_names(attributes)
        logger.debug("RA> %s.project (%s)", self.name, " ".join(attrs))
        cols = self.columns(attrs)
        domains = tuple(self.domains[c] for c in cols)
        new_key = self.key if set(self.key) <= set(attrs) else attrs

        rows = dict.fromkeys(tuple(t[c] for c in cols) for t in self.tuples)
        return self._derive(attrs, domains, new_key, rows)

    def select(self, condition: Predicate | KeyType | Any) -> Table:
        """Select tuples by predicate, or by primary-key value through the index.

        #usage movie.select(lambda t: t[movie.col("year")] == 1977)
        #usage movie.select(KeyType.of("Star_Wars", 1977))
        """
        if not callable(condition):
            return self.select_key(condition)
        logger.debug("RA> %s.select (%s)", self.name, getattr(condition, "__name__", condition))
        rows = [t for t in self.tuples if condition(t)]
        return self._derive(self.attributes, self.domains, self.key, rows)

    def select_key(self, key_value: KeyType | Sequence[Any] | Any) -> Table:
        """Select the tuple whose primary key equals key_value, using the index.

        A plain tuple or list is taken as the key components; any other value
        as the single component of a one-attribute key.

        Raises:
            ValueError: If the key value has the wrong number of components.
            NotImplementedError: If the table keeps no index.
        """
        key_value = _as_key(key_value)
        logger.debug("RA> %s.select (%s)", self.name, key_value)
        if len(key_value) != len(self.key):
            raise ValueError(
                f"Key value {key_value} has {len(key_value)} components, "
                f"table '{self.name}' key ({' '.join(self.key)}) has {len(self.key)}"
            )
        if self.index is None:
            raise NotImplementedError(f"Table '{self.name}' keeps no index to select by key")

        row = self.index.get(key_value)
        rows = [row] if row is not None else []
        return self._derive(self.attributes, self.domains, self.key, rows)

    def compatible(self, table2: Table) -> bool:
        """Return whether table2 has the same arity and position-wise domains."""
        problem = self._incompatibility(table2)
        if problem is not None:
            logger.warning("compatible ERROR: %s", problem)
            return False
        return True

    def union(self, table2: Table) -> Table:
        """Set union: this table's tuples, then table2's tuples not already present.

        #usage movie.union(show)

        Raises:
            IncompatibleSchemaError: If the tables are not compatible.
        """
        logger.debug("RA> %s.union (%s)", self.name, table2.name)
        self._require_compatible(table2)

        rows = dict.fromkeys(self.tuples)
        for tup in table2.tuples:
            rows.setdefault(tup)
        return self._derive(self.attributes, self.domains, self.key, rows)

    def minus(self, table2: Table) -> Table:
        """Set difference: this table's tuples that are not in table2.

        #usage movie.minus(show)

        Raises:
            IncompatibleSchemaError: If the tables are not compatible.
        """
        logger.debug("RA> %s.minus (%s)", self.name, table2.name)
        self._require_compatible(table2)

        exclude = set(table2.tuples)
        rows = dict.fromkeys(t for t in self.tuples if t not in exclude)
        return self._derive(self.attributes, self.domains, self.key, rows)

    def join(self, attributes1: Names, attributes2: Names, table2: Table) -> Table:
        """Equi-join with table2 using a nested loop.

        Tuples match when each attribute in attributes1 equals the attribute
        at the same position in attributes2. Right-side attribute names that
        collide with left-side names get a "2" suffix. The result keeps this
        table's key.

        #usage movie.join("studioName", "name", studio)

        Raises:
            ValueError: If the two attribute lists differ in length.
            UnknownAttributeError: If an attribute does not resolve on its table.
            IncompatibleSchemaError: If a compared pair disagrees on domain.
        """
        t_attrs = split_names(attributes1)
        u_attrs = split_names(attributes2)
        logger.debug(
            "RA> %s.join (%s, %s, %s)",
            self.name, " ".join(t_attrs), " ".join(u_attrs), table2.name,
        )
        pairs = self._join_columns(t_attrs, u_attrs, table2)

        rows: list[Row] = []
        for left in self.tuples:
            for right in table2.tuples:
                if all(left[i] == right[j] for i, j in pairs):
                    rows.append(left + right)

        return self._derive(
            self.attributes + self._disambiguate(table2.attributes),
            self.domains + table2.domains,
            self.key,
            rows,
        )

    def i_join(self, attributes1: Names, attributes2: Names, table2: Table) -> Table:
        """Equi-join through table2's index (not implemented)."""
        raise NotImplementedError("i_join: index join is not implemented")

    def h_join(self, attributes1: Names, attributes2: Names, table2: Table) -> Table:
        """Equi-join by hashing (not implemented)."""
        raise NotImplementedError("h_join: hash join is not implemented")

    def natural_join(self, table2: Table) -> Table:
        """Natural join: equate every attribute the two tables share by name.

        With no shared attributes this is the cross product; when every
        attribute is shared on both sides it is the intersection. Otherwise
        the shared columns are equi-joined and appear once, from this table.

        #usage movieStar.natural_join(starsIn)

        Raises:
            IncompatibleSchemaError: If a shared attribute differs in domain.
        """
        logger.debug("RA> %s.join (%s)", self.name, table2.name)
        common = tuple(a for a in self.attributes if table2.col(a) >= 0)

        if not common:
            rows = [left + right for left in self.tuples for right in table2.tuples]
            return self._derive(
                self.attributes + table2.attributes,
                self.domains + table2.domains,
                self.key,
                rows,
            )

        pairs = self._join_columns(common, common, table2)

        if len(common) == len(self.attributes) == len(table2.attributes):
            # Same attribute set: reorder table2's tuples to this table's column order
            present = {tuple(right[j] for _, j in pairs) for right in table2.tuples}
            rows = dict.fromkeys(t for t in self.tuples if t in present)
            return self._derive(self.attributes, self.domains, self.key, rows)

        keep = [j for j, a in enumerate(table2.attributes) if a not in common]
        rows = []
        for left in self.tuples:
            for right in table2.tuples:
                if all(left[i] == right[j] for i, j in pairs):
                    rows.append(left + tuple(right[j] for j in keep))

        return self._derive(
            self.attributes + tuple(table2.attributes[j] for j in keep),
            self.domains + tuple(table2.domains[j] for j in keep),
            self.key,
            rows,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _derive(
        self,
        attributes: Sequence[str],
        domains: Sequence[Domain],
        key: Sequence[str],
        rows: Iterable[Row],
    ) -> Table:
        """Build a result table with a fresh synthetic name, tuple list and index."""
        return Table(
            self.catalog.next_name(self.name),
            tuple(attributes),
            tuple(domains),
            tuple(key),
            rows,
            index_kind=self.index_kind,
            catalog=self.catalog,
        )

    def _incompatibility(self, table2: Table) -> str | None:
        if len(self.domains) != len(table2.domains):
            return (
                f"tables {self.name} and {table2.name} have different arity "
                f"({len(self.domains)} vs {len(table2.domains)})"
            )
        for j, (d1, d2) in enumerate(zip(self.domains, table2.domains)):
            if d1 is not d2:
                return (
                    f"tables {self.name} and {table2.name} disagree on domain {j} "
                    f"({d1.value} vs {d2.value})"
                )
        return None

    def _require_compatible(self, table2: Table) -> None:
        problem = self._incompatibility(table2)
        if problem is not None:
            raise IncompatibleSchemaError(problem)

    def _join_columns(
        self, t_attrs: Sequence[str], u_attrs: Sequence[str], table2: Table
    ) -> list[tuple[int, int]]:
        """Resolve join attribute pairs and check that their domains agree."""
        if len(t_attrs) != len(u_attrs):
            raise ValueError(
                f"Join compares {len(t_attrs)} attribute(s) of {self.name} "
                f"with {len(u_attrs)} of {table2.name}"
            )
        t_cols = self.columns(t_attrs)
        u_cols = table2.columns(u_attrs)
        for i, j in zip(t_cols, u_cols):
            d1, d2 = self.domains[i], table2.domains[j]
            if d1 is not d2:
                raise IncompatibleSchemaError(
                    f"The domain of attribute {self.attributes[i]} is {d1.value}, "
                    f"the domain of attribute {table2.attributes[j]} is {d2.value}: "
                    "these domains don't match"
                )
        return list(zip(t_cols, u_cols))

    def _disambiguate(self, names: Sequence[str]) -> tuple[str, ...]:
        """Suffix "2" onto every name that collides with one of this table's attributes."""
        taken = set(self.attributes) | set(names)
        result = []
        for name in names:
            if name in self.attributes:
                new_name = name + "2"
                while new_name in taken:
                    new_name += "2"
                taken.add(new_name)
                name = new_name
            result.append(name)
        return tuple(result)

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.tuples)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.tuples)

    def __contains__(self, tup: object) -> bool:
        if not isinstance(tup, (tuple, list)):
            return False
        return tuple(tup) in self.tuples

    def __repr__(self) -> str:
        return (
            f"Table({self.name!r}, attributes={list(self.attributes)}, "
            f"key={list(self.key)}, tuples={len(self.tuples)})"
        )


def _as_key(value: Any) -> KeyType:
    if isinstance(value, KeyType):
        return value
    if isinstance(value, (tuple, list)):
        return KeyType(tuple(value))
    return KeyType((value,))
