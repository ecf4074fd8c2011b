"""Typed Relations - An in-memory relational algebra engine over typed tables."""

from typed_relations.catalog import Catalog, default_catalog
from typed_relations.database import Database
from typed_relations.errors import (
    DomainViolationError,
    DuplicateTableError,
    IncompatibleSchemaError,
    RelationError,
    StorageError,
    UnknownAttributeError,
    UnknownDomainError,
)
from typed_relations.index import HashIndex, Index, IndexKind, OrderedIndex
from typed_relations.key import KeyType
from typed_relations.storage import TableStore
from typed_relations.table import Table
from typed_relations.types import Domain, resolve_domain, resolve_domains

__all__ = [
    # Main API
    "Table",
    "KeyType",
    "Database",
    "Catalog",
    "default_catalog",
    # Domains
    "Domain",
    "resolve_domain",
    "resolve_domains",
    # Indexes
    "Index",
    "IndexKind",
    "OrderedIndex",
    "HashIndex",
    # Storage
    "TableStore",
    # Errors
    "RelationError",
    "IncompatibleSchemaError",
    "UnknownAttributeError",
    "DomainViolationError",
    "UnknownDomainError",
    "DuplicateTableError",
    "StorageError",
]

__version__ = "0.1.0"
