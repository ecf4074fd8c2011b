"""JSON file storage for tables."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from typed_relations.catalog import Catalog
from typed_relations.errors import DuplicateTableError, StorageError
from typed_relations.index import IndexKind
from typed_relations.table import Table

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class TableStore:
    """Saves tables to a directory, one ``<name>.json`` file each, and loads them back.

    Only metadata and tuples are written; the index is rebuilt on load.
    """

    EXTENSION = ".json"
    DEFAULT_DIR = Path("store")

    def __init__(self, directory: Path | str = DEFAULT_DIR) -> None:
        """Initialize the store.

        Args:
            directory: Directory holding the table files. It is created on
                the first save.
        """
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        """Return the file path used for the named table."""
        if not name or Path(name).name != name or name.startswith("."):
            raise StorageError(f"Invalid table name '{name}'")
        return self.directory / f"{name}{self.EXTENSION}"

    def save(self, table: Table) -> Path:
        """Write a table's metadata and tuples, replacing any earlier save.

        Returns:
            The path written.

        Raises:
            StorageError: If the file cannot be written.
        """
        path = self.path_for(table.name)
        data = _serialize_table(table)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            raise StorageError(f"Cannot save table '{table.name}' ({exc.strerror})", path) from exc
        logger.debug("saved table %s (%d tuples) to %s", table.name, len(table), path)
        return path

    def load(
        self,
        name: str,
        *,
        index_kind: IndexKind = IndexKind.ORDERED,
        catalog: Catalog | None = None,
    ) -> Table:
        """Load the named table and rebuild its index.

        Raises:
            StorageError: If the table was never saved or its file is corrupt.
            DuplicateTableError: If a table of that name is already live in the catalog.
        """
        path = self.path_for(name)
        if not path.exists():
            raise StorageError(f"Table '{name}' not found", path)
        try:
            with open(path) as f:
                data = json.load(f)
            table = _deserialize_table(data, index_kind=index_kind, catalog=catalog)
        except OSError as exc:
            raise StorageError(f"Cannot read table '{name}' ({exc.strerror})", path) from exc
        except DuplicateTableError:
            raise
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Corrupt table file for '{name}' ({exc})", path) from exc
        logger.debug("loaded table %s (%d tuples) from %s", table.name, len(table), path)
        return table

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def list_tables(self) -> list[str]:
        """Return the names of all saved tables, sorted."""
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{self.EXTENSION}"))

    def delete(self, name: str) -> None:
        """Remove a saved table.

        Raises:
            StorageError: If the table was never saved.
        """
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            raise StorageError(f"Table '{name}' not found", path) from None


def _serialize_table(table: Table) -> dict[str, Any]:
    return {
        "format": FORMAT_VERSION,
        "name": table.name,
        "attributes": list(table.attributes),
        "domains": [d.value for d in table.domains],
        "key": list(table.key),
        "tuples": [list(t) for t in table.tuples],
    }


def _deserialize_table(
    data: dict[str, Any],
    *,
    index_kind: IndexKind,
    catalog: Catalog | None,
) -> Table:
    if not isinstance(data, dict):
        raise TypeError("expected a JSON object")
    version = data.get("format")
    if version != FORMAT_VERSION:
        raise ValueError(f"unsupported format version {version!r}")
    return Table(
        data["name"],
        data["attributes"],
        data["domains"],
        data["key"],
        data["tuples"],
        index_kind=index_kind,
        catalog=catalog,
    )
