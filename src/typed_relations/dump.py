"""Tool for dumping saved tables to the console."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from typed_relations.display import format_index, format_table
from typed_relations.errors import StorageError
from typed_relations.storage import TableStore
from typed_relations.table import Table


def list_tables(store: TableStore) -> None:
    """Print every saved table with its arity and tuple count."""
    names = store.list_tables()
    if not names:
        print("(no tables)")
        return

    print(f"Tables in {store.directory}:")
    for name in names:
        try:
            table = store.load(name)
            arity: int | str = len(table.attributes)
            count: int | str = len(table)
        except StorageError:
            arity = count = "?"
        print(f"  {name:<20} {arity:>3} attributes {count:>6} tuples")


def dump_table_json(table: Table, limit: int | None = None) -> None:
    """Print a table as JSON."""
    rows = table.tuples if limit is None else table.tuples[:limit]
    output = {
        "name": table.name,
        "attributes": list(table.attributes),
        "domains": [d.value for d in table.domains],
        "key": list(table.key),
        "tuples": [list(t) for t in rows],
    }
    print(json.dumps(output, indent=2))


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Dump saved relational tables to the console"
    )
    parser.add_argument(
        "store",
        type=Path,
        help="Path to the store directory containing table files",
    )
    parser.add_argument(
        "table",
        nargs="?",
        help="Name of the table to dump (omit to list tables)",
    )
    parser.add_argument(
        "-i", "--index",
        action="store_true",
        help="Also print the table's primary-key index",
    )
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "-n", "--limit",
        type=int,
        default=None,
        help="Limit number of tuples to display",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log storage and operator activity",
    )

    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must not be negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.store.is_dir():
        print(f"Error: Store directory not found: {args.store}", file=sys.stderr)
        return 1

    store = TableStore(args.store)

    if args.table is None:
        list_tables(store)
        return 0

    try:
        table = store.load(args.table)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("\nAvailable tables:")
        list_tables(store)
        return 1

    if args.json:
        dump_table_json(table, args.limit)
    else:
        print(format_table(table, limit=args.limit))
        if args.index:
            print(format_index(table))

    return 0


if __name__ == "__main__":
    sys.exit(main())
