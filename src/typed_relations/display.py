"""Fixed-width text rendering of tables and their indexes."""

from __future__ import annotations

from typing import Any, Sequence

from typed_relations.table import Table

COLUMN_WIDTH = 15


def format_value(value: Any, max_width: int = COLUMN_WIDTH) -> str:
    """Format a value for display.

    Args:
        value: The value to format
        max_width: Maximum character width before truncating
    """
    if isinstance(value, float):
        s = f"{value:.6g}"
    else:
        s = str(value)
    if len(s) > max_width:
        return s[: max_width - 3] + "..."
    return s


def format_tuple(tup: Sequence[Any]) -> str:
    return "[" + ", ".join(str(v) for v in tup) + "]"


def format_table(table: Table, width: int = COLUMN_WIDTH, limit: int | None = None) -> str:
    """Render a table's attributes and tuples in columns of the given width."""
    rule = "|-" + "-" * (width * len(table.attributes)) + "-|"
    lines = ["", f" Table {table.name}", rule]
    lines.append("| " + "".join(a[:width].rjust(width) for a in table.attributes) + " |")
    lines.append(rule)
    rows = table.tuples if limit is None else table.tuples[:limit]
    for tup in rows:
        lines.append("| " + "".join(format_value(v, width).rjust(width) for v in tup) + " |")
    lines.append(rule)
    if limit is not None and len(table.tuples) > limit:
        lines.append(f" ... {len(table.tuples) - limit} more")
    return "\n".join(lines)


def format_index(table: Table) -> str:
    """Render a table's index as ``key -> tuple`` lines in key order."""
    lines = ["", f" Index for {table.name}", "-------------------"]
    if table.index is None:
        lines.append("(no index)")
    else:
        for key, tup in table.index.items():
            lines.append(f"{key} -> {format_tuple(tup)}")
    lines.append("-------------------")
    return "\n".join(lines)


def print_table(table: Table) -> None:
    print(format_table(table))


def print_index(table: Table) -> None:
    print(format_index(table))
