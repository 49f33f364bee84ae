from __future__ import annotations

"""Plain-text tables for search results."""

import sys
from typing import Any, Dict, List, Mapping, Optional, Sequence, TextIO


def _cell(value: Any) -> str:
    if value is None:
        return ""
    # Summaries sometimes carry line breaks; one record, one line.
    return " ".join(str(value).splitlines())


def format_table(records: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> str:
    """
    Render records as an aligned table.

    Parameters
    ----------
    records : Sequence[Mapping[str, Any]]
        JSON-like rows. Missing fields render as empty cells.
    columns : Sequence[str]
        Field names, in display order. They double as the header.

    Returns
    -------
    str
        Header line, ``-+-`` divider, then one line per record.
    """

    rows: List[Dict[str, str]] = [{column: _cell(record.get(column)) for column in columns} for record in records]

    widths: List[int] = []
    for column in columns:
        width = len(column)
        for row in rows:
            width = max(width, len(row[column]))
        widths.append(width)

    header_line = " | ".join(column.ljust(width) for column, width in zip(columns, widths))
    divider = "-+-".join("-" * width for width in widths)
    body_lines = []
    for row in rows:
        body_lines.append(" | ".join(row[column].ljust(width) for column, width in zip(columns, widths)))

    return "\n".join([header_line, divider, *body_lines])


def print_table_for_columns(
    records: Sequence[Mapping[str, Any]], columns: Sequence[str], out: Optional[TextIO] = None
) -> None:
    """Write :func:`format_table` output to ``out`` (stdout by default)."""

    stream = out if out is not None else sys.stdout
    stream.write(format_table(records, columns) + "\n")
