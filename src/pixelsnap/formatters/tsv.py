"""TSV output for list commands.

Empty or missing fields render as '-'. Tabs and newlines inside a
field are escaped so every row stays on one line.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO


def escape_field(value: Any) -> str:
    if value is None:
        return "-"
    s = str(value)
    if not s:
        return "-"
    return s.replace("\t", "\\t").replace("\n", "\\n")


def format_row(fields: list[Any]) -> str:
    return "\t".join(escape_field(f) for f in fields)


def write_tsv(
    rows: list[list[Any]],
    *,
    header: list[str] | None = None,
    no_header: bool = False,
    out: TextIO | None = None,
) -> None:
    """Write rows as TSV, preceded by *header* unless *no_header* is set."""
    dest = out or sys.stdout
    if header and not no_header:
        dest.write(format_row(header) + "\n")
    for row in rows:
        dest.write(format_row(row) + "\n")
