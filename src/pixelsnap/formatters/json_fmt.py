"""JSON output formatter for pixelsnap commands."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO


def write_json(data: Any, *, out: TextIO | None = None, indent: int | None = None) -> None:
    """Write data as JSON (paths and other objects via ``str``) to the stream."""
    dest = out or sys.stdout
    dest.write(json.dumps(data, default=str, indent=indent) + "\n")
