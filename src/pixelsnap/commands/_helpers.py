"""Shared CLI command helpers."""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

__all__ = ["_json_mode", "err_exit"]


def _json_mode() -> bool:
    """Return True if the current Click context has a JSON output flag set."""
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool(ctx.params.get("use_json"))


def err_exit(msg: str, code: int = 2) -> NoReturn:
    """Print error (JSON or plain text based on context) and exit."""
    if _json_mode():
        click.echo(json.dumps({"error": {"message": msg}}), err=True)
    else:
        click.echo(f"error: {msg}", err=True)
    sys.exit(code)
