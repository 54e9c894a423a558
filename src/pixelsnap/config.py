"""Diff configuration defaults and update-mode resolution."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

UPDATE_ENV_VAR = "PIXELSNAP_UPDATE"
_TRUTHY = frozenset({"1", "true", "yes", "on", "all"})

# Read-only so callers cannot mutate the shared defaults.
DEFAULT_DIFF_CONFIG: Mapping[str, Any] = MappingProxyType(
    {
        "threshold": 0.01,
        "include_alpha": True,
        "diff_color": (255, 0, 0, 255),
    }
)


def merge_diff_config(custom: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return defaults overlaid with *custom*; unknown keys pass through."""
    merged = dict(DEFAULT_DIFF_CONFIG)
    if custom:
        merged.update(custom)
    return merged


def _coerce(raw: str) -> Any:
    if "," in raw:
        return tuple(_coerce(part.strip()) for part in raw.split(","))
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for conv in (int, float):
        try:
            return conv(raw)
        except ValueError:
            continue
    return raw


def parse_option_pairs(pairs: Iterable[str]) -> dict[str, Any]:
    """Parse ``KEY=VALUE`` strings into a config dict.

    Values are coerced to bool, int or float when they parse as one,
    otherwise kept as strings. Comma-separated values (``diff_color=0,0,255``)
    become tuples of coerced items.

    Raises:
        ValueError: If an entry has no ``=`` or an empty key.
    """
    out: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"invalid option {pair!r}, expected KEY=VALUE")
        out[key] = _coerce(value.strip())
    return out


def resolve_update_mode(flag: bool = False) -> bool:
    """Return True if update mode is on via *flag* or $PIXELSNAP_UPDATE."""
    if flag:
        return True
    return os.environ.get(UPDATE_ENV_VAR, "").strip().lower() in _TRUTHY
