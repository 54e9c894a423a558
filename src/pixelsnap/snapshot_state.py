"""Run-level snapshot counters, folded immutably after each comparison."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from pixelsnap.diff_snapshot import ComparisonResult


@dataclass(frozen=True)
class SnapshotState:
    update_mode: bool = False
    added: int = 0
    updated: int = 0
    matched: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.added + self.updated + self.matched + self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "update_mode": self.update_mode,
            "added": self.added,
            "updated": self.updated,
            "matched": self.matched,
            "failed": self.failed,
        }


def update_snapshot_state(state: SnapshotState, result: ComparisonResult) -> SnapshotState:
    """Return a new state with *result* counted; *state* is left untouched."""
    if result.added:
        return replace(state, added=state.added + 1)
    if result.updated:
        return replace(state, updated=state.updated + 1)
    if result.passed:
        return replace(state, matched=state.matched + 1)
    return replace(state, failed=state.failed + 1)
