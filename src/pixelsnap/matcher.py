"""Assertion-side glue between a test framework and the snapshot comparator."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from pixelsnap.diff_snapshot import ComparisonResult, SnapshotCompared, diff_image_to_snapshot
from pixelsnap.errors import UsageError
from pixelsnap.fs import Filesystem
from pixelsnap.pixel_diff import PixelDiff
from pixelsnap.snapshot_state import SnapshotState, update_snapshot_state

log = logging.getLogger(__name__)

SNAPSHOTS_DIRNAME = "__image_snapshots__"

_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_ALPHA_DIGIT_RE = re.compile(r"([A-Za-z])(\d)")
_DIGIT_ALPHA_RE = re.compile(r"(\d)([A-Za-z])")
_WORD_RE = re.compile(r"[A-Za-z0-9]+")


def kebab_case(text: str) -> str:
    """Convert *text* to lower-kebab-case.

    ``"button.test.py-renders DarkMode"`` becomes
    ``"button-test-py-renders-dark-mode"``.
    """
    s = _CAMEL_RE.sub(r"\1 \2", text)
    s = _ACRONYM_RE.sub(r"\1 \2", s)
    s = _ALPHA_DIGIT_RE.sub(r"\1 \2", s)
    s = _DIGIT_ALPHA_RE.sub(r"\1 \2", s)
    return "-".join(w.lower() for w in _WORD_RE.findall(s))


def snapshot_identifier(test_path: Path | str, test_name: str, occurrence: int = 1) -> str:
    """Derive a stable snapshot id from the test file and test name.

    Calls after the first within one test get a ``-<n>`` suffix.
    """
    ident = kebab_case(f"{Path(test_path).name}-{test_name}")
    if occurrence > 1:
        ident = f"{ident}-{occurrence}"
    return ident


def snapshots_dir_for(test_path: Path | str) -> Path:
    return Path(test_path).parent / SNAPSHOTS_DIRNAME


@dataclass(frozen=True)
class MatchContext:
    test_path: Path
    test_name: str
    snapshot_state: SnapshotState
    is_not: bool = False
    occurrence: int = 1


@dataclass(frozen=True)
class MatchOutcome:
    passed: bool
    message: str
    result: ComparisonResult
    snapshot_state: SnapshotState


def failure_message(result: ComparisonResult) -> str:
    """Human-readable explanation of a failed comparison."""
    lines = ["Expected image to match or be a close match to snapshot."]
    if isinstance(result, SnapshotCompared):
        lines.append(
            f"{result.pixel_count_diff} of {result.width * result.height} pixels differ "
            f"({result.diff_ratio:.2%})."
        )
        lines.append(
            f"{click.style('See diff for details:', fg='red', bold=True)} "
            f"{click.style(str(result.diff_output_path), fg='red')}"
        )
    return "\n".join(lines)


def to_match_image_snapshot(
    received: bytes,
    context: MatchContext,
    custom_diff_config: Mapping[str, Any] | None = None,
    *,
    fs: Filesystem | None = None,
    pixel_diff: PixelDiff | None = None,
) -> MatchOutcome:
    """Match *received* against the snapshot derived from *context*.

    Raises:
        UsageError: If invoked as a negated match.
    """
    if context.is_not:
        raise UsageError("negated image snapshot matching is not supported")

    ident = snapshot_identifier(context.test_path, context.test_name, context.occurrence)
    result = diff_image_to_snapshot(
        received,
        ident,
        snapshots_dir_for(context.test_path),
        update_snapshot=context.snapshot_state.update_mode,
        custom_diff_config=custom_diff_config,
        fs=fs,
        pixel_diff=pixel_diff,
    )
    state = update_snapshot_state(context.snapshot_state, result)
    message = "" if result.passed else failure_message(result)
    if not result.passed:
        log.debug("snapshot mismatch for %s", ident)
    return MatchOutcome(
        passed=result.passed, message=message, result=result, snapshot_state=state
    )
