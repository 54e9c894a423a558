"""pytest integration: the ``image_snapshot`` fixture.

Enable it from a ``conftest.py``::

    pytest_plugins = ["pixelsnap.pytest_plugin"]

Run with ``--update-image-snapshots`` (or ``PIXELSNAP_UPDATE=1``) to
replace stored snapshots instead of comparing against them.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from pixelsnap.config import resolve_update_mode
from pixelsnap.diff_snapshot import ComparisonResult
from pixelsnap.matcher import MatchContext, to_match_image_snapshot
from pixelsnap.snapshot_state import SnapshotState


class SnapshotSession:
    """Owns the run-level SnapshotState for one pytest session."""

    def __init__(self, update_mode: bool) -> None:
        self.state = SnapshotState(update_mode=update_mode)


_SESSION_KEY = pytest.StashKey[SnapshotSession]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("pixelsnap", "image snapshot testing")
    group.addoption(
        "--update-image-snapshots",
        action="store_true",
        default=False,
        help="Overwrite stored image snapshots with the received images.",
    )


def pytest_configure(config: pytest.Config) -> None:
    update = resolve_update_mode(config.getoption("update_image_snapshots"))
    config.stash[_SESSION_KEY] = SnapshotSession(update)


@pytest.fixture
def image_snapshot(
    request: pytest.FixtureRequest,
) -> Callable[..., ComparisonResult]:
    """Return ``match(image_bytes, diff_config=None)`` bound to the current test."""
    session = request.config.stash[_SESSION_KEY]
    test_path = Path(request.node.path)
    test_name = request.node.nodeid.split("::", 1)[-1]
    counter = itertools.count(1)

    def match(image: bytes, diff_config: Mapping[str, Any] | None = None) -> ComparisonResult:
        ctx = MatchContext(
            test_path=test_path,
            test_name=test_name,
            snapshot_state=session.state,
            occurrence=next(counter),
        )
        outcome = to_match_image_snapshot(image, ctx, diff_config)
        session.state = outcome.snapshot_state
        if not outcome.passed:
            pytest.fail(outcome.message, pytrace=False)
        return outcome.result

    return match


def pytest_terminal_summary(terminalreporter: Any, exitstatus: int, config: pytest.Config) -> None:
    session = config.stash.get(_SESSION_KEY, None)
    if session is None or session.state.total == 0:
        return
    s = session.state
    terminalreporter.write_sep("-", "image snapshots")
    terminalreporter.write_line(
        f"{s.added} added, {s.updated} updated, {s.matched} matched, {s.failed} failed"
    )
