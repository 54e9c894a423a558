from __future__ import annotations

import errno
from pathlib import Path

from pixelsnap.errors import (
    ConfigError,
    DecodeError,
    DimensionMismatchError,
    SnapshotError,
    SnapshotIOError,
    UsageError,
)


def test_hierarchy() -> None:
    for cls in (ConfigError, DecodeError, DimensionMismatchError, SnapshotIOError, UsageError):
        assert issubclass(cls, SnapshotError)
    assert issubclass(ConfigError, ValueError)
    assert issubclass(DecodeError, ValueError)
    assert issubclass(DimensionMismatchError, ValueError)
    assert issubclass(SnapshotIOError, OSError)


def test_str_includes_context() -> None:
    exc = DecodeError("cannot decode image", path="/s/id1-snap.png", identifier="id1")
    text = str(exc)
    assert text.startswith("cannot decode image")
    assert "snapshot=id1" in text
    assert "id1-snap.png" in text


def test_str_without_context() -> None:
    assert str(UsageError("nope")) == "nope"


def test_dimension_mismatch_message() -> None:
    exc = DimensionMismatchError((4, 4), (8, 4))
    assert str(exc) == "size mismatch: (4, 4) vs (8, 4)"


def test_io_error_wraps_cause() -> None:
    cause = PermissionError(errno.EACCES, "Permission denied")
    exc = SnapshotIOError("write file", Path("/x"), cause)
    assert exc.errno == errno.EACCES
    assert exc.path == Path("/x")
    assert "cannot write file: Permission denied" in str(exc)
