"""Exception hierarchy for snapshot comparison."""

from __future__ import annotations

from pathlib import Path


class SnapshotError(Exception):
    """Base class for every failure raised by pixelsnap."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        identifier: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        self.identifier = identifier

    def __str__(self) -> str:
        parts = [self.message]
        if self.identifier is not None:
            parts.append(f"snapshot={self.identifier}")
        if self.path is not None:
            parts.append(f"path={self.path}")
        return parts[0] if len(parts) == 1 else f"{parts[0]} ({', '.join(parts[1:])})"


class DecodeError(SnapshotError, ValueError):
    """Image bytes could not be decoded."""


class DimensionMismatchError(SnapshotError, ValueError):
    """Stored and received images have different sizes."""

    def __init__(
        self,
        expected: tuple[int, int],
        received: tuple[int, int],
        *,
        path: Path | str | None = None,
        identifier: str | None = None,
    ) -> None:
        super().__init__(
            f"size mismatch: {expected} vs {received}", path=path, identifier=identifier
        )
        self.expected = expected
        self.received = received


class SnapshotIOError(SnapshotError, OSError):
    """Filesystem operation failed."""

    def __init__(
        self,
        operation: str,
        path: Path | str,
        cause: OSError,
        *,
        identifier: str | None = None,
    ) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(f"cannot {operation}: {reason}", path=path, identifier=identifier)
        self.operation = operation
        self.errno = cause.errno


class UsageError(SnapshotError):
    """The matcher was invoked in a way it does not support."""


class ConfigError(SnapshotError, ValueError):
    """A diff option has an invalid value."""
