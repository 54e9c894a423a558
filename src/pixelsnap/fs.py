"""Filesystem collaborator used by the snapshot comparator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from pixelsnap.errors import SnapshotIOError

log = logging.getLogger(__name__)


class Filesystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read_bytes(self, path: Path) -> bytes: ...

    def write_bytes(self, path: Path, data: bytes) -> None: ...

    def ensure_dir(self, path: Path) -> None: ...


class LocalFilesystem:
    """Filesystem backed by :mod:`pathlib`; OSErrors become SnapshotIOError."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def read_bytes(self, path: Path) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise SnapshotIOError("read file", path, exc) from exc

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            Path(path).write_bytes(data)
        except OSError as exc:
            raise SnapshotIOError("write file", path, exc) from exc

    def ensure_dir(self, path: Path) -> None:
        """Create *path* with parents unless it already exists.

        A directory created concurrently by another process counts as success.
        """
        p = Path(path)
        if p.exists():
            return
        log.debug("creating directory %s", p)
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SnapshotIOError("create directory", p, exc) from exc
