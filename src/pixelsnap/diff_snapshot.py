"""Snapshot lifecycle: add, update or compare an image against its stored reference."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from pixelsnap.codec import decode_png, encode_png
from pixelsnap.config import merge_diff_config
from pixelsnap.errors import DimensionMismatchError
from pixelsnap.fs import Filesystem, LocalFilesystem
from pixelsnap.pixel_diff import PixelDiff
from pixelsnap.pixel_diff import pixel_diff as default_pixel_diff

log = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = "-snap.png"
DIFF_SUFFIX = "-diff.png"
DIFF_OUTPUT_DIRNAME = "__diff_output__"


def snapshot_path(snapshots_dir: Path | str, snapshot_identifier: str) -> Path:
    return Path(snapshots_dir) / f"{snapshot_identifier}{SNAPSHOT_SUFFIX}"


def diff_output_dir(snapshots_dir: Path | str) -> Path:
    return Path(snapshots_dir) / DIFF_OUTPUT_DIRNAME


def diff_output_path(snapshots_dir: Path | str, snapshot_identifier: str) -> Path:
    return diff_output_dir(snapshots_dir) / f"{snapshot_identifier}{DIFF_SUFFIX}"


@dataclass(frozen=True)
class SnapshotAdded:
    """No snapshot existed; the received image became the reference."""

    snapshot_identifier: str
    snapshot_path: Path

    passed = True
    added = True
    updated = False

    def to_dict(self) -> dict[str, Any]:
        return {"pass": True, "added": True, "snapshotPath": str(self.snapshot_path)}


@dataclass(frozen=True)
class SnapshotUpdated:
    """Update mode replaced the existing reference."""

    snapshot_identifier: str
    snapshot_path: Path

    passed = True
    added = False
    updated = True

    def to_dict(self) -> dict[str, Any]:
        return {"pass": True, "updated": True, "snapshotPath": str(self.snapshot_path)}


@dataclass(frozen=True)
class SnapshotCompared:
    """A pixel comparison against the stored reference was performed."""

    snapshot_identifier: str
    snapshot_path: Path
    diff_output_path: Path
    pixel_count_diff: int
    diff_ratio: float
    width: int
    height: int
    diff_written: bool

    added = False
    updated = False

    @property
    def passed(self) -> bool:
        return self.pixel_count_diff == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "pass": self.passed,
            "diffOutputPath": str(self.diff_output_path),
            "diffRatio": self.diff_ratio,
            "pixelCountDiff": self.pixel_count_diff,
            "snapshotPath": str(self.snapshot_path),
        }


ComparisonResult = SnapshotAdded | SnapshotUpdated | SnapshotCompared


def diff_image_to_snapshot(
    image_data: bytes,
    snapshot_identifier: str,
    snapshots_dir: Path | str,
    update_snapshot: bool = False,
    custom_diff_config: Mapping[str, Any] | None = None,
    *,
    fs: Filesystem | None = None,
    pixel_diff: PixelDiff | None = None,
) -> ComparisonResult:
    """Compare *image_data* with the stored snapshot for *snapshot_identifier*.

    A missing snapshot is always added, an existing one is overwritten in
    update mode, otherwise both images are diffed and a diff PNG is written
    under ``__diff_output__`` when any pixel differs.

    Args:
        image_data: Encoded image bytes (PNG) of the received render.
        snapshot_identifier: Filesystem-safe name of the snapshot.
        snapshots_dir: Directory holding ``<id>-snap.png`` files.
        update_snapshot: Replace an existing snapshot instead of comparing.
        custom_diff_config: Options merged over the default diff config.
        fs: Filesystem collaborator (default: local disk).
        pixel_diff: Pixel-difference primitive (default: numpy channel delta).

    Returns:
        SnapshotAdded, SnapshotUpdated or SnapshotCompared.

    Raises:
        DecodeError: If either image cannot be decoded.
        DimensionMismatchError: If stored and received sizes differ.
        SnapshotIOError: If a directory or file operation fails.
    """
    fs = fs or LocalFilesystem()
    pixel_diff = pixel_diff or default_pixel_diff
    snapshots_dir = Path(snapshots_dir)
    snap_path = snapshot_path(snapshots_dir, snapshot_identifier)

    fs.ensure_dir(snapshots_dir)

    if not fs.exists(snap_path):
        decode_png(image_data, identifier=snapshot_identifier)
        fs.write_bytes(snap_path, image_data)
        log.info("snapshot added: %s", snap_path)
        return SnapshotAdded(snapshot_identifier, snap_path)

    if update_snapshot:
        decode_png(image_data, identifier=snapshot_identifier)
        fs.write_bytes(snap_path, image_data)
        log.info("snapshot updated: %s", snap_path)
        return SnapshotUpdated(snapshot_identifier, snap_path)

    expected = decode_png(
        fs.read_bytes(snap_path), source=snap_path, identifier=snapshot_identifier
    )
    received = decode_png(image_data, identifier=snapshot_identifier)
    if expected.shape != received.shape:
        raise DimensionMismatchError(
            (expected.shape[1], expected.shape[0]),
            (received.shape[1], received.shape[0]),
            path=snap_path,
            identifier=snapshot_identifier,
        )

    height, width = expected.shape[:2]
    output = np.zeros_like(expected)
    config = merge_diff_config(custom_diff_config)
    count = int(pixel_diff(expected, received, output, width, height, config))
    total = width * height
    ratio = count / total if total else 0.0
    out_path = diff_output_path(snapshots_dir, snapshot_identifier)
    log.debug("compared %s: %d/%d pixels differ", snapshot_identifier, count, total)

    if count > 0:
        fs.ensure_dir(out_path.parent)
        fs.write_bytes(out_path, encode_png(output))
        log.info("diff written: %s", out_path)

    return SnapshotCompared(
        snapshot_identifier=snapshot_identifier,
        snapshot_path=snap_path,
        diff_output_path=out_path,
        pixel_count_diff=count,
        diff_ratio=ratio,
        width=width,
        height=height,
        diff_written=count > 0,
    )
