"""pixelsnap ls command -- list stored snapshots in a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from pixelsnap.codec import load_png
from pixelsnap.commands._helpers import err_exit
from pixelsnap.diff_snapshot import SNAPSHOT_SUFFIX, diff_output_path
from pixelsnap.errors import SnapshotError
from pixelsnap.formatters.json_fmt import write_json
from pixelsnap.formatters.tsv import write_tsv


def _collect(snapshots_dir: Path) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for snap in sorted(snapshots_dir.glob(f"*{SNAPSHOT_SUFFIX}")):
        ident = snap.name[: -len(SNAPSHOT_SUFFIX)]
        pixels = load_png(snap)
        diff = diff_output_path(snapshots_dir, ident)
        rows.append(
            {
                "id": ident,
                "width": int(pixels.shape[1]),
                "height": int(pixels.shape[0]),
                "diff": str(diff) if diff.exists() else None,
            }
        )
    return rows


@click.command("ls")
@click.argument("snapshots_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--no-header", is_flag=True, help="Omit the TSV header row.")
@click.option("--json", "use_json", is_flag=True, help="JSON output.")
def ls_cmd(snapshots_dir: Path, no_header: bool, use_json: bool) -> None:
    """List snapshots in SNAPSHOTS_DIR and any pending diff images."""
    try:
        rows = _collect(snapshots_dir)
    except SnapshotError as exc:
        err_exit(str(exc))

    if use_json:
        write_json(rows)
        return
    write_tsv(
        [[r["id"], r["width"], r["height"], r["diff"]] for r in rows],
        header=["ID", "WIDTH", "HEIGHT", "DIFF"],
        no_header=no_header,
    )
