"""pixelsnap compare command -- check an image against its stored snapshot."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pixelsnap.commands._helpers import err_exit
from pixelsnap.config import merge_diff_config, parse_option_pairs, resolve_update_mode
from pixelsnap.diff_snapshot import SnapshotCompared, diff_image_to_snapshot
from pixelsnap.errors import SnapshotError
from pixelsnap.formatters.json_fmt import write_json
from pixelsnap.pixel_diff import validate_options


@click.command("compare")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--id", "identifier", required=True, help="Snapshot identifier.")
@click.option(
    "--dir",
    "snapshots_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Snapshots directory.",
)
@click.option("-u", "--update", is_flag=True, help="Overwrite the stored snapshot.")
@click.option("--threshold", default=None, type=float, help="Per-pixel color threshold [0, 1].")
@click.option(
    "-o",
    "--option",
    "options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Extra diff option (repeatable).",
)
@click.option("--json", "use_json", is_flag=True, help="JSON output.")
def compare_cmd(
    image: Path,
    identifier: str,
    snapshots_dir: Path,
    update: bool,
    threshold: float | None,
    options: tuple[str, ...],
    use_json: bool,
) -> None:
    """Compare IMAGE with the snapshot stored under --id in --dir.

    A missing snapshot is created. Exit 0 if added, updated or matching,
    exit 1 if pixels differ, exit 2 on error.
    """
    try:
        config = parse_option_pairs(options)
        if threshold is not None:
            config["threshold"] = threshold
        validate_options(merge_diff_config(config))
    except ValueError as exc:
        err_exit(str(exc))

    try:
        result = diff_image_to_snapshot(
            image.read_bytes(),
            identifier,
            snapshots_dir,
            update_snapshot=resolve_update_mode(update),
            custom_diff_config=config,
        )
    except (SnapshotError, OSError) as exc:
        err_exit(str(exc))

    if use_json:
        write_json(result.to_dict())
    elif result.added:
        click.echo(f"added: {result.snapshot_path}")
    elif result.updated:
        click.echo(f"updated: {result.snapshot_path}")
    elif isinstance(result, SnapshotCompared) and not result.passed:
        click.echo(
            f"diff: {result.pixel_count_diff}/{result.width * result.height} pixels "
            f"({result.diff_ratio:.2%}), see {result.diff_output_path}"
        )
    else:
        click.echo("match")

    sys.exit(0 if result.passed else 1)
