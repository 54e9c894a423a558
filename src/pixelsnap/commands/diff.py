"""pixelsnap diff command -- pixel-level comparison of two image files."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pixelsnap.commands._helpers import err_exit
from pixelsnap.config import merge_diff_config, parse_option_pairs
from pixelsnap.errors import SnapshotError
from pixelsnap.formatters.json_fmt import write_json
from pixelsnap.image_compare import compare_images
from pixelsnap.pixel_diff import validate_options


@click.command("diff")
@click.argument("expected", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("actual", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--threshold", default=0.0, type=float, help="Diff ratio threshold (%).")
@click.option(
    "--pixel-threshold", default=None, type=float, help="Per-pixel color threshold [0, 1]."
)
@click.option(
    "-o",
    "--option",
    "options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Extra diff option (repeatable).",
)
@click.option(
    "--diff-output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write diff visualization PNG.",
)
@click.option("--json", "use_json", is_flag=True, help="JSON output.")
def diff_cmd(
    expected: Path,
    actual: Path,
    threshold: float,
    pixel_threshold: float | None,
    options: tuple[str, ...],
    diff_output: Path | None,
    use_json: bool,
) -> None:
    """Compare two images pixel-by-pixel.

    Exit 0 if images match (within threshold), exit 1 if they differ,
    exit 2 on error (size mismatch, invalid image, bad option).
    """
    try:
        config = parse_option_pairs(options)
        if pixel_threshold is not None:
            config["threshold"] = pixel_threshold
        validate_options(merge_diff_config(config))
    except ValueError as exc:
        err_exit(str(exc))

    try:
        result = compare_images(
            expected, actual, threshold=threshold, diff_output=diff_output, diff_config=config
        )
    except SnapshotError as exc:
        err_exit(str(exc))

    if use_json:
        write_json(
            {
                "identical": result.identical,
                "diff_pixels": result.diff_pixels,
                "total_pixels": result.total_pixels,
                "diff_ratio": result.diff_ratio,
                "diff_image": str(result.diff_image) if result.diff_image else None,
                "threshold": threshold,
                "options": merge_diff_config(config),
            }
        )
    elif result.identical:
        click.echo("match")
    else:
        click.echo(
            f"diff: {result.diff_pixels}/{result.total_pixels} pixels ({result.diff_ratio:.2f}%)"
        )

    sys.exit(0 if result.identical else 1)
