from __future__ import annotations

import logging

import click

from pixelsnap import __version__
from pixelsnap.commands.compare import compare_cmd
from pixelsnap.commands.diff import diff_cmd
from pixelsnap.commands.ls import ls_cmd


def _configure_logging(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if value else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pixelsnap")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_configure_logging,
    help="Log debug output to stderr.",
)
def main() -> None:
    """pixelsnap: image snapshot comparison for visual regression tests."""


main.add_command(compare_cmd, name="compare")
main.add_command(diff_cmd, name="diff")
main.add_command(ls_cmd, name="ls")


if __name__ == "__main__":
    main()
