# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click

from fnpack_lib.core.click_format import GNUHelpColorsGroup
from fnpack_lib.files.cli import files
from fnpack_lib.pack.cli import pack

__version__ = "0.1.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=GNUHelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of fnpack and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any fnpack command.

    fnpack packages a function's source directory into a zip archive ready for deployment,
    skipping everything excluded by the directory's .gcloudignore file.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(pack)
cli.add_command(files)
