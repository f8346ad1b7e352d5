"""relresolve CLI: Application dependency resolution for releases.

Entry point for the ``relresolve`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve: Resolve goals into an ordered application list.
    release: Solve the releases of a YAML configuration file.

Usage::

    relresolve resolve myapp -l _build/default/lib
    relresolve resolve myapp cowboy@2.10.0 -l deps --no-code-path
    relresolve -v release relresolve.yaml --name myrel
"""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from relresolve import __version__
from relresolve.cli.output import err_console
from relresolve.cli.release_cmd import release_command
from relresolve.cli.resolve_cmd import resolve_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution steps.")
def cli(verbose: bool) -> None:
    """relresolve: Compute the applications a release needs.

    Expands release goals into the deduplicated, dependency-ordered list
    of applications, searching known library directories and the system
    code path.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(release_command)
