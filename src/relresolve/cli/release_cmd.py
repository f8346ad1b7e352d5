"""``relresolve release CONFIG``: Solve the releases of a YAML configuration.

Loads the configuration, solves every release it defines (or only the one
selected with ``--name``) and prints each realized release.

Exit Codes:
    0: All selected releases solved.
    1: A release failed to solve or the configuration is invalid.
    2: No (matching) releases in the configuration.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from relresolve.cli.output import print_error, print_release, releases_to_json
from relresolve.core.release import load_config, solve_release
from relresolve.core.release.models import RealizedRelease
from relresolve.exceptions import RelResolveError


@click.command("release")
@click.argument("config", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--name", "-n", "release_name",
    default=None,
    help="Only solve the release with this name.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def release_command(config: str, release_name: str | None, output_format: str) -> None:
    """Solve the releases defined in CONFIG."""
    try:
        state, releases = load_config(Path(config))
    except RelResolveError as exc:
        print_error(exc)
        sys.exit(1)

    if release_name is not None:
        releases = [r for r in releases if r.name == release_name]
    if not releases:
        click.echo("No releases found in the configuration.")
        sys.exit(2)

    realized: list[RealizedRelease] = []
    try:
        for release in releases:
            solved, state = solve_release(release, state)
            realized.append(solved)
    except RelResolveError as exc:
        print_error(exc)
        sys.exit(1)

    if output_format == "json":
        click.echo(releases_to_json(realized))
    else:
        for solved in realized:
            print_release(solved)
    sys.exit(0)
