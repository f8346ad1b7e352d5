"""``relresolve resolve GOAL...``: Resolve goals into an ordered application list.

Each GOAL is an application name, optionally pinned to a version with
``name@vsn``. Applications are searched in the ``--lib-dir`` directories in
order, then on the system code path unless ``--no-code-path`` is given.

Exit Codes:
    0: Resolution succeeded.
    1: Resolution failed (missing application or malformed app file).
    2: Usage error.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from relresolve.cli.output import apps_to_json, print_error, print_resolved_apps
from relresolve.core.resolution.app_info import Goal
from relresolve.core.resolution.resolver import Resolver
from relresolve.exceptions import RelResolveError


def _parse_goals(goals: tuple[str, ...]) -> list[Goal]:
    try:
        return [Goal.parse(g) for g in goals]
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="GOAL") from exc


@click.command("resolve")
@click.argument("goals", nargs=-1, required=True)
@click.option(
    "--lib-dir", "-l", "lib_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory to search for <dir>/*/ebin/<app>.app (repeatable, in order).",
)
@click.option(
    "--exclude", "-x", "exclude_apps",
    multiple=True,
    help="Application to leave out of the output (its dependencies stay).",
)
@click.option(
    "--system-libs",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Search this directory first and never consult the code path.",
)
@click.option(
    "--no-code-path",
    is_flag=True,
    default=False,
    help="Do not fall back to the system code path.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def resolve_command(
    goals: tuple[str, ...],
    lib_dirs: tuple[str, ...],
    exclude_apps: tuple[str, ...],
    system_libs: str | None,
    no_code_path: bool,
    output_format: str,
) -> None:
    """Resolve GOALS into the ordered list of applications a release needs."""
    goal_list = _parse_goals(goals)
    dirs = [Path(d) for d in lib_dirs]
    check_code_path = not no_code_path
    if system_libs is not None:
        dirs.insert(0, Path(system_libs))
        check_code_path = False

    resolver = Resolver(
        {},
        lib_dirs=dirs,
        check_code_path=check_code_path,
        exclude_apps=exclude_apps,
    )
    try:
        apps = resolver.resolve(goal_list)
    except RelResolveError as exc:
        print_error(exc)
        sys.exit(1)

    if output_format == "json":
        click.echo(apps_to_json(apps))
    else:
        print_resolved_apps(apps)
    sys.exit(0)
