"""Rich output formatting helpers for the relresolve CLI.

Provides consistent terminal output for resolved application lists,
realized releases and resolution errors.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from relresolve.core.release.models import RealizedRelease
from relresolve.core.resolution.app_info import AppInfo
from relresolve.exceptions import RelResolveError

console = Console()
err_console = Console(stderr=True)


def _apps_table(apps: list[AppInfo] | tuple[AppInfo, ...], title: str | None = None) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Application", style="bold")
    table.add_column("Version")
    table.add_column("Directory", style="dim", overflow="fold")
    for index, app in enumerate(apps, start=1):
        table.add_row(str(index), app.name, app.vsn, str(app.dir))
    return table


def print_resolved_apps(apps: list[AppInfo]) -> None:
    """Print the resolved application list in dependency order.

    Args:
        apps: Resolved applications, dependencies first.
    """
    if not apps:
        console.print("[dim]No applications resolved.[/dim]")
        return
    console.print(_apps_table(apps, title="Resolved Applications"))
    console.print(f"[bold]{len(apps)}[/bold] applications resolved")


def print_release(release: RealizedRelease) -> None:
    """Print a realized release with its applications."""
    header = Text.assemble(
        ("Release: ", "bold"), (f"{release.name}-{release.vsn}", ""),
    )
    if release.erts_vsn is not None:
        header.append("  ERTS: ", style="bold")
        header.append(release.erts_vsn, style="cyan")
    console.print(Panel(header, title="Release"))
    console.print(_apps_table(release.applications))


def print_error(exc: RelResolveError) -> None:
    """Print a resolution failure."""
    err_console.print(
        Panel(Text(str(exc), style="bold red"), title=type(exc).__name__)
    )


def apps_to_json(apps: list[AppInfo]) -> str:
    return json.dumps([app.to_dict() for app in apps], indent=2)


def releases_to_json(releases: list[RealizedRelease]) -> str:
    payload: list[dict[str, Any]] = [r.to_dict() for r in releases]
    return json.dumps(payload, indent=2)
