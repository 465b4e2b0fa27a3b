"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hosts_updater.core.domain.models import UpdateReport


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in non-interactive modes)."""

    title = Text("hosts-updater", style="bold cyan")
    subtitle = Text("Aggregate • Validate • Merge", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_sources_table(title: str = "Sources") -> Table:
    table = Table(title=title)
    table.add_column("Source", style="cyan")
    table.add_column("Status", style="white", no_wrap=True)
    table.add_column("Records", style="green", justify="right")
    table.add_column("Details", style="dim")
    return table


def build_report_panel(report: UpdateReport) -> Panel:
    """Panel summarizing an `UpdateReport`."""

    body = Text()
    body.append("Target: ", style="bold")
    body.append(f"{report.hosts_path}\n")
    body.append("Last updated: ", style="bold")
    body.append(f"{report.timestamp}\n")
    body.append("Sources: ", style="bold")
    body.append(f"{len(report.origins)}\n")
    body.append("Size: ", style="bold")
    body.append(f"{report.bytes_before} -> {report.bytes_after} bytes\n")
    if report.backup_path:
        body.append("Backup: ", style="bold")
        body.append(f"{report.backup_path}\n")

    if report.written:
        title = Text("Hosts file updated", style="bold green")
        border = "green"
    else:
        title = Text("Dry run (nothing written)", style="bold yellow")
        border = "yellow"
    return Panel(body, title=title, border_style=border)
