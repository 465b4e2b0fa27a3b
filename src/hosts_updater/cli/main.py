"""Command-line interface (Typer + Rich).

The CLI only parses arguments, wires settings and prints results; the update
logic lives in `core.services.update_pipeline`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from hosts_updater.adapters.hosts_store import HostsFileStore
from hosts_updater.adapters.privileges import elevation_hint, is_elevated
from hosts_updater.cli import doctor
from hosts_updater.cli.ui_components import (
    build_report_panel,
    build_sources_table,
    print_banner,
)
from hosts_updater.core.config import AppSettings, load_settings
from hosts_updater.core.domain.errors import HostsUpdaterError, LineValidationError
from hosts_updater.core.domain.models import SourceDocument
from hosts_updater.core.hosts_grammar import iter_records, validate_document
from hosts_updater.core.log import configure_logging
from hosts_updater.core.merge import merge
from hosts_updater.core.scheduler import Scheduler
from hosts_updater.core.services.update_pipeline import (
    UpdateHooks,
    format_timestamp,
    run_update,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Merge remote hosts lists into the system hosts file.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Config file (JSON, TOML or YAML). Discovered when omitted."),
]


def _load_settings_or_exit(config: Path | None) -> AppSettings:
    try:
        return load_settings(config)
    except HostsUpdaterError as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _warn_if_not_elevated() -> None:
    if is_elevated():
        return
    logger.warning("Not running with administrator/root privileges; writing the hosts file may fail")
    _console.print(f"[yellow]Warning:[/yellow] elevated privileges are required. {elevation_hint()}")


def _read_local_document(path: Path) -> SourceDocument:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"cannot read {path}: {exc}") from exc
    return SourceDocument(origin=str(path), raw_text=text)


@app.command()
def run(
    config: ConfigOption = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Print the merged file instead of writing it.")] = False,
) -> None:
    """Run a single update cycle."""

    settings = _load_settings_or_exit(config)
    configure_logging(settings.log_level)
    if not dry_run:
        print_banner(_console)
        _warn_if_not_elevated()

    hooks = UpdateHooks(
        source_fetched=lambda doc: _console.print(f"[green]✓[/green] {doc.origin}"),
        source_failed=lambda origin, exc: _console.print(f"[red]✗[/red] {origin}: {exc}"),
    )
    try:
        report = asyncio.run(run_update(settings=settings, dry_run=dry_run, hooks=hooks))
    except HostsUpdaterError as exc:
        _console.print(f"[red]Update failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if dry_run:
        typer.echo(report.content, nl=False)
        return
    _console.print(build_report_panel(report))


@app.command()
def start(config: ConfigOption = None) -> None:
    """Update now, then keep updating every `update_interval_hours`."""

    settings = _load_settings_or_exit(config)
    configure_logging(settings.log_level)
    print_banner(_console)
    _warn_if_not_elevated()
    logger.info("Loaded %d source(s), update interval: %d hour(s)", len(settings.hosts_sources), settings.update_interval_hours)

    scheduler = Scheduler(settings.update_interval_hours)
    try:
        asyncio.run(scheduler.start(lambda: run_update(settings=settings)))
    except KeyboardInterrupt:
        _console.print("[dim]Stopped.[/dim]")


@app.command()
def validate(
    files: Annotated[list[Path], typer.Argument(help="Hosts documents to check.")],
) -> None:
    """Check local hosts documents against the hosts grammar."""

    table = build_sources_table(title="Validation")
    failures = 0
    for path in files:
        doc = _read_local_document(path)
        try:
            validate_document(doc)
        except LineValidationError as exc:
            failures += 1
            table.add_row(doc.origin, "[red]FAIL[/red]", "-", f"line {exc.line_no}: {exc.reason}")
            continue
        except HostsUpdaterError as exc:
            failures += 1
            table.add_row(doc.origin, "[red]FAIL[/red]", "-", str(exc))
            continue
        records = sum(1 for _ in iter_records(doc))
        table.add_row(doc.origin, "[green]OK[/green]", str(records), "")

    _console.print(table)
    if failures:
        raise typer.Exit(code=1)


@app.command()
def preview(
    files: Annotated[list[Path], typer.Argument(help="Hosts documents to merge, in order.")],
    hosts: Annotated[Path | None, typer.Option("--hosts", help="Hosts file to merge into.")] = None,
) -> None:
    """Print what the hosts file would look like with local documents merged in."""

    documents = [_read_local_document(path) for path in files]
    try:
        for doc in documents:
            validate_document(doc)
        current = HostsFileStore(hosts).read()
    except HostsUpdaterError as exc:
        _console.print(f"[red]Preview failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo(merge(current, documents, format_timestamp()), nl=False)


def run_cli() -> None:
    app()
