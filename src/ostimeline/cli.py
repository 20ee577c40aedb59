# src/ostimeline/cli.py
"""
ostimeline Command Line Interface (CLI).

This module implements the terminal front-end using `typer` and `rich`. Each
invocation starts from the fresh-load filter state and applies the options
given on the command line, the same way a browser session would apply clicks
and slider moves.

Usage
-----
    # Browse everything, grouped by decade
    $ ostimeline timeline

    # BSDs and Linux distros from the 1990s that mention ZFS
    $ ostimeline timeline -f BSD -f Linux --from 1990 --to 1999 -q zfs

    # Details for a single entry
    $ ostimeline show freebsd

    # Save the filtered list as JSON
    $ ostimeline export -t Kernel -o kernels.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, TypeVar

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ostimeline.core.contracts.entry import (
    ENTRY_TYPES,
    FAMILIES,
    PLATFORMS,
    Entry,
    EntryType,
    Family,
)
from ostimeline.core.contracts.state import FilterState
from ostimeline.core.contracts.view import TimelineView
from ostimeline.core.dataset import Dataset, default_dataset
from ostimeline.core.errors import DatasetError, EntryNotFoundError
from ostimeline.core.export import ExportWriter
from ostimeline.core.session import TimelineSession

load_dotenv()

app = typer.Typer(
    help="ostimeline: browse an interactive timeline of kernels and operating systems.",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
console = Console()

T = TypeVar("T")


# --------------------------------------------------------------------------- #
# Shared options
# --------------------------------------------------------------------------- #

QueryOpt = Annotated[
    str, typer.Option("--query", "-q", help="Search names, descriptions, features, versions.")
]
TypeOpt = Annotated[
    list[EntryType] | None,
    typer.Option("--type", "-t", help="Entry type to include (repeatable). Default: all."),
]
FamilyOpt = Annotated[
    list[Family] | None,
    typer.Option("--family", "-f", help="Family to include (repeatable). Default: all."),
]
FromOpt = Annotated[int | None, typer.Option("--from", help="First year of the range.")]
ToOpt = Annotated[int | None, typer.Option("--to", help="Last year of the range.")]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load() -> Dataset:
    """Load the dataset or exit with a readable error."""
    try:
        return default_dataset()
    except DatasetError as e:
        console.print(f"[bold red]❌ Dataset Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


def _session(
    dataset: Dataset,
    query: str,
    types: list[EntryType] | None,
    families: list[Family] | None,
    year_from: int | None,
    year_to: int | None,
) -> TimelineSession:
    """Replay command-line options as session intents."""
    session = TimelineSession(dataset)
    if query:
        session.set_query(query)
    if types:
        for t in _unique_in_order(types):
            session.toggle_type(t)
    if families:
        for f in _unique_in_order(families):
            session.toggle_family(f)
    if year_to is not None:
        session.set_range_to(year_to)
    if year_from is not None:
        session.set_range_from(year_from)
    return session


def _unique_in_order(options: list[T]) -> list[T]:
    """Drop repeated options, keeping first-seen order."""
    seen: list[T] = []
    for o in options:
        if o not in seen:
            seen.append(o)
    return seen


def _platforms(entry: Entry) -> str:
    return escape("[" + ", ".join(p.value for p in entry.platform) + "]")


def _span(entry: Entry) -> str:
    if entry.year_end is not None:
        return f"{entry.year_start}–{entry.year_end}"
    return str(entry.year_start)


def _render_timeline(view: TimelineView, state: FilterState) -> None:
    console.print(
        f"[dim]{view.count} items · {state.range_from}–{state.range_to}"
        + (f" · query {escape(repr(state.query))}" if state.query.strip() else "")
        + "[/dim]"
    )
    if view.is_empty:
        console.print("[yellow]No results. Try widening filters.[/yellow]")
        return

    for bucket in view.decades:
        console.rule(f"[bold]{bucket.decade}s[/bold]")
        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("years", style="cyan", no_wrap=True)
        table.add_column("name", style="bold")
        table.add_column("type", style="magenta")
        table.add_column("family", style="green")
        table.add_column("platforms", style="dim")
        for e in bucket.items:
            table.add_row(
                _span(e),
                escape(e.name),
                e.type.value,
                e.family.value,
                _platforms(e),
            )
        console.print(table)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def timeline(
    query: QueryOpt = "",
    entry_type: TypeOpt = None,
    family: FamilyOpt = None,
    year_from: FromOpt = None,
    year_to: ToOpt = None,
) -> None:
    """
    Show the filtered timeline grouped by decade.

    Range endpoints are clamped to the dataset's years; `--from` is clamped
    so it never exceeds `--to`.
    """
    dataset = _load()
    session = _session(dataset, query, entry_type, family, year_from, year_to)
    _render_timeline(session.view(), session.state)


@app.command()  # type: ignore[misc]
def show(
    entry_id: Annotated[str, typer.Argument(help="Entry id, e.g. 'freebsd'.")],
) -> None:
    """Show the details of one entry: highlights, notable versions, related entries."""
    dataset = _load()
    try:
        detail = TimelineSession(dataset).detail(entry_id)
    except EntryNotFoundError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise typer.Exit(code=1) from e

    e = detail.entry
    console.print(
        Panel.fit(
            f"[bold]{escape(e.name)}[/bold]  [magenta]{e.type.value}[/magenta]  "
            f"[green]{e.family.value}[/green]\n"
            f"[dim]{_span(e)}  {_platforms(e)}[/dim]\n\n"
            f"{escape(e.description)}",
            border_style="cyan",
        )
    )

    console.print("[bold yellow]Highlights[/bold yellow]")
    for h in e.highlights or ():
        console.print(f" • {escape(h)}")
    if not e.highlights:
        console.print(" [dim]—[/dim]")

    console.print("[bold yellow]Notable Versions[/bold yellow]")
    if e.versions:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Version")
        table.add_column("Year", style="cyan")
        table.add_column("Notes", style="dim")
        for v in e.versions:
            table.add_row(escape(v.version), str(v.year), escape(v.notes or ""))
        console.print(table)
    else:
        console.print(" [dim]—[/dim]")

    if detail.related:
        console.print("[bold yellow]Related[/bold yellow]")
        console.print(" " + escape(", ".join(r.name for r in detail.related)))


@app.command()  # type: ignore[misc]
def export(
    query: QueryOpt = "",
    entry_type: TypeOpt = None,
    family: FamilyOpt = None,
    year_from: FromOpt = None,
    year_to: ToOpt = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            dir_okay=False,
            help="Destination file. Default: os-kernel-timeline-<from>-<to>.json "
            "in the export directory.",
        ),
    ] = None,
) -> None:
    """Write the filtered entries to a JSON file."""
    dataset = _load()
    session = _session(dataset, query, entry_type, family, year_from, year_to)
    view = session.view()
    state = session.state

    try:
        path = ExportWriter().write(view.entries, state.range_from, state.range_to, output)
    except OSError as e:
        console.print(f"[bold red]❌ Export Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(
        Panel(
            f"{view.count} entries saved to: [link=file://{path.resolve()}]{path}[/link]",
            title="Export",
            border_style="green",
        )
    )


@app.command()  # type: ignore[misc]
def facets() -> None:
    """List the available types, families and platforms, and the dataset's years."""
    dataset = _load()
    console.print(f"[bold]Years:[/bold] {dataset.min_year}–{dataset.max_year}")
    console.print("[bold]Types:[/bold] " + ", ".join(t.value for t in ENTRY_TYPES))
    console.print("[bold]Families:[/bold] " + ", ".join(f.value for f in FAMILIES))
    console.print("[bold]Platforms:[/bold] " + ", ".join(p.value for p in PLATFORMS))


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str | None, typer.Option(help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option(help="Bind port.")] = None,
    reload: Annotated[
        bool | None, typer.Option("--reload/--no-reload", help="Defaults to on in dev.")
    ] = None,
) -> None:
    """Run the HTTP API with uvicorn."""
    from ostimeline.api.server import main

    main(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
