"""Rich terminal renderer for movie records and summary statistics."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from moviesearch.models import DetailRecord, Failure, Statistics

console = Console()

PLOT_PREVIEW = 200


def _meta_line(record: DetailRecord) -> str:
    parts = []
    if record.year:
        parts.append(record.year)
    if record.genre_raw:
        parts.append(record.genre_raw)
    if record.runtime_raw:
        parts.append(record.runtime_raw)
    parts.append(f"rating {record.rating_raw}" if record.rating_raw else "unrated")
    return " | ".join(parts)


def render_records(records: list[DetailRecord]) -> None:
    """Render a list of movies with reference numbers."""
    if not records:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(f"Found {len(records)} movies")
    console.print()

    for i, r in enumerate(records, 1):
        title_line = Text()
        title_line.append(f"[m{i}] ", style="bold cyan")
        title_line.append(r.title or "(untitled)", style="bold")
        title_line.append(f"  {r.id}", style="dim")
        console.print(title_line)

        console.print(f"     {_meta_line(r)}", style="dim")

        if r.plot:
            plot = r.plot[:PLOT_PREVIEW]
            if len(r.plot) > PLOT_PREVIEW:
                plot += "..."
            console.print(f"     {plot}")

        console.print(f"  > Use `movies details {r.id}` for cast and awards", style="dim italic")
        console.print()


def render_statistics(stats: Statistics) -> None:
    """Render count, average rating and the genre histogram."""
    console.print("Summary", style="bold")
    console.print(f"  Movies: {stats.count}")
    if stats.average_rating is None:
        console.print("  Average rating: n/a")
    else:
        console.print(f"  Average rating: {stats.average_rating:.2f}")

    if stats.genre_histogram:
        console.print("  Genres:")
        ranked = sorted(stats.genre_histogram.items(), key=lambda kv: (-kv[1], kv[0]))
        for genre, count in ranked:
            console.print(f"    {genre}: {count}")
    console.print()


def render_failures(failures: list[Failure]) -> None:
    """Render recoverable per-term / per-id failures."""
    if not failures:
        return
    console.print(f"[yellow]{len(failures)} lookups failed and were skipped:[/yellow]")
    for f in failures:
        console.print(f"  {f.unit}: {f.describe()}", style="dim")
    console.print()


def render_details(record: DetailRecord) -> None:
    """Render the full record for a single movie."""
    console.print(record.title or "(untitled)", style="bold")
    console.print(_meta_line(record), style="dim")

    if record.actors:
        console.print(f"Starring: {record.actors}")
    if record.awards:
        console.print(f"Awards: {record.awards}")
    if record.plot:
        console.print()
        console.print(record.plot)
    if record.poster_url:
        console.print()
        console.print(record.poster_url, style="dim")
    console.print()
