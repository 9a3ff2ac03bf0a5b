"""CLI entry point for the movie search tool."""

from __future__ import annotations

import logging
from typing import Optional

import click
from rich.console import Console

console = Console()


@click.group()
@click.version_option(package_name="moviesearch")
@click.option("--verbose", "-v", is_flag=True, help="Show log output.")
def cli(verbose: bool):
    """movies - Search OMDb with several terms at once, then filter, sort and summarize."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# movies env
# ---------------------------------------------------------------------------


@cli.group(invoke_without_command=True)
@click.pass_context
def env(ctx):
    """Show or configure settings.

    Run without arguments to see current status.
    Use `movies env set KEY value` to save a setting to ~/.moviesearch/.env.
    """
    if ctx.invoked_subcommand is not None:
        return

    from moviesearch.config import PERSISTENT_ENV, check_env

    statuses = check_env()
    console.print("Settings:")
    console.print()
    for var, is_set, info, problem in statuses:
        if problem:
            status = f"[yellow]set, but {problem}[/yellow]"
        elif is_set:
            status = "[green]set[/green]"
        else:
            status = "[red]not set[/red]"
        console.print(f"  {var}: {status}")
        console.print(f"    {info['description']}")
        console.print(f"    Used by: {', '.join(info['required_by'])}", style="dim")
        console.print()

    console.print(f"Config file: {PERSISTENT_ENV}", style="dim")


@env.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--force", is_flag=True, help="Save even if the value fails validation.")
def env_set(key: str, value: str, force: bool):
    """Save a setting to ~/.moviesearch/.env.

    KEY: one of OMDB_API_KEY, OMDB_BASE_URL, API_TIMEOUT
    VALUE: the value to store
    """
    from moviesearch.config import VALID_KEYS, save_key, validate_setting

    key = key.upper()
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key: {key}[/red]")
        console.print(f"Valid keys: {', '.join(sorted(VALID_KEYS))}")
        raise SystemExit(1)

    value = value.strip()
    problem = validate_setting(key, value)
    if problem and not force:
        console.print(f"[red]{key} {problem}.[/red] Use --force to save it anyway.")
        raise SystemExit(1)

    path = save_key(key, value)
    console.print(f"Saved {key} to {path}")


# ---------------------------------------------------------------------------
# movies find
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("terms", nargs=-1, required=True)
@click.option("--title", default="", help="Keep titles containing this text (case-insensitive).")
@click.option("--genre", default="", help="Keep movies whose genre contains this text.")
@click.option("--min-rating", default=None, type=float, help="Minimum IMDb rating.")
@click.option("--max-runtime", default=None, type=float, help="Maximum runtime in minutes.")
@click.option(
    "--sort",
    "sort_key",
    default="none",
    type=click.Choice(["none", "rating", "year"]),
    help="Sort order (default: as resolved).",
)
@click.option("--stats/--no-stats", default=True, help="Show summary statistics.")
def find(
    terms: tuple[str, ...],
    title: str,
    genre: str,
    min_rating: Optional[float],
    max_runtime: Optional[float],
    sort_key: str,
    stats: bool,
):
    """Search several terms, merge the hits and show the matching movies.

    TERMS: one or more search terms (e.g., batman superman)
    """
    from moviesearch.models import FilterCriteria, SortKey
    from moviesearch.pipeline import Pipeline
    from moviesearch.renderer import render_failures, render_records, render_statistics

    try:
        pipeline = Pipeline.from_env()
        result = pipeline.run_sync(terms)
        criteria = FilterCriteria(
            title=title, genre=genre, min_rating=min_rating, max_runtime=max_runtime,
        )
        view = pipeline.view(criteria, SortKey(sort_key))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    render_failures(result.failures)
    if result.empty is not None:
        console.print(f"[yellow]{result.empty}[/yellow]")
    render_records(view.records)
    if stats:
        render_statistics(view.statistics)


# ---------------------------------------------------------------------------
# movies details
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("imdb_id")
def details(imdb_id: str):
    """Show the full record for one movie.

    IMDB_ID: OMDb/IMDb identifier (e.g., 'tt0372784')
    """
    import asyncio

    from moviesearch.backends.omdb import OmdbClient
    from moviesearch.config import get_omdb_key
    from moviesearch.renderer import render_details

    async def _fetch():
        async with OmdbClient(get_omdb_key()) as client:
            return await client.fetch_detail(imdb_id)

    try:
        record = asyncio.run(_fetch())
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if record is None:
        console.print(f"[yellow]No movie found for {imdb_id}.[/yellow]")
        return
    render_details(record)
