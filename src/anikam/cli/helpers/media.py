"""
Media display helpers.

Render normalized records as rich tables for humans, or as the data
member of the JSON envelope for machines.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from anikam.services.catalog_feeds import FeedState
from anikam.shared.constants import CLIMessages
from anikam.shared.models import MediaType, UnifiedMedia


def _progress(media: UnifiedMedia) -> str:
    if media.type is MediaType.MANGA:
        if media.chapters:
            return f"{media.chapters} ch"
        return "-"
    if media.episodes:
        return f"{media.episodes} ep"
    return "-"


def _score(media: UnifiedMedia) -> str:
    return f"{media.rating:.1f}" if media.rating else "-"


def print_media_table(
    items: list[UnifiedMedia],
    console: Console,
    title: str,
) -> None:
    """Display a list of records in a table.

    Args:
        items: Normalized records
        console: Rich console for output
        title: Table title
    """
    if not items:
        console.print(CLIMessages.NO_RESULTS)
        return

    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Status", style="blue")
    table.add_column("Year", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Score", style="yellow", justify="right")
    table.add_column("Genres", style="green")

    for media in items:
        table.add_row(
            media.id,
            media.title,
            media.type.value,
            media.status.value,
            str(media.release_year),
            _progress(media),
            _score(media),
            ", ".join(genre.value for genre in media.genres) or "-",
        )

    console.print(table)


def print_media_details(media: UnifiedMedia, console: Console) -> None:
    """Display one record with its synopsis."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold magenta")
    table.add_column("Value")

    rows: list[tuple[str, Any]] = [
        ("ID", media.id),
        ("English title", media.title_english),
        ("Japanese title", media.title_japanese),
        ("Type", media.type.value),
        ("Status", media.status.value),
        ("Years", _years(media)),
        ("Episodes", media.episodes),
        ("Duration", f"{media.duration} min" if media.duration else None),
        ("Chapters", media.chapters),
        ("Volumes", media.volumes),
        ("Score", _score(media)),
        ("Popularity", f"#{media.popularity}" if media.popularity else None),
        ("Studio", media.studio),
        ("Author", media.author),
        ("Source", media.source),
        ("Age rating", media.age_rating),
        ("Genres", ", ".join(genre.value for genre in media.genres)),
        ("Platforms", ", ".join(media.platforms)),
        ("Tags", ", ".join(media.tags)),
        ("Trailer", f"https://youtu.be/{media.trailer}" if media.trailer else None),
    ]
    for name, value in rows:
        if value not in (None, ""):
            table.add_row(name, str(value))

    console.print(Panel(table, title=f"[bold cyan]{media.title}[/bold cyan]"))
    console.print(media.synopsis)


def _years(media: UnifiedMedia) -> str:
    if media.end_year and media.end_year != media.release_year:
        return f"{media.release_year}-{media.end_year}"
    return str(media.release_year)


def feed_payload(state: FeedState) -> dict[str, Any]:
    """Build the JSON data member for one loaded feed page."""
    return {
        "items": [media.model_dump(mode="json") for media in state.items],
        "page": state.current_page,
        "has_next_page": state.has_next_page,
        "using_fallback": state.using_fallback,
    }
