"""
AniKam Typer CLI Application

Command-line front end over the catalog feeds: search, top lists, seasons,
details and random picks. Each command builds the service container, runs
one feed load on a fresh event loop and renders the result as a rich table
or as a JSON envelope.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, Optional, TypeVar

import typer
from dependency_injector import providers
from rich.console import Console

from anikam.cli.common.context import (
    CliContext,
    LogLevel,
    get_cli_context,
    set_cli_context,
)
from anikam.cli.common.error_handler import handle_cli_error
from anikam.cli.common.options import (
    JsonOption,
    LimitOption,
    MangaOption,
    PageOption,
    TypeOption,
    config_option,
    log_level_option,
    version_option,
)
from anikam.cli.helpers.media import (
    feed_payload,
    print_media_details,
    print_media_table,
)
from anikam.cli.json_formatter import format_json_output, write_json_output
from anikam.config.loader import load_settings
from anikam.containers import Container, shutdown, startup
from anikam.services.catalog_feeds import ContentType, DetailsState, FeedState
from anikam.shared.constants import CLIDefaults, CLIHelp, CLIMessages
from anikam.shared.errors import create_cli_error
from anikam.shared.logging import setup_structured_logger
from anikam.shared.models import MediaType

T = TypeVar("T")

# Version information
__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.WARNING,
    config: Annotated[Optional[Path], config_option] = None,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Main CLI callback processing the global options."""
    if version:
        version_callback(value=True)

    set_cli_context(CliContext(log_level=log_level, config_path=config))


def build_container(config_path: Path | None = None) -> Container:
    """Create the service container, reading ``config_path`` when given."""
    container = Container()
    if config_path is not None:
        container.config.override(providers.Singleton(load_settings, config_path))
    return container


async def _with_container(
    container: Container,
    action: Callable[[Container], Awaitable[T]],
) -> T:
    try:
        await startup(container)
        return await action(container)
    finally:
        await shutdown(container)


def _execute(
    command: str,
    json_output: bool,
    action: Callable[[Container], Awaitable[Any]],
) -> None:
    """Run ``action`` against a fresh container and map failures to exit codes."""
    context = get_cli_context()
    try:
        container = build_container(context.config_path)
        settings = container.config()
        setup_structured_logger(
            level=context.log_level.value,
            log_file=settings.logging.file,
            use_rich_console=settings.logging.rich_console,
        )
        asyncio.run(_with_container(container, action))
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, command, json_output=json_output)
        raise typer.Exit(exit_code) from e


def _render_feed(
    command: str,
    state: FeedState,
    title: str,
    *,
    json_output: bool,
) -> None:
    if state.error:
        raise create_cli_error(state.error, command=command)

    if json_output:
        warnings = [CLIMessages.FALLBACK_NOTICE_PLAIN] if state.using_fallback else []
        write_json_output(
            format_json_output(
                success=True,
                command=command,
                data=feed_payload(state),
                warnings=warnings,
            )
        )
        return

    console = Console()
    print_media_table(state.items, console, title)
    if state.using_fallback:
        console.print(CLIMessages.FALLBACK_NOTICE)
    elif state.has_next_page:
        console.print(CLIMessages.NEXT_PAGE.format(page=state.current_page + 1))


def _render_details(command: str, state: DetailsState, *, json_output: bool) -> None:
    if state.error or state.media is None:
        raise create_cli_error(state.error or CLIMessages.NO_RESULTS_PLAIN, command=command)

    if json_output:
        write_json_output(
            format_json_output(success=True, command=command, data={"item": state.media})
        )
        return

    print_media_details(state.media, Console())


def _media_type(manga: bool) -> MediaType:
    return MediaType.MANGA if manga else MediaType.ANIME


@app.command("search", help=CLIHelp.SEARCH_HELP)
def search_command(
    query: Annotated[str, typer.Argument(help="Title to search for")],
    manga: MangaOption = False,
    all_media: Annotated[
        bool,
        typer.Option("--all", "-a", help=CLIHelp.ALL_HELP),
    ] = False,
    type: TypeOption = None,
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help=CLIHelp.STATUS_HELP),
    ] = None,
    order_by: Annotated[
        Optional[str],
        typer.Option("--order-by", help=CLIHelp.ORDER_BY_HELP),
    ] = None,
    sort: Annotated[
        Optional[str],
        typer.Option("--sort", help=CLIHelp.SORT_HELP),
    ] = None,
    page: PageOption = CLIDefaults.PAGE,
    limit: LimitOption = CLIDefaults.LIMIT,
    json_output: JsonOption = False,
) -> None:
    """
    Search the catalog by title.

    Examples:
        # Search anime
        anikam search "cowboy bebop"

        # Search manga, second page, as JSON
        anikam search berserk --manga --page 2 --json

        # Search anime and manga together
        anikam search "one piece" --all
    """
    if manga and all_media:
        exit_code = handle_cli_error(
            create_cli_error(CLIMessages.MANGA_ALL_CONFLICT, command="search"),
            "search",
            json_output=json_output,
        )
        raise typer.Exit(exit_code)

    if all_media:
        content_type = ContentType.ALL
    else:
        content_type = ContentType(_media_type(manga).value)

    async def action(container: Container) -> None:
        feed = container.search_feed(
            query=query,
            content_type=content_type,
            type=type,
            status=status,
            order_by=order_by,
            sort=sort,
            limit=limit,
        )
        state = await feed.load(page)
        _render_feed(
            "search",
            state,
            f"Search results for '{query}'",
            json_output=json_output,
        )

    _execute("search", json_output, action)


@app.command("top", help=CLIHelp.TOP_HELP)
def top_command(
    manga: MangaOption = False,
    filter: Annotated[
        Optional[str],
        typer.Option("--filter", "-f", help=CLIHelp.FILTER_HELP),
    ] = None,
    type: TypeOption = None,
    page: PageOption = CLIDefaults.PAGE,
    limit: LimitOption = CLIDefaults.LIMIT,
    json_output: JsonOption = False,
) -> None:
    """
    Show the top ranked titles.

    Examples:
        # Top anime currently airing
        anikam top --filter airing

        # Most popular manga
        anikam top --manga --filter bypopularity
    """
    media_type = _media_type(manga)

    async def action(container: Container) -> None:
        feed = container.top_media_feed(
            media_type=media_type,
            type=type,
            filter=filter,
            limit=limit,
        )
        state = await feed.load(page)
        _render_feed("top", state, f"Top {media_type.value}", json_output=json_output)

    _execute("top", json_output, action)


@app.command("season", help=CLIHelp.SEASON_HELP)
def season_command(
    year: Annotated[
        Optional[int],
        typer.Option("--year", "-y", min=1917, help=CLIHelp.YEAR_HELP),
    ] = None,
    season: Annotated[
        Optional[str],
        typer.Option("--season", "-s", help=CLIHelp.SEASON_NAME_HELP),
    ] = None,
    page: PageOption = CLIDefaults.PAGE,
    limit: LimitOption = CLIDefaults.LIMIT,
    json_output: JsonOption = False,
) -> None:
    """
    Show anime of one season.

    Without options the season currently airing is shown.

    Examples:
        anikam season
        anikam season --year 2019 --season spring
    """
    if (year is None) != (season is None):
        exit_code = handle_cli_error(
            create_cli_error(CLIMessages.SEASON_ARGS_REQUIRED, command="season"),
            "season",
            json_output=json_output,
        )
        raise typer.Exit(exit_code)

    title = f"{season.capitalize()} {year}" if year and season else "Current season"

    async def action(container: Container) -> None:
        feed = container.season_feed(year=year, season=season, limit=limit)
        state = await feed.load(page)
        _render_feed("season", state, title, json_output=json_output)

    _execute("season", json_output, action)


@app.command("details", help=CLIHelp.DETAILS_HELP)
def details_command(
    media_id: Annotated[int, typer.Argument(min=1, help="MyAnimeList id")],
    manga: MangaOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Show one anime or manga.

    Examples:
        anikam details 1
        anikam details 2 --manga --json
    """
    media_type = _media_type(manga)

    async def action(container: Container) -> None:
        state = await container.details_loader().load(media_id, media_type)
        _render_details("details", state, json_output=json_output)

    _execute("details", json_output, action)


@app.command("random", help=CLIHelp.RANDOM_HELP)
def random_command(
    manga: MangaOption = False,
    json_output: JsonOption = False,
) -> None:
    """Show a random anime or manga."""
    media_type = _media_type(manga)

    async def action(container: Container) -> None:
        state = await container.details_loader().load_random(media_type)
        _render_details("random", state, json_output=json_output)

    _execute("random", json_output, action)


if __name__ == "__main__":
    app()
