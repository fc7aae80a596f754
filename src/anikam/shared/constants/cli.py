"""
CLI Configuration Constants

This module contains constants related to command-line interface
configuration, default values, and user-facing text.
"""

from typing import Literal

from .network import JikanAPIConfig
from .system import Application


class CLIDefaults:
    """Default values for CLI commands."""

    VERSION = Application.VERSION
    PAGE = 1
    LIMIT = JikanAPIConfig.DEFAULT_PAGE_LIMIT


class CLIHelp:
    """Help text for CLI commands and options."""

    APP_NAME = "anikam"
    APP_DESCRIPTION = "Browse the anime and manga catalog from the command line"
    APP_STYLE: Literal["rich"] = "rich"
    VERSION_TEXT = "AniKam CLI v{version}"

    # Commands
    SEARCH_HELP = "Search anime (or manga) by title"
    TOP_HELP = "Show the top ranked anime (or manga)"
    SEASON_HELP = "Show anime airing in a season (current season by default)"
    DETAILS_HELP = "Show one anime or manga by its MyAnimeList id"
    RANDOM_HELP = "Show a random anime or manga"

    # Options
    LOG_LEVEL_HELP = "Set the logging level (DEBUG, INFO, WARNING, ERROR)"
    VERSION_HELP = "Show version information and exit"
    MANGA_HELP = "Query manga instead of anime"
    ALL_HELP = "Search anime and manga together"
    JSON_HELP = "Output results in JSON format"
    PAGE_HELP = "Result page to fetch"
    LIMIT_HELP = "Number of results per page"
    TYPE_HELP = "Media type filter (e.g. tv, movie, manga, novel)"
    STATUS_HELP = "Status filter (e.g. airing, complete, publishing)"
    ORDER_BY_HELP = "Field to order results by"
    SORT_HELP = "Sort direction (asc or desc)"
    FILTER_HELP = "Top list filter (e.g. airing, bypopularity, favorite)"
    YEAR_HELP = "Season year"
    SEASON_NAME_HELP = "Season name (winter, spring, summer, fall)"


class CLIMessages:
    """CLI message templates."""

    NO_RESULTS = "[yellow]No results found.[/yellow]"
    FALLBACK_NOTICE = "[dim]Showing offline picks while the catalog is unreachable.[/dim]"
    FALLBACK_NOTICE_PLAIN = "Showing offline picks while the catalog is unreachable."
    NO_RESULTS_PLAIN = "No results found."
    NEXT_PAGE = "[dim]More results available: --page {page}[/dim]"
    SEASON_ARGS_REQUIRED = "--year and --season must be given together"
    MANGA_ALL_CONFLICT = "--manga and --all cannot be combined"
