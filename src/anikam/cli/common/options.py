"""
Reusable Typer Options Module

Typer options shared by several commands, so that every command spells
``--json``, ``--manga``, ``--page`` and ``--limit`` the same way.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from anikam.shared.constants import CLIHelp

# Main callback options
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help=CLIHelp.LOG_LEVEL_HELP,
)

config_option = typer.Option(
    "--config",
    exists=True,
    dir_okay=False,
    help="Path to a TOML configuration file",
)

version_option = typer.Option(
    "--version",
    "-V",
    help=CLIHelp.VERSION_HELP,
    is_eager=True,
)

# Command options
JsonOption = Annotated[bool, typer.Option("--json", help=CLIHelp.JSON_HELP)]
MangaOption = Annotated[bool, typer.Option("--manga", "-m", help=CLIHelp.MANGA_HELP)]
PageOption = Annotated[int, typer.Option("--page", "-p", min=1, help=CLIHelp.PAGE_HELP)]
LimitOption = Annotated[
    int,
    typer.Option("--limit", "-n", min=1, max=25, help=CLIHelp.LIMIT_HELP),
]
TypeOption = Annotated[
    Optional[str],
    typer.Option("--type", "-t", help=CLIHelp.TYPE_HELP),
]
