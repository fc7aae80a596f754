"""
AniKam Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using `python -m anikam`. It delegates to the Typer application.
"""

import logging
import sys

from anikam.cli.common.error_handler import EXIT_INTERRUPTED, handle_cli_error
from anikam.cli.typer_app import app

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(EXIT_INTERRUPTED)
    except SystemExit:  # pylint: disable=try-except-raise
        # Re-raise SystemExit to preserve exit codes
        raise
    # pylint: disable-next=broad-exception-caught
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "anikam-main")
        sys.exit(exit_code)
