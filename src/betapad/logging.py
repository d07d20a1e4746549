"""Logging configuration for the betapad CLI and API"""

import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    default_level: str = "INFO",
    stream: TextIO = sys.stderr,
) -> Console:
    """Configure root logging with a Rich handler and return its console.

    Flag precedence: quiet > verbosity > default_level. quiet logs warnings
    and above; any -v enables DEBUG with timestamps and source paths.
    """
    if quiet:
        level = logging.WARNING
    elif verbosity >= 1:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(default_level)

    console = Console(file=stream)
    handler = RichHandler(
        console=console,
        show_time=verbosity >= 1,
        show_path=verbosity >= 1,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    return console
