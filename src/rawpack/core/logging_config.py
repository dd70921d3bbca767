# rawpack/src/rawpack/core/logging_config.py

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """
    Configure root logging for command-line runs.

    Library modules only create loggers; handlers are installed here once.
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True
    )
