"""
Logging configuration for the spelling bee generator
Uses rich.logging for formatted console output
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Create console for rich output
console = Console()


def setup_logging(level=logging.INFO):
    """
    Set up logging with rich handler.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    return logging.getLogger("spellingbee")
