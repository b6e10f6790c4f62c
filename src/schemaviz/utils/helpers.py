"""Utility helper functions."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def file_suffix(filename: str | Path | None) -> str:
    """Get the lower-cased extension of a filename, including the dot.

    Returns an empty string when there is no filename or no extension.
    """
    if not filename:
        return ""
    return Path(filename).suffix.lower()


def truncate_text(text: str, max_chars: int) -> str:
    """Truncate text to at most ``max_chars`` characters."""
    if max_chars < 0:
        return text
    return text[:max_chars]


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure root logging with a rich handler.

    Args:
        verbose: Log DEBUG records when True, WARNING and above otherwise
        console: Optional console to log to (stderr by default)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
