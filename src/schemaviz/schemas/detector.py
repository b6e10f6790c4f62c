"""Dialect detection from a filename hint and content signatures."""

import logging
from pathlib import Path

from schemaviz.schemas.base import Dialect
from schemaviz.utils.helpers import file_suffix

logger = logging.getLogger(__name__)

# File extensions to dialect mapping
EXTENSION_DIALECTS = {
    ".rb": Dialect.RAILS,
    ".sql": Dialect.SQL,
    ".prisma": Dialect.PRISMA,
    ".py": Dialect.DJANGO,
}

# Content markers, checked in order
CONTENT_MARKERS: list[tuple[Dialect, tuple[str, ...]]] = [
    (Dialect.PRISMA, ("generator client {",)),
    (Dialect.DJANGO, ("models.Model", "django.db")),
    (Dialect.RAILS, ("ActiveRecord::Schema", "create_table")),
]

SQL_MARKER = "CREATE TABLE"

# Used when nothing else matches
FALLBACK_DIALECT = Dialect.RAILS


def detect_dialect(content: str, filename: str | Path | None = "") -> Dialect:
    """Detect the schema dialect of some content.

    The extension is checked first, then dialect-defining marker tokens,
    then a case-insensitive ``CREATE TABLE``. Anything else is treated as
    Rails. Detection never fails: scanning is tolerant and simply yields
    less structure on a mismatch.

    Args:
        content: Raw schema text
        filename: Optional filename hint

    Returns:
        Detected Dialect
    """
    suffix = file_suffix(filename)
    if suffix in EXTENSION_DIALECTS:
        return EXTENSION_DIALECTS[suffix]

    for dialect, markers in CONTENT_MARKERS:
        if any(marker in content for marker in markers):
            return dialect

    if SQL_MARKER in content.upper():
        return Dialect.SQL

    logger.debug("No dialect signal found, falling back to %s", FALLBACK_DIALECT.value)
    return FALLBACK_DIALECT


def detect_dialect_from_path(path: Path | str, content: str | None = None) -> Dialect:
    """Detect the dialect of a file, reading it when content is not given."""
    path = Path(path)
    if content is None:
        content = path.read_text()
    return detect_dialect(content, path.name)
