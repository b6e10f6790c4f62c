"""Per-dialect comment stripping applied before structural scanning.

SQL loses line and block comments entirely. For the line-oriented dialects
only whole-line comments are blanked, so line numbers stay stable and
comment markers inside quoted values are left alone.
"""

import re

from schemaviz.schemas.base import Dialect

SQL_LINE_COMMENT = re.compile(r"--.*$", re.MULTILINE)
SQL_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)

# Whole-line comment markers for the line-oriented dialects
LINE_COMMENT_MARKERS = {
    Dialect.RAILS: "#",
    Dialect.DJANGO: "#",
    Dialect.PRISMA: "//",
}


def strip_sql_comments(content: str) -> str:
    """Remove ``--`` line comments and ``/* */`` block comments."""
    content = SQL_LINE_COMMENT.sub("", content)
    return SQL_BLOCK_COMMENT.sub("", content)


def blank_comment_lines(content: str, marker: str) -> str:
    """Replace lines whose first non-blank text is ``marker`` with empty lines."""
    lines = content.split("\n")
    return "\n".join(
        "" if line.lstrip().startswith(marker) else line
        for line in lines
    )


def normalize(content: str, dialect: Dialect) -> str:
    """Strip comments and noise for the given dialect.

    Args:
        content: Raw schema text
        dialect: Dialect the text will be scanned as

    Returns:
        Normalized text ready for the dialect's scanner
    """
    if dialect == Dialect.SQL:
        return strip_sql_comments(content)

    marker = LINE_COMMENT_MARKERS.get(dialect)
    if marker is None:
        return content
    return blank_comment_lines(content, marker)
