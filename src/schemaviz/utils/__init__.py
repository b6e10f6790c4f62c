"""Utility functions for SchemaViz."""

from schemaviz.utils.helpers import (
    file_suffix,
    truncate_text,
    configure_logging,
)

__all__ = [
    "file_suffix",
    "truncate_text",
    "configure_logging",
]
