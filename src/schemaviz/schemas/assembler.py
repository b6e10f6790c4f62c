"""Assembly of scanner output and inferred edges into a SchemaModel."""

import logging

from schemaviz.schemas.base import Relationship, ScanResult, SchemaModel, Table

logger = logging.getLogger(__name__)


def unique_tables(tables: list[Table]) -> list[Table]:
    """Keep the first declaration of each table id, in first-seen order."""
    seen: set[str] = set()
    result = []

    for table in tables:
        if table.id in seen:
            logger.debug("Ignoring repeated declaration of table '%s'", table.id)
            continue
        seen.add(table.id)
        result.append(table)

    return result


def unique_relationships(relationships: list[Relationship]) -> list[Relationship]:
    """Drop exact (source, target, column) duplicates, keeping the first.

    An edge without a column and one with a column are distinct.
    """
    seen: set[tuple[str, str, str | None]] = set()
    result = []

    for relationship in relationships:
        if relationship.key in seen:
            continue
        seen.add(relationship.key)
        result.append(relationship)

    return result


def assemble_model(
    result: ScanResult,
    inferred: list[Relationship],
    raw_content: str,
) -> SchemaModel:
    """Build the final SchemaModel.

    Args:
        result: Tables and explicit relationships from a scanner
        inferred: Relationships from the inferencer
        raw_content: The original, unmodified input text

    Returns:
        Assembled SchemaModel with explicit edges before inferred ones
    """
    return SchemaModel(
        tables=unique_tables(result.tables),
        relationships=unique_relationships(result.relationships + inferred),
        raw_content=raw_content,
    )
