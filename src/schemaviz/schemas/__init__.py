"""Schema parsing module.

Turns Rails ``schema.rb``, SQL DDL, Prisma schemas and Django models into
one normalized graph of tables, columns and relationships.

Example usage:
    from schemaviz.schemas import parse_schema, parse_schema_file

    model = parse_schema(open("schema.prisma").read(), "schema.prisma")
    model = parse_schema_file("db/schema.rb")

    for relationship in model.relationships:
        print(relationship.source, "->", relationship.target)
"""

from schemaviz.schemas.base import (
    Column,
    Dialect,
    Relationship,
    ScanResult,
    SchemaModel,
    SchemaScanner,
    Table,
)
from schemaviz.schemas.detector import detect_dialect, detect_dialect_from_path
from schemaviz.schemas.parser import SchemaParser, parse_schema, parse_schema_file

__all__ = [
    "Column",
    "Dialect",
    "Relationship",
    "ScanResult",
    "SchemaModel",
    "SchemaScanner",
    "Table",
    "detect_dialect",
    "detect_dialect_from_path",
    "SchemaParser",
    "parse_schema",
    "parse_schema_file",
]
