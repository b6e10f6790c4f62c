"""
SchemaViz - turn database schema definitions into a relationship graph.

Reads Rails schema.rb files, SQL DDL, Prisma schemas and Django models and
produces one normalized model of tables, columns and relationships, ready for
diagramming and for analysis by a language model.
"""

__version__ = "0.1.0"

from schemaviz.schemas.base import Column, Dialect, Relationship, SchemaModel, Table
from schemaviz.schemas.detector import detect_dialect
from schemaviz.schemas.parser import SchemaParser, parse_schema, parse_schema_file

__all__ = [
    "Column",
    "Dialect",
    "Relationship",
    "SchemaModel",
    "Table",
    "detect_dialect",
    "SchemaParser",
    "parse_schema",
    "parse_schema_file",
]
