"""Base classes for schema representation.

Provides the normalized graph model that every dialect scanner
(Rails, SQL, Prisma, Django) is converted to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Dialect(str, Enum):
    """Supported schema declaration dialects."""

    RAILS = "rails"
    SQL = "sql"
    PRISMA = "prisma"
    DJANGO = "django"


class Column(BaseModel):
    """A single column of a table.

    The type token is kept in the dialect's own vocabulary and ``details``
    is an opaque passthrough of whatever followed the declaration.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name")
    type: str = Field(..., description="Raw type token from the source")
    details: str | None = Field(default=None, description="Constraints, attributes or arguments")


class Table(BaseModel):
    """A table (model, class) with its columns in declaration order.

    Scanners build a Table only once its declaration is complete.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Table identifier")
    columns: list[Column] = Field(default_factory=list, description="Columns in declaration order")

    def get_column(self, name: str) -> Column | None:
        """Get a column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]


class Relationship(BaseModel):
    """A directed edge from the referencing table to the referenced one."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Referencing table id")
    target: str = Field(..., description="Referenced table id")
    column: str | None = Field(default=None, description="Column on the source side, when known")

    @property
    def key(self) -> tuple[str, str, str | None]:
        """Deduplication key."""
        return (self.source, self.target, self.column)


class SchemaModel(BaseModel):
    """The assembled, dialect-independent schema graph.

    This is the only structure handed to downstream consumers: renderers map
    ``tables`` to nodes and ``relationships`` to edges, the analysis client
    reads ``raw_content``.
    """

    model_config = ConfigDict(populate_by_name=True)

    tables: list[Table] = Field(default_factory=list, description="Tables in first-seen order")
    relationships: list[Relationship] = Field(
        default_factory=list,
        description="Explicit relationships followed by inferred ones",
    )
    raw_content: str = Field(default="", alias="rawContent", description="Original input text")

    def table_ids(self) -> list[str]:
        return [t.id for t in self.tables]

    def get_table(self, table_id: str) -> Table | None:
        """Get a table by id."""
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def dangling_relationships(self) -> list[Relationship]:
        """Relationships with an endpoint that is not a parsed table."""
        known = set(self.table_ids())
        return [
            r for r in self.relationships
            if r.source not in known or r.target not in known
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the external field names (``rawContent``)."""
        return self.model_dump(by_alias=True)


@dataclass
class ScanResult:
    """Output of a single structural scan."""

    tables: list[Table] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)

    @property
    def table_count(self) -> int:
        return len(self.tables)


class SchemaScanner(ABC):
    """Abstract base class for the per-dialect structural scanners.

    Scanners are total: malformed lines are ignored and an unterminated
    block keeps whatever columns were seen before the end of input.
    """

    dialect: Dialect

    @abstractmethod
    def scan(self, content: str) -> ScanResult:
        """Scan normalized content into tables and explicit relationships."""
        pass
