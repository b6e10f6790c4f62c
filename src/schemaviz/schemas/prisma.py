"""Prisma schema scanner.

Parses ``model Name { ... }`` blocks from ``schema.prisma`` files. Relations
are not emitted here: a field only becomes an edge once every model name is
known, which is the inferencer's job.
"""

import logging
import re

from schemaviz.schemas.base import (
    Column,
    Dialect,
    ScanResult,
    SchemaScanner,
    Table,
)

logger = logging.getLogger(__name__)


class PrismaScanner(SchemaScanner):
    """Scanner for Prisma schema files."""

    dialect = Dialect.PRISMA

    MODEL_START = re.compile(r"^model\s+(\w+)\s*\{")
    BLOCK_END = "}"
    # Lines inside a model that are not fields
    SKIP_PREFIXES = ("@@", "//")

    def scan(self, content: str) -> ScanResult:
        """Scan Prisma schema content.

        Args:
            content: Normalized Prisma schema text

        Returns:
            Models as tables; no explicit relationships
        """
        result = ScanResult()
        model_name: str | None = None
        columns: list[Column] = []

        for line in content.split("\n"):
            stripped = line.strip()

            model_match = self.MODEL_START.match(stripped)
            if model_match:
                if model_name is not None:
                    result.tables.append(Table(id=model_name, columns=columns))
                model_name, columns = model_match.group(1), []
                continue

            if model_name is None:
                continue

            if stripped == self.BLOCK_END:
                result.tables.append(Table(id=model_name, columns=columns))
                model_name = None
                continue

            if not stripped or stripped.startswith(self.SKIP_PREFIXES):
                continue

            column = self._parse_field(stripped)
            if column:
                columns.append(column)

        if model_name is not None:
            logger.debug("Model '%s' was not closed before end of input", model_name)
            result.tables.append(Table(id=model_name, columns=columns))

        return result

    def _parse_field(self, line: str) -> Column | None:
        """Parse a field line such as ``author User @relation(fields: [authorId])``.

        The first token is the name, the second the type (with ``[]``/``?``
        markers kept) and the rest is stored verbatim as details.
        """
        parts = line.split()
        if len(parts) < 2:
            return None

        name, field_type, *attributes = parts
        return Column(name=name, type=field_type, details=" ".join(attributes) or None)
