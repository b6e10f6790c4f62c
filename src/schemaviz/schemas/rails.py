"""Rails schema.rb scanner.

Recognizes ``create_table`` blocks, ``t.<type> "<name>"`` column lines and
``add_foreign_key`` statements. Blocks are not nesting-aware: the first bare
``end`` after ``create_table`` closes the table.
"""

import logging
import re

from schemaviz.schemas.base import (
    Column,
    Dialect,
    Relationship,
    ScanResult,
    SchemaScanner,
    Table,
)

logger = logging.getLogger(__name__)


class RailsScanner(SchemaScanner):
    """Scanner for Rails ``schema.rb`` files."""

    dialect = Dialect.RAILS

    CREATE_TABLE = re.compile(r"""create_table\s+["'](\w+)["']""")
    COLUMN = re.compile(r"""t\.(\w+)\s+["'](\w+)["'](.*)""")
    FOREIGN_KEY = re.compile(r"""add_foreign_key\s+["'](\w+)["'],\s+["'](\w+)["'](.*)""")
    FOREIGN_KEY_COLUMN = re.compile(r"""column:\s*["'](\w+)["']""")
    BLOCK_END = "end"

    def scan(self, content: str) -> ScanResult:
        """Scan schema.rb content.

        Args:
            content: Normalized schema.rb text

        Returns:
            Tables and the relationships declared with ``add_foreign_key``
        """
        result = ScanResult()
        table_id: str | None = None
        columns: list[Column] = []

        for line in content.split("\n"):
            stripped = line.strip()

            table_match = self.CREATE_TABLE.search(stripped)
            if table_match:
                if table_id is not None:
                    result.tables.append(Table(id=table_id, columns=columns))
                table_id, columns = table_match.group(1), []
                continue

            if stripped == self.BLOCK_END and table_id is not None:
                result.tables.append(Table(id=table_id, columns=columns))
                table_id = None
                continue

            if table_id is not None:
                column = self._parse_column(stripped)
                if column:
                    columns.append(column)

            relationship = self._parse_foreign_key(stripped)
            if relationship:
                result.relationships.append(relationship)

        if table_id is not None:
            logger.debug("Table '%s' was not closed before end of input", table_id)
            result.tables.append(Table(id=table_id, columns=columns))

        return result

    def _parse_column(self, line: str) -> Column | None:
        """Parse a ``t.<type> "<name>", options`` line.

        Args:
            line: Stripped source line

        Returns:
            Column or None if the line is not a column declaration
        """
        match = self.COLUMN.search(line)
        if not match:
            return None

        column_type, name, details = match.groups()
        return Column(name=name, type=column_type, details=details.strip() or None)

    def _parse_foreign_key(self, line: str) -> Relationship | None:
        """Parse an ``add_foreign_key "from", "to"`` line.

        The ``column:`` option, when given, names the referencing column.
        """
        match = self.FOREIGN_KEY.search(line)
        if not match:
            return None

        source, target, options = match.groups()
        column_match = self.FOREIGN_KEY_COLUMN.search(options)
        return Relationship(
            source=source,
            target=target,
            column=column_match.group(1) if column_match else None,
        )
