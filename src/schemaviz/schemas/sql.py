"""SQL DDL scanner.

Scans CREATE TABLE and ALTER TABLE ... FOREIGN KEY statements from SQL DDL.
Works on common dialects (PostgreSQL, MySQL, SQLite, SQL Server) without
parsing them: statements are split on ``;`` and each is matched against a
handful of patterns.
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

# Optionally quoted identifier: "name", `name`, [name] or name
_IDENT = r'["`\[]?(\w+)["`\]]?'
# Optional schema qualifier: schema.
_SCHEMA = r'(?:["`\[]?\w+["`\]]?\.)?'


class SqlScanner(SchemaScanner):
    """Scanner for SQL DDL statements."""

    dialect = Dialect.SQL

    STATEMENT_TERMINATOR = ";"

    CREATE_TABLE = re.compile(
        r"CREATE\s+(?:TEMP(?:ORARY)?\s+)?TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?"
        + _SCHEMA + _IDENT,
        re.IGNORECASE,
    )

    # Table-level clause: [CONSTRAINT name] FOREIGN KEY (col) REFERENCES target
    INLINE_FOREIGN_KEY = re.compile(
        r"FOREIGN\s+KEY\s*\(\s*" + _IDENT + r"\s*\)\s*REFERENCES\s+" + _SCHEMA + _IDENT,
        re.IGNORECASE,
    )

    # Column-level: col TYPE ... REFERENCES target
    COLUMN_REFERENCE = re.compile(r"\bREFERENCES\s+" + _SCHEMA + _IDENT, re.IGNORECASE)

    ALTER_TABLE_FOREIGN_KEY = re.compile(
        r"ALTER\s+TABLE\s+(?:ONLY\s+)?" + _SCHEMA + _IDENT
        + r".*?ADD\s+(?:CONSTRAINT\s+\S+\s+)?FOREIGN\s+KEY\s*\(\s*" + _IDENT
        + r"\s*\)\s*REFERENCES\s+" + _SCHEMA + _IDENT,
        re.IGNORECASE | re.DOTALL,
    )

    # Column: name TYPE [rest...]
    COLUMN = re.compile(r"^\s*" + _IDENT + r"\s+([A-Z0-9_]+)(.*)$", re.IGNORECASE | re.DOTALL)

    # Clauses that describe the table rather than a column. UNIQUE, CHECK,
    # INDEX and KEY only count when a column list follows, so columns named
    # "key" or "index" are kept; a type argument such as (64) is numeric.
    TABLE_CONSTRAINT = re.compile(
        r"^(?:PRIMARY\s+KEY|FOREIGN\s+KEY|CONSTRAINT)\b"
        r"|^(?:UNIQUE|CHECK)\s*\("
        r"|^(?:(?:UNIQUE|FULLTEXT|SPATIAL)\s+)?(?:INDEX|KEY)\b\s*(?:\w+\s*)?\(\s*[^\d\s)']",
        re.IGNORECASE,
    )

    def scan(self, content: str) -> ScanResult:
        """Scan normalized (comment-free) DDL.

        Args:
            content: SQL DDL text with comments already removed

        Returns:
            Tables and the relationships declared by foreign keys
        """
        result = ScanResult()

        for statement in content.split(self.STATEMENT_TERMINATOR):
            statement = statement.strip()
            if not statement:
                continue

            table_match = self.CREATE_TABLE.search(statement)
            if table_match:
                table_id = table_match.group(1)
                columns = self._scan_body(statement, table_id, result.relationships)
                result.tables.append(Table(id=table_id, columns=columns))

            alter_match = self.ALTER_TABLE_FOREIGN_KEY.search(statement)
            if alter_match:
                source, column, target = alter_match.groups()
                result.relationships.append(
                    Relationship(source=source, target=target, column=column)
                )

        return result

    def _scan_body(
        self,
        statement: str,
        table_id: str,
        relationships: list[Relationship],
    ) -> list[Column]:
        """Scan the parenthesized body of a CREATE TABLE statement.

        Args:
            statement: Full CREATE TABLE statement
            table_id: Id of the table being declared
            relationships: List receiving foreign keys found in the body

        Returns:
            Columns in declaration order
        """
        start = statement.find("(")
        end = statement.rfind(")")
        if start == -1 or end == -1 or end < start:
            logger.debug("CREATE TABLE %s has no column body", table_id)
            return []

        body = statement[start + 1:end]
        columns: list[Column] = []

        for clause in self._split_clauses(body):
            clause = clause.strip()
            if not clause:
                continue

            fk_match = self.INLINE_FOREIGN_KEY.search(clause)
            if fk_match:
                column, target = fk_match.groups()
                relationships.append(Relationship(source=table_id, target=target, column=column))
                continue

            if self.TABLE_CONSTRAINT.match(clause):
                continue

            column = self._parse_column(clause)
            if column is None:
                continue

            columns.append(column)

            ref_match = self.COLUMN_REFERENCE.search(column.details or "")
            if ref_match:
                relationships.append(
                    Relationship(source=table_id, target=ref_match.group(1), column=column.name)
                )

        return columns

    def _split_clauses(self, body: str) -> list[str]:
        """Split a table body on commas outside parentheses and quoted strings.

        Args:
            body: Content between the outer parentheses

        Returns:
            List of clause strings
        """
        parts = []
        current = []
        depth = 0
        in_string = False

        for char in body:
            if char == "'":
                in_string = not in_string
                current.append(char)
            elif in_string:
                current.append(char)
            elif char == "(":
                depth += 1
                current.append(char)
            elif char == ")":
                depth -= 1
                current.append(char)
            elif char == "," and depth <= 0:
                parts.append("".join(current))
                current = []
            else:
                current.append(char)

        if current:
            parts.append("".join(current))

        return parts

    def _parse_column(self, clause: str) -> Column | None:
        """Parse a single column definition.

        Args:
            clause: Column definition, e.g. ``email VARCHAR(255) NOT NULL``

        Returns:
            Column or None if not parseable
        """
        match = self.COLUMN.match(clause)
        if not match:
            return None

        name, column_type, details = match.groups()
        return Column(name=name, type=column_type, details=details.strip() or None)
