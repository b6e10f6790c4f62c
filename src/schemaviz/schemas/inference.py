"""Relationship inference from naming conventions.

Runs once after structural scanning and only ever adds edges:

- Rails and SQL: ``<singular>_id`` columns point at ``<singular>s``,
  ``<singular>es`` or ``<singular>``, whichever table exists first.
- Prisma: a field typed with another model's name and carrying
  ``@relation`` points at that model.
- Django: relation fields are already emitted by the scanner.
"""

import logging
import re

from schemaviz.schemas.base import Dialect, Relationship, Table

logger = logging.getLogger(__name__)


class RelationshipInferencer:
    """Derives relationships that the source only implies."""

    FOREIGN_KEY_SUFFIX = "_id"
    PLURAL_SUFFIXES = ("s", "es", "")
    RELATION_ATTRIBUTE = "@relation"
    TYPE_MODIFIERS = re.compile(r"[\[\]?]")

    def infer(
        self,
        dialect: Dialect,
        tables: list[Table],
        relationships: list[Relationship],
    ) -> list[Relationship]:
        """Infer relationships for a scanned schema.

        Args:
            dialect: Dialect the tables were scanned from
            tables: Scanned tables
            relationships: Explicit relationships found by the scanner

        Returns:
            Newly inferred relationships only
        """
        if dialect in (Dialect.RAILS, Dialect.SQL):
            inferred = self.infer_from_foreign_key_names(tables, relationships)
        elif dialect == Dialect.PRISMA:
            inferred = self.infer_from_relation_fields(tables)
        else:
            inferred = []

        logger.debug("Inferred %d relationship(s) for %s", len(inferred), dialect.value)
        return inferred

    def candidate_targets(self, column_name: str) -> list[str]:
        """Candidate table ids for a ``*_id`` column, in priority order.

        Pluralization is naive: no irregular plurals.
        """
        singular = column_name[: -len(self.FOREIGN_KEY_SUFFIX)]
        return [singular + suffix for suffix in self.PLURAL_SUFFIXES]

    def infer_from_foreign_key_names(
        self,
        tables: list[Table],
        relationships: list[Relationship],
    ) -> list[Relationship]:
        """Infer edges from ``_id`` suffixed columns.

        An edge is added only when no relationship between the same
        (source, target) pair exists yet, whatever its column.
        """
        table_ids = {t.id for t in tables}
        linked_pairs = {(r.source, r.target) for r in relationships}
        inferred: list[Relationship] = []

        for table in tables:
            for column in table.columns:
                if not column.name.endswith(self.FOREIGN_KEY_SUFFIX):
                    continue

                target = next(
                    (c for c in self.candidate_targets(column.name) if c in table_ids),
                    None,
                )
                if target is None or (table.id, target) in linked_pairs:
                    continue

                inferred.append(Relationship(source=table.id, target=target, column=column.name))
                linked_pairs.add((table.id, target))

        return inferred

    def infer_from_relation_fields(self, tables: list[Table]) -> list[Relationship]:
        """Infer edges from Prisma relation fields.

        The column is the navigation field, not the scalar foreign key
        listed inside ``@relation(fields: [...])``. Relations with no
        ``@relation`` on either side yield nothing.
        """
        model_names = {t.id for t in tables}
        inferred: list[Relationship] = []

        for table in tables:
            for column in table.columns:
                target = self.TYPE_MODIFIERS.sub("", column.type)
                if target not in model_names:
                    continue
                if self.RELATION_ATTRIBUTE not in (column.details or ""):
                    continue

                inferred.append(Relationship(source=table.id, target=target, column=column.name))

        return inferred
