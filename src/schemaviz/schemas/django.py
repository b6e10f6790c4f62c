"""Django models scanner.

Parses ``class Name(Base):`` headers and ``field = models.X(...)``
assignments from ``models.py`` files. Indentation is not tracked, so a class
keeps collecting fields until the next class header or the end of input.
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


class DjangoScanner(SchemaScanner):
    """Scanner for Django model definitions."""

    dialect = Dialect.DJANGO

    CLASS_START = re.compile(r"^class\s+(\w+)\(.*\):")
    FIELD = re.compile(r"^(\w+)\s*=\s*(models\.\w+|[a-zA-Z0-9_]+)\((.*)\)")
    # First positional argument (or to=) of a relation field
    RELATION_TARGET = re.compile(r"""^\s*(?:to\s*=\s*)?["']?((?:\w+\.)*\w+)["']?""")

    REFERENCE_FIELDS = ("ForeignKey", "OneToOneField", "ManyToManyField")
    SELF_REFERENCE = "self"

    def scan(self, content: str) -> ScanResult:
        """Scan Django models source.

        Args:
            content: Normalized models.py text

        Returns:
            Model classes as tables and the relation fields as relationships
        """
        result = ScanResult()
        class_name: str | None = None
        columns: list[Column] = []

        for line in content.split("\n"):
            stripped = line.strip()

            class_match = self.CLASS_START.match(stripped)
            if class_match:
                if class_name is not None:
                    result.tables.append(Table(id=class_name, columns=columns))
                class_name, columns = class_match.group(1), []
                continue

            if class_name is None or "=" not in stripped:
                continue

            field_match = self.FIELD.match(stripped)
            if not field_match:
                continue

            name, field_type, args = field_match.groups()
            columns.append(Column(name=name, type=field_type, details=args or None))

            relationship = self._parse_relation(class_name, name, field_type, args)
            if relationship:
                result.relationships.append(relationship)

        if class_name is not None:
            result.tables.append(Table(id=class_name, columns=columns))

        return result

    def _parse_relation(
        self,
        source: str,
        field_name: str,
        field_type: str,
        args: str,
    ) -> Relationship | None:
        """Build a relationship for ForeignKey, OneToOneField and ManyToManyField.

        Args:
            source: Owning model name
            field_name: Name of the relation field
            field_type: Call name, e.g. ``models.ForeignKey``
            args: Raw call arguments

        Returns:
            Relationship to the referenced model, or None
        """
        if not any(kind in field_type for kind in self.REFERENCE_FIELDS):
            return None

        target_match = self.RELATION_TARGET.match(args)
        if not target_match:
            logger.debug("Could not resolve target of %s.%s", source, field_name)
            return None

        # "app_label.Model" references the model by its last segment
        target = target_match.group(1).split(".")[-1]
        if target == self.SELF_REFERENCE:
            return None

        return Relationship(source=source, target=target, column=field_name)
