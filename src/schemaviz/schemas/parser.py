"""Main schema parser module.

Provides a unified interface to parse schemas from any supported dialect:
detection, normalization, scanning, inference and assembly.
"""

import logging
from pathlib import Path

from schemaviz.schemas.assembler import assemble_model, unique_tables
from schemaviz.schemas.base import Dialect, ScanResult, SchemaModel
from schemaviz.schemas.detector import detect_dialect
from schemaviz.schemas.inference import RelationshipInferencer
from schemaviz.schemas.normalizer import normalize
from schemaviz.schemas.registry import ScannerRegistry

logger = logging.getLogger(__name__)


class SchemaParser:
    """Unified schema parser supporting multiple dialects."""

    def __init__(
        self,
        content: str,
        dialect: Dialect | str | None = None,
        filename: str | None = None,
    ):
        """Initialize parser with content and dialect.

        Args:
            content: Schema content as string
            dialect: Optional explicit dialect (detected when not given)
            filename: Optional filename hint used for detection
        """
        if isinstance(dialect, str):
            dialect = Dialect(dialect.lower())

        self.content = content
        self.filename = filename or ""
        self.dialect = dialect or detect_dialect(content, self.filename)
        self._registry = ScannerRegistry()
        self._inferencer = RelationshipInferencer()

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        dialect: Dialect | str | None = None,
    ) -> "SchemaParser":
        """Create parser from a file.

        Args:
            path: Path to schema file
            dialect: Optional explicit dialect (auto-detected if not provided)

        Returns:
            Initialized SchemaParser
        """
        path = Path(path)
        content = path.read_text()
        return cls(content, dialect, path.name)

    def scan(self) -> ScanResult:
        """Run only the normalizer and the dialect's structural scanner.

        Returns:
            Tables and explicit relationships
        """
        scanner = self._registry.create(self.dialect)
        if scanner is None:
            raise ValueError(f"Unsupported dialect: {self.dialect}")
        return scanner.scan(normalize(self.content, self.dialect))

    def parse(self) -> SchemaModel:
        """Parse the content into a SchemaModel.

        Returns:
            Assembled SchemaModel
        """
        result = self.scan()
        # Inference only sees the declarations that survive assembly
        result.tables = unique_tables(result.tables)
        inferred = self._inferencer.infer(self.dialect, result.tables, result.relationships)
        model = assemble_model(result, inferred, self.content)

        logger.debug(
            "Parsed %s schema: %d table(s), %d explicit and %d inferred relationship(s)",
            self.dialect.value,
            len(model.tables),
            len(result.relationships),
            len(inferred),
        )
        return model

    def list_tables(self) -> list[str]:
        """List table ids found in the content."""
        return [t.id for t in self.parse().tables]


def parse_schema(content: str, filename: str | None = "") -> SchemaModel:
    """Parse schema text into a SchemaModel.

    Never raises for malformed or empty input; at worst the model has no
    tables and no relationships.

    Args:
        content: Schema content
        filename: Optional filename hint for dialect detection

    Returns:
        Parsed SchemaModel
    """
    return SchemaParser(content, filename=filename).parse()


def parse_schema_file(
    path: Path | str,
    dialect: Dialect | str | None = None,
) -> SchemaModel:
    """Convenience function to parse a schema file.

    Args:
        path: Path to schema file
        dialect: Optional explicit dialect (auto-detected if not provided)

    Returns:
        Parsed SchemaModel
    """
    parser = SchemaParser.from_file(path, dialect)
    return parser.parse()
