"""Scanner Registry for managing the per-dialect scanners."""

from typing import Type

from schemaviz.schemas.base import Dialect, SchemaScanner


class ScannerRegistry:
    """Registry for structural scanners.

    Maps each dialect to the scanner class that understands it and
    provides factory methods for creating scanner instances.
    """

    def __init__(self):
        self._scanners: dict[Dialect, Type[SchemaScanner]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in scanners."""
        from schemaviz.schemas.rails import RailsScanner
        from schemaviz.schemas.sql import SqlScanner
        from schemaviz.schemas.prisma import PrismaScanner
        from schemaviz.schemas.django import DjangoScanner

        self.register(Dialect.RAILS, RailsScanner)
        self.register(Dialect.SQL, SqlScanner)
        self.register(Dialect.PRISMA, PrismaScanner)
        self.register(Dialect.DJANGO, DjangoScanner)

    def register(self, dialect: Dialect, scanner_class: Type[SchemaScanner]) -> None:
        """Register a scanner for a dialect.

        Args:
            dialect: The dialect this scanner understands
            scanner_class: The scanner class to register
        """
        self._scanners[dialect] = scanner_class

    def get(self, dialect: Dialect | str) -> Type[SchemaScanner] | None:
        """Get a scanner class by dialect.

        Args:
            dialect: The dialect (can be string or enum)

        Returns:
            The scanner class or None if not found
        """
        if isinstance(dialect, str):
            try:
                dialect = Dialect(dialect.lower())
            except ValueError:
                return None

        return self._scanners.get(dialect)

    def create(self, dialect: Dialect | str) -> SchemaScanner | None:
        """Create a scanner instance.

        Args:
            dialect: The dialect to scan

        Returns:
            A scanner instance or None if the dialect is not registered
        """
        scanner_class = self.get(dialect)
        if scanner_class is None:
            return None
        return scanner_class()

    def list_dialects(self) -> list[Dialect]:
        """List all registered dialects."""
        return list(self._scanners.keys())

    def __contains__(self, dialect: Dialect | str) -> bool:
        """Check if a dialect is registered."""
        return self.get(dialect) is not None
