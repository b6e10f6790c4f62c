"""Exceptions raised by SchemaViz.

Parsing never raises for malformed input; these cover configuration and
the remote analysis service.
"""


class SchemaVizError(Exception):
    """Base class for SchemaViz errors."""


class ConfigError(SchemaVizError, ValueError):
    """Invalid configuration file or values."""


class AnalysisError(SchemaVizError):
    """The analysis service could not produce a report."""


class AnalysisInProgressError(AnalysisError):
    """An analysis was triggered while another one is still running."""
