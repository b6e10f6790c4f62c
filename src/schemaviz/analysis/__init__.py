"""Schema analysis through a remote language model service."""

from schemaviz.analysis.base import AnalysisReport, AnalysisStatus
from schemaviz.analysis.client import SchemaAnalyzer
from schemaviz.analysis.session import AnalysisSession

__all__ = [
    "AnalysisReport",
    "AnalysisStatus",
    "SchemaAnalyzer",
    "AnalysisSession",
]
