"""Analysis session: one outstanding request and its observable state."""

import logging

from schemaviz.analysis.base import AnalysisReport, AnalysisStatus
from schemaviz.analysis.client import SchemaAnalyzer
from schemaviz.exceptions import AnalysisError, AnalysisInProgressError

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Tracks a single analysis request through idle, loading and settled.

    Failures of the service are recorded as the ERROR state rather than
    raised, so the caller can show them and retry.
    """

    def __init__(self, analyzer: SchemaAnalyzer):
        self.analyzer = analyzer
        self.status = AnalysisStatus.IDLE
        self.report: AnalysisReport | None = None
        self.error: str | None = None

    @property
    def is_settled(self) -> bool:
        return self.status in (AnalysisStatus.SUCCESS, AnalysisStatus.ERROR)

    def run(self, raw_content: str) -> AnalysisStatus:
        """Run an analysis and record its outcome.

        Args:
            raw_content: Schema text to analyze

        Returns:
            The settled status (SUCCESS or ERROR)

        Raises:
            AnalysisInProgressError: If a request is already in flight
        """
        if self.status == AnalysisStatus.LOADING:
            raise AnalysisInProgressError("An analysis is already running")

        self.status = AnalysisStatus.LOADING
        self.report = None
        self.error = None

        try:
            self.report = self.analyzer.analyze(raw_content)
        except AnalysisError as e:
            logger.error("Analysis failed: %s", e)
            self.error = str(e)
            self.status = AnalysisStatus.ERROR
        else:
            self.status = AnalysisStatus.SUCCESS

        return self.status

    def reset(self) -> None:
        """Return to the idle state, e.g. after a new schema is loaded."""
        self.status = AnalysisStatus.IDLE
        self.report = None
        self.error = None
