"""Base classes for schema analysis reports."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from schemaviz.constants import DEFAULT_SUMMARY


class AnalysisStatus(str, Enum):
    """Lifecycle of one analysis request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class AnalysisReport(BaseModel):
    """Structured findings returned by the analysis service."""

    summary: str = Field(default=DEFAULT_SUMMARY, description="Summary of the domain model")
    potential_issues: list[str] = Field(default_factory=list, description="Detected issues")
    suggestions: list[str] = Field(default_factory=list, description="Suggested improvements")

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalysisReport":
        """Build a report from a decoded response, defaulting each field.

        Missing or malformed fields never raise: a non-string summary
        becomes the default summary, non-list fields become empty lists and
        non-string list items are dropped.

        Args:
            payload: Decoded JSON from the service

        Returns:
            AnalysisReport
        """
        if not isinstance(payload, dict):
            payload = {}

        summary = payload.get("summary")
        return cls(
            summary=summary if isinstance(summary, str) and summary else DEFAULT_SUMMARY,
            potential_issues=_string_list(payload.get("potentialIssues")),
            suggestions=_string_list(payload.get("suggestions")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "potentialIssues": self.potential_issues,
            "suggestions": self.suggestions,
        }


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
