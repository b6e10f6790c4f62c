"""Client for the remote schema analysis service (Gemini generateContent)."""

import json
import logging
from typing import Any

import httpx

from schemaviz.analysis.base import AnalysisReport
from schemaviz.config import AnalysisConfig, load_config
from schemaviz.exceptions import AnalysisError
from schemaviz.utils.helpers import truncate_text

logger = logging.getLogger(__name__)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "potentialIssues": {"type": "ARRAY", "items": {"type": "STRING"}},
        "suggestions": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
}

PROMPT_TEMPLATE = (
    "Analyze the following database schema content "
    "(which may be SQL, Prisma, Rails, or Django):\n\n{content}"
)


class SchemaAnalyzer:
    """Sends raw schema text to the analysis service and parses the report."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Analysis settings (loaded from the environment if not given)
            client: Optional HTTP client, mainly for tests
        """
        self.config = config or load_config()
        self._client = client

    @property
    def endpoint(self) -> str:
        base_url = self.config.base_url.rstrip("/")
        return f"{base_url}/models/{self.config.model}:generateContent"

    def build_request(self, raw_content: str) -> dict[str, Any]:
        """Build the request body for some schema text.

        The text is truncated to ``max_content_chars`` first.
        """
        content = truncate_text(raw_content, self.config.max_content_chars)
        return {
            "systemInstruction": {"parts": [{"text": self.config.system_instruction}]},
            "contents": [
                {"role": "user", "parts": [{"text": PROMPT_TEMPLATE.format(content=content)}]}
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def analyze(self, raw_content: str) -> AnalysisReport:
        """Analyze schema text.

        Args:
            raw_content: The original schema text (``SchemaModel.raw_content``)

        Returns:
            AnalysisReport with every field defaulted when missing

        Raises:
            AnalysisError: On missing credentials, transport errors, HTTP
                error statuses or an unreadable response
        """
        if not self.config.has_api_key:
            logger.warning("API key is missing, analysis is unavailable")
            raise AnalysisError("API key is missing")

        body = self.build_request(raw_content)
        headers = {"x-goog-api-key": self.config.api_key}

        try:
            if self._client is not None:
                response = self._client.post(self.endpoint, json=body, headers=headers)
            else:
                with httpx.Client(timeout=self.config.timeout) as client:
                    response = client.post(self.endpoint, json=body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Analysis request failed with status %s", e.response.status_code)
            raise AnalysisError(
                f"Analysis service returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Analysis request failed: %s", e)
            raise AnalysisError(f"Analysis request failed: {e}") from e

        text = self.extract_text(response)
        if not text:
            raise AnalysisError("No response from analysis service")

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse analysis JSON: %s", e)
            raise AnalysisError("Failed to parse analysis results") from e

        return AnalysisReport.from_payload(payload)

    @staticmethod
    def extract_text(response: httpx.Response) -> str:
        """Concatenate the text parts of the first candidate.

        Returns an empty string when the envelope has no text.
        """
        try:
            data = response.json()
        except ValueError:
            return ""

        if not isinstance(data, dict):
            return ""

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            return ""

        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""

        return "".join(
            part["text"] for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
