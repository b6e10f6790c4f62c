"""Configuration for the analysis client.

Settings come from an optional YAML file, overlaid with environment
variables. Example file::

    analysis:
      model: gemini-2.5-flash
      timeout: 30
      max_content_chars: 50000
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from schemaviz.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT,
    MAX_CONTENT_CHARS,
    SYSTEM_INSTRUCTION,
)
from schemaviz.exceptions import ConfigError

# Checked in order, first non-empty value wins
API_KEY_ENV_VARS = ("SCHEMAVIZ_API_KEY", "GEMINI_API_KEY", "API_KEY")
MODEL_ENV_VAR = "SCHEMAVIZ_MODEL"
BASE_URL_ENV_VAR = "SCHEMAVIZ_BASE_URL"


class AnalysisConfig(BaseModel):
    """Settings for the schema analysis service."""

    api_key: str = Field(default="", description="API key for the analysis service")
    model: str = Field(default=DEFAULT_MODEL, description="Model name")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Service base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    max_content_chars: int = Field(
        default=MAX_CONTENT_CHARS,
        ge=1,
        description="Schema text is truncated to this many characters",
    )
    system_instruction: str = Field(default=SYSTEM_INSTRUCTION, description="System prompt")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


class ConfigLoader:
    """Loads AnalysisConfig from YAML files and the environment."""

    def __init__(self, environ: dict[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def load_file(self, path: Path | str) -> AnalysisConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded AnalysisConfig with environment overrides applied
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        return self.load_from_string(path.read_text())

    def load_from_string(self, content: str) -> AnalysisConfig:
        """Load configuration from a YAML string."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config must be a YAML mapping")

        return self._build(data.get("analysis", data))

    def load_defaults(self) -> AnalysisConfig:
        """Configuration from the environment only."""
        return self._build({})

    def _build(self, data: Any) -> AnalysisConfig:
        if not isinstance(data, dict):
            raise ConfigError("'analysis' section must be a mapping")

        values = {**data, **self._environment_overrides()}
        try:
            return AnalysisConfig(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def _environment_overrides(self) -> dict[str, str]:
        overrides = {}

        for name in API_KEY_ENV_VARS:
            value = self._environ.get(name)
            if value:
                overrides["api_key"] = value
                break

        if self._environ.get(MODEL_ENV_VAR):
            overrides["model"] = self._environ[MODEL_ENV_VAR]
        if self._environ.get(BASE_URL_ENV_VAR):
            overrides["base_url"] = self._environ[BASE_URL_ENV_VAR]

        return overrides


def load_config(path: Path | str | None = None) -> AnalysisConfig:
    """Convenience function to load the analysis configuration.

    Args:
        path: Optional YAML config file

    Returns:
        Loaded AnalysisConfig
    """
    loader = ConfigLoader()
    if path is None:
        return loader.load_defaults()
    return loader.load_file(path)
