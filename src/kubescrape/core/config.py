"""Configuration management for kubescrape."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from kubescrape.core.exceptions import ConfigurationError
from kubescrape.core.models import RestConfig
from kubescrape.core.options import Options


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"
    output: str = "stderr"  # keeps stdout for command output


class KubescrapeConfig(BaseModel):
    """Main kubescrape configuration."""

    base_config_path: str | None = None  # connection descriptor YAML
    kubelet: Options = Field(default_factory=Options)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: str | Path) -> "KubescrapeConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            KubescrapeConfig instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        config_path = Path(path).expanduser()

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        try:
            return cls(**(data or {}))
        except Exception as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def load_base_config(self) -> RestConfig:
        """Load the connection descriptor referenced by base_config_path.

        Raises:
            ConfigurationError: If no path is configured or the file is invalid
        """
        if not self.base_config_path:
            raise ConfigurationError("No base connection descriptor configured")
        return RestConfig.from_file(self.base_config_path)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
