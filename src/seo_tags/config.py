from dotenv import load_dotenv
from dataclasses import dataclass
from pathlib import Path
import json
import logging
import os

load_dotenv()  # Loads variables from .env file

logger = logging.getLogger(__name__)


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    USER_AGENT = os.getenv("USER_AGENT", "SEO-Tags-Analyzer/1.0")
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))
    MAX_RETRIES = int(os.getenv("MAX_RETRIES", "1"))  # 1 = single attempt
    HTML_PARSER = os.getenv("HTML_PARSER", "html.parser")
    MAX_WORKERS = int(os.getenv("MAX_WORKERS", "4"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Request log backend configuration
    REQUEST_LOG_BACKEND = os.getenv("REQUEST_LOG_BACKEND", "sqlite")  # 'memory', 'sqlite' or 'none'
    REQUEST_LOG_URL = os.getenv("REQUEST_LOG_URL", "sqlite:///seo_requests.db")


settings = Settings()


@dataclass
class AnalysisThresholds:
    """Configurable thresholds for tag evaluation."""

    # Title tag (characters)
    title_min: int = 10
    title_max: int = 70

    # Meta description (characters)
    description_min: int = 70
    description_max: int = 160

    # Open Graph (characters)
    og_title_max: int = 90
    og_description_min: int = 100

    # Structured data
    schema_min_properties: int = 4  # Top-level keys including @context/@type
    schema_display_length: int = 100  # Characters kept for display

    @classmethod
    def from_env(cls) -> "AnalysisThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with SEO_THRESHOLD_
        e.g., SEO_THRESHOLD_TITLE_MAX=60

        Returns:
            AnalysisThresholds with values from environment
        """
        thresholds = cls()
        prefix = "SEO_THRESHOLD_"

        for field_name in thresholds.__dataclass_fields__:
            env_key = f"{prefix}{field_name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                try:
                    setattr(thresholds, field_name, int(env_value))
                except ValueError:
                    logger.warning(f"Ignoring non-integer value for {env_key}: {env_value!r}")

        return thresholds

    @classmethod
    def from_file(cls, path: str) -> "AnalysisThresholds":
        """Load thresholds from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            AnalysisThresholds with values from file
        """
        thresholds = cls()
        file_path = Path(path)

        if not file_path.exists():
            logger.warning(f"Thresholds file not found, using defaults: {path}")
            return thresholds

        with open(file_path, 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config)

        for field_name in thresholds.__dataclass_fields__:
            if field_name in threshold_config:
                setattr(thresholds, field_name, int(threshold_config[field_name]))

        return thresholds

    def to_dict(self) -> dict:
        """Convert thresholds to dictionary.

        Returns:
            Dictionary of all threshold values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }


# Global default thresholds instance
default_thresholds = AnalysisThresholds()
