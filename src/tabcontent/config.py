"""Tabcontent configuration management.

Handles persistent settings stored in ~/.tabcontent/config.json
"""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path


# Default configuration values
DEFAULT_API_BASE_URL = "http://localhost:8000/api"
DEFAULT_TAB = "overview"
DEFAULT_OUTPUT_FORMAT = "json"  # json, yaml
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_TIMEOUT = 30.0

API_URL_ENV = "TABCONTENT_API_URL"


@dataclass
class TabContentConfig:
    """Tabcontent application configuration."""

    # Fetch layer
    api_base_url: str = DEFAULT_API_BASE_URL
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    timeout: float = DEFAULT_TIMEOUT

    # Rendering
    include_overview: bool = True
    default_tab: str = DEFAULT_TAB

    # CLI output
    output_format: str = DEFAULT_OUTPUT_FORMAT

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the path to the config file."""
        return Path.home() / ".tabcontent" / "config.json"

    @classmethod
    def load(cls) -> "TabContentConfig":
        """Load configuration from file, or return defaults if not found.

        The ``TABCONTENT_API_URL`` environment variable overrides the stored
        API base URL.
        """
        config = cls()
        config_path = cls.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                # Only use known fields to avoid issues with old config versions
                known_fields = {f.name for f in cls.__dataclass_fields__.values()}
                filtered_data = {k: v for k, v in data.items() if k in known_fields}
                config = cls(**filtered_data)
            except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
                # Invalid config, use defaults
                pass

        env_url = os.environ.get(API_URL_ENV)
        if env_url:
            config.api_base_url = env_url

        return config

    def save(self) -> None:
        """Save configuration to file."""
        config_path = self.get_config_path()

        # Ensure directory exists
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self.api_base_url = DEFAULT_API_BASE_URL
        self.max_retries = DEFAULT_MAX_RETRIES
        self.retry_delay = DEFAULT_RETRY_DELAY
        self.timeout = DEFAULT_TIMEOUT
        self.include_overview = True
        self.default_tab = DEFAULT_TAB
        self.output_format = DEFAULT_OUTPUT_FORMAT


OUTPUT_FORMAT_OPTIONS = [
    ("json", "JSON"),
    ("yaml", "YAML"),
]
