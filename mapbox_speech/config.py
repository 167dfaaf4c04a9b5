"""Speech API configuration.

This module provides the configuration consumed by SpeechSynthesizer.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from mapbox_speech.errors import SpeechConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.mapbox.com"


def api_url_from_env() -> str:
    """Base API URL from MAPBOX_SPEECH_API_URL, without a trailing slash."""
    return os.environ.get('MAPBOX_SPEECH_API_URL', DEFAULT_API_URL).rstrip("/")


@dataclass
class SpeechConfig:
    """Speech API configuration.

    This class automatically loads configuration from environment variables
    if not provided during initialization.

    Attributes:
        access_token: Access token sent with every request
        api_url: Base URL of the API, without a trailing path
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Attempts for requests failing with network errors
                        (default: 3)
        retry_min_wait: Minimum wait between attempts in seconds (default: 1)
        retry_max_wait: Maximum wait between attempts in seconds (default: 10)

    Environment variables:
        MAPBOX_ACCESS_TOKEN: Access token
        MAPBOX_SPEECH_API_URL: Base URL (default: https://api.mapbox.com)
        MAPBOX_SPEECH_TIMEOUT: Request timeout in seconds
        MAPBOX_SPEECH_RETRY_ATTEMPTS: Attempts on network errors
        MAPBOX_SPEECH_RETRY_MIN_WAIT: Minimum retry wait in seconds
        MAPBOX_SPEECH_RETRY_MAX_WAIT: Maximum retry wait in seconds
    """
    access_token: Optional[str] = field(
        default_factory=lambda: os.environ.get('MAPBOX_ACCESS_TOKEN')
    )
    api_url: str = field(default_factory=api_url_from_env)
    timeout: float = field(
        default_factory=lambda: float(
            os.environ.get('MAPBOX_SPEECH_TIMEOUT', '30')
        )
    )
    retry_attempts: int = field(
        default_factory=lambda: int(
            os.environ.get('MAPBOX_SPEECH_RETRY_ATTEMPTS', '3')
        )
    )
    retry_min_wait: float = field(
        default_factory=lambda: float(
            os.environ.get('MAPBOX_SPEECH_RETRY_MIN_WAIT', '1')
        )
    )
    retry_max_wait: float = field(
        default_factory=lambda: float(
            os.environ.get('MAPBOX_SPEECH_RETRY_MAX_WAIT', '10')
        )
    )

    def __post_init__(self):
        """Validate configuration and log loading process."""
        self._log_config_loading()
        self._validate_config()
        self.api_url = self.api_url.rstrip("/")

    def _log_config_loading(self):
        """Log configuration loading process."""
        if self.access_token:
            logger.info("Speech API access token loaded")
        else:
            logger.error(
                "Speech API access token not found in constructor "
                "or environment"
            )
        logger.info(f"Speech API endpoint: {self.api_url}")
        logger.debug(
            f"Speech API timeout={self.timeout}s, "
            f"retry_attempts={self.retry_attempts}, "
            f"retry_wait={self.retry_min_wait}-{self.retry_max_wait}s"
        )

    def _validate_config(self):
        """Validate configuration values.

        Raises:
            SpeechConfigError: If a value is missing or out of range.
        """
        if not self.access_token:
            raise SpeechConfigError(
                "access_token is required. Set it either in constructor "
                "or through MAPBOX_ACCESS_TOKEN environment variable"
            )
        if not self.api_url:
            raise SpeechConfigError(
                "api_url is required. Set it either in constructor "
                "or through MAPBOX_SPEECH_API_URL environment variable"
            )
        if self.timeout <= 0:
            raise SpeechConfigError(
                f"timeout must be positive, got {self.timeout}"
            )
        if self.retry_attempts < 1:
            raise SpeechConfigError(
                f"retry_attempts must be at least 1, "
                f"got {self.retry_attempts}"
            )
        if self.retry_min_wait < 0 or self.retry_max_wait < self.retry_min_wait:
            raise SpeechConfigError(
                f"Invalid retry wait range: "
                f"{self.retry_min_wait}-{self.retry_max_wait}s"
            )
