"""Configuration for the MAX bridge loaded from environment variables."""

import os
from dataclasses import dataclass
from typing import Optional

from .max_client import DEFAULT_BASE_URL


@dataclass
class MaxConfig:
    """Settings needed to call the MAX reporting API."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    audit_log: Optional[str] = None

    @classmethod
    def from_environment(cls) -> 'MaxConfig':
        """
        Load configuration from environment variables.

        APPLOVIN_API_KEY is the report key. APPLOVIN_MAX_BASE_URL,
        APPLOVIN_REQUEST_TIMEOUT and APPLOVIN_AUDIT_LOG are optional.

        Returns:
            MaxConfig, possibly with an empty api_key (see validate_or_error)
        """
        timeout = None
        raw_timeout = os.getenv('APPLOVIN_REQUEST_TIMEOUT')
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                # Invalid format, fall back to transport defaults
                pass
            if timeout is not None and not timeout > 0:
                timeout = None

        return cls(
            api_key=os.getenv('APPLOVIN_API_KEY', ''),
            base_url=os.getenv('APPLOVIN_MAX_BASE_URL') or DEFAULT_BASE_URL,
            timeout=timeout,
            audit_log=os.getenv('APPLOVIN_AUDIT_LOG') or None,
        )

    def validate_or_error(self) -> str:
        """
        Validate configuration and return error message if unusable.

        Returns:
            Empty string if valid, error message if invalid
        """
        if not self.api_key:
            return """APPLOVIN_API_KEY environment variable not set.

Set the MAX report key before starting this MCP server:
  export APPLOVIN_API_KEY='<report key from the MAX dashboard>'

Then restart the server."""

        return ""  # Valid
