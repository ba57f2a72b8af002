"""HTTP client for the AppLovin MAX reporting API."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .query import QueryParameters
from .security import redact_api_key

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://r.applovin.com"

# Status codes relayed as a successful report
SUCCESS_CODES = (200, 202)


@dataclass
class MaxResponse:
    """Structured response from the MAX API."""
    success: bool
    body: Optional[str] = None
    error: Optional[str] = None
    http_code: Optional[int] = None


class MaxClient:
    """Client for the MAX report and cohort endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize MAX client.

        Args:
            base_url: API origin (e.g., https://r.applovin.com)
            timeout: Seconds to wait for the server, None to rely on transport defaults
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json'
        })

    def close(self):
        """Release pooled connections held by the session."""
        self.session.close()

    def __enter__(self) -> 'MaxClient':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _prepare(self, path: str, query: QueryParameters) -> requests.PreparedRequest:
        request = requests.Request('GET', f"{self.base_url}{path}", params=query.items())
        return self.session.prepare_request(request)

    def build_url(self, path: str, query: QueryParameters) -> str:
        """
        Build the full request URL for an endpoint path and query.

        Raises:
            requests.RequestException if the URL cannot be built
        """
        return self._prepare(path, query).url

    def get_report(self, path: str, query: QueryParameters) -> MaxResponse:
        """
        Fetch a report and return its raw body.

        Args:
            path: Endpoint path (e.g., /maxReport, /maxCohort/imp)
            query: Fully assembled query parameters, api_key included

        Returns:
            MaxResponse with the unparsed body or an error description
        """
        try:
            prepared = self._prepare(path, query)
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            return MaxResponse(success=False, error=f"error while parsing max report url: {e}")

        logger.info("GET %s", redact_api_key(prepared.url))

        try:
            with self.session.send(prepared, stream=True, timeout=self.timeout) as response:
                try:
                    body = response.text
                except requests.RequestException as e:
                    return MaxResponse(
                        success=False,
                        error=f"error while reading max report body: {e}",
                        http_code=response.status_code,
                    )

                if response.status_code not in SUCCESS_CODES:
                    logger.warning("MAX API returned HTTP %s", response.status_code)
                    return MaxResponse(
                        success=False,
                        body=body,
                        error=f"max api returned status code: {response.status_code}. request body: {body}",
                        http_code=response.status_code,
                    )

                return MaxResponse(success=True, body=body, http_code=response.status_code)

        except requests.RequestException as e:
            return MaxResponse(success=False, error=f"error while sending max report request: {redact_api_key(str(e))}")
