"""
HTTPClient module for issuing Deezer API requests with rate limiting and retry logic
"""

import logging
import random
import time
import requests
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from .config_loader import DEFAULT_BASE_URL
from .exceptions import (
    DeezerErrorResponse,
    DeezerHTTPError,
    DeezerMalformedResponseError,
    DeezerNetworkError,
    DeezerRetryableException,
)
from .rate_limit_tracker import RateLimitTracker, get_default_tracker


# Jitter multiplier is drawn from [JITTER_LOW, JITTER_LOW + JITTER_SPAN)
JITTER_LOW = 0.75
JITTER_SPAN = 0.5


@dataclass
class APIRequest:
    """Represents a single API request relative to the service base URL"""
    path: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "GET"


class HTTPClient:
    """HTTP client with sliding window rate limiting and exponential backoff retries"""

    DEFAULT_HEADERS = {'Accept': 'application/json'}

    def __init__(self, base_url: str = DEFAULT_BASE_URL,
                 headers: Optional[Dict[str, str]] = None,
                 timeout_seconds: float = 10.0,
                 max_attempts: int = 3,
                 base_delay: float = 2.0,
                 rate_limit_tracker: Optional[RateLimitTracker] = None):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url.rstrip('/')
        self.headers: Dict[str, str] = {**self.DEFAULT_HEADERS, **(headers or {})}
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.rate_limit_tracker = rate_limit_tracker or get_default_tracker()
        self.session: Optional[requests.Session] = None
        self.logger = logging.getLogger(__name__)

    def build_url(self, path: str) -> str:
        """
        Join a relative resource path onto the base URL

        Args:
            path: Relative path such as 'album/302127/tracks'

        Returns:
            Absolute URL without query string
        """
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def encode_parameters(parameters: Optional[Dict[str, Any]]) -> Dict[str, str]:
        """
        Flatten query parameters to strings, dropping unset values

        Args:
            parameters: Raw parameter mapping

        Returns:
            Mapping of parameter names to string values
        """
        encoded: Dict[str, str] = {}
        for key, value in (parameters or {}).items():
            if value is None:
                continue
            if isinstance(value, bool):
                encoded[key] = 'true' if value else 'false'
            else:
                encoded[key] = str(value)
        return encoded

    def make_request(self, request: APIRequest) -> Any:
        """
        Make HTTP request with integrated retry logic and exponential backoff

        Args:
            request: APIRequest object containing request details

        Returns:
            Parsed JSON body of the successful response

        Raises:
            DeezerRetryableException: The last retryable error once all attempts are spent
            DeezerAPIException: Any non-retryable error, raised on first occurrence
        """
        last_error: Optional[DeezerRetryableException] = None

        for attempt in range(self.max_attempts):
            try:
                return self._send(request)
            except DeezerRetryableException as e:
                last_error = e
                if attempt + 1 >= self.max_attempts:
                    self.logger.error(
                        f"Giving up on {request.method} {request.path} after "
                        f"{self.max_attempts} attempts: {e}"
                    )
                    break

                delay = self.compute_backoff(attempt)
                self.logger.warning(
                    f"Retryable error on {request.method} {request.path} "
                    f"(attempt {attempt + 1}/{self.max_attempts}): {e}. Retrying in {delay:.2f}s"
                )
                time.sleep(delay)

        raise last_error

    def compute_backoff(self, attempt: int) -> float:
        """
        Delay before the retry following a failed attempt

        Args:
            attempt: Zero-based index of the attempt that just failed

        Returns:
            base_delay * 2^attempt scaled by a jitter factor in [0.75, 1.25)
        """
        jitter = JITTER_LOW + random.random() * JITTER_SPAN
        return self.base_delay * (2 ** attempt) * jitter

    def apply_rate_limit(self) -> None:
        """
        Wait for a free slot in the shared request window
        """
        waited = self.rate_limit_tracker.acquire()
        if waited:
            self.logger.debug(f"Request delayed {waited:.3f}s by rate limit")

    def close(self) -> None:
        """Release the underlying HTTP session"""
        if self.session is not None:
            self.session.close()
            self.session = None

    def _send(self, request: APIRequest) -> Any:
        """
        Perform exactly one rate limited HTTP call and decode its body

        Args:
            request: APIRequest object containing request details

        Returns:
            Parsed JSON body

        Raises:
            DeezerHTTPError: For non-2xx responses (subtyped by status)
            DeezerNetworkError: When no response could be obtained
            DeezerMalformedResponseError: When the body is not JSON
            DeezerErrorResponse: When the body carries an error object
        """
        self.apply_rate_limit()

        if self.session is None:
            self.session = requests.Session()

        url = self.build_url(request.path)
        params = self.encode_parameters(request.parameters)
        combined_headers = {**self.headers, **request.headers}
        self.logger.debug(f"{request.method} {url} params={params}")

        try:
            if request.method.upper() == 'GET':
                response = self.session.get(
                    url,
                    params=params,
                    headers=combined_headers,
                    timeout=self.timeout_seconds
                )
            else:
                response = self.session.request(
                    request.method,
                    url,
                    params=params,
                    headers=combined_headers,
                    timeout=self.timeout_seconds
                )
        except requests.exceptions.RequestException as e:
            raise DeezerNetworkError(f"Request to {url} failed: {e}", original_error=e) from e

        if not 200 <= response.status_code < 300:
            raise DeezerHTTPError.from_status(response.status_code, response.reason or "", url)

        try:
            data = response.json()
        except ValueError as e:
            raise DeezerMalformedResponseError(f"Response from {url} is not valid JSON") from e

        if isinstance(data, dict) and data.get('error'):
            error = data['error']
            if not isinstance(error, dict):
                error = {'message': str(error)}
            raise DeezerErrorResponse.from_body(error)

        return data
