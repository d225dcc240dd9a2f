"""
HTTPClient module for making authenticated GET requests against the REST API
"""

import logging
import requests
from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, field


GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a request fails at the transport, HTTP or payload level"""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or GENERIC_ERROR_MESSAGE)
        self.status_code = status_code


@dataclass
class APIRequest:
    """Represents a single API request"""
    url: str
    parameters: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    auth: Optional[Tuple[str, str]] = None
    method: str = "GET"

    def __repr__(self) -> str:
        # Never show the Basic Auth secret
        username = self.auth[0] if self.auth else None
        return (
            f"APIRequest(url={self.url!r}, parameters={self.parameters!r}, "
            f"method={self.method!r}, username={username!r})"
        )


@dataclass
class APIResponse:
    """Standardised API response wrapper"""
    raw_data: Any
    status_code: int


class HTTPClient:
    """HTTP client with Basic Auth and a single attempt per request"""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout
        self.headers: Dict[str, str] = {'Accept': 'application/json'}
        self.session: Optional[requests.Session] = None

    def make_request(self, request: APIRequest) -> APIResponse:
        """
        Make one HTTP request and parse the JSON body

        Args:
            request: APIRequest object containing request details

        Returns:
            APIResponse object with response data

        Raises:
            FetchError: On transport failure, non-2xx status or a body that is not JSON
        """
        if request.method.upper() != 'GET':
            raise ValueError(f"Unsupported HTTP method: {request.method}")

        # Create session if not exists
        if self.session is None:
            self.session = requests.Session()

        combined_headers = {**self.headers, **request.headers}

        logger.debug(f"GET {request.url} params={request.parameters}")

        try:
            response = self.session.get(
                request.url,
                params=request.parameters,
                headers=combined_headers,
                auth=request.auth,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"GET {request.url} failed: {e}")
            raise FetchError(str(e)) from e

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            message = _http_error_message(response)
            logger.warning(f"GET {request.url} -> {response.status_code}: {message}")
            raise FetchError(message, status_code=response.status_code) from e

        try:
            raw_data = response.json()
        except ValueError as e:
            raise FetchError(f"Response from {request.url} is not valid JSON", status_code=response.status_code) from e

        return APIResponse(
            raw_data=raw_data,
            status_code=response.status_code
        )

    def close_connection(self) -> None:
        """
        Close HTTP session and release resources
        """
        if self.session:
            self.session.close()
            self.session = None


def _http_error_message(response: requests.Response) -> str:
    """Build a readable message from an error response, using the API's own message when present"""
    message = f"Request failed with status code {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return message

    if isinstance(body, dict) and body.get('message'):
        return f"{message}: {body['message']}"
    return message
