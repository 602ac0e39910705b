"""HTTP transport and envelope handling for the Imgur API."""

import logging
import threading
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from google.auth import credentials as ga_credentials
from google.auth.transport.requests import AuthorizedSession

from imgur_api.models import Envelope, RequestError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.imgur.com/3/"
DEFAULT_TIMEOUT = 120


def authorization_header(client_id: str, access_token: Optional[str] = None) -> str:
    """Return the Authorization value for the current credential state."""
    if access_token is None:
        return f"Client-ID {client_id}"
    return f"Bearer {access_token}"


class ImgurCredentials(ga_credentials.Credentials):
    """Credentials holding the client id and, once authorized, an access token.

    The token is the only mutable state shared between the OAuth exchange and
    request dispatch, so reads and writes go through a lock.
    """

    def __init__(self, client_id: str):
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        super().__init__()
        self.client_id = client_id

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    @token.setter
    def token(self, value: Optional[str]) -> None:
        with self._lock:
            self._token = value

    @property
    def valid(self) -> bool:
        return True

    def refresh(self, request) -> None:
        """Imgur access tokens are not refreshed by this client."""

    def apply(self, headers, token=None) -> None:
        headers["Authorization"] = authorization_header(self.client_id, token or self.token)

    def before_request(self, request, method, url, headers) -> None:
        self.apply(headers)


def _error_message(data: Any, default: str) -> str:
    """Extract the service-supplied error message from an envelope's data."""
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            error = error.get("message")
        if error:
            return str(error)
    return default


def unwrap(envelope: Envelope, http_status: int, http_message: str) -> Any:
    """Return the envelope's data, or raise if the request failed.

    Args:
        envelope: Decoded response envelope
        http_status: HTTP status code of the response
        http_message: HTTP reason phrase of the response

    Returns:
        The ``data`` field of the envelope

    Raises:
        RequestError: If the envelope or the HTTP status reports a failure
    """
    if not envelope.success or not 200 <= http_status < 300:
        status = http_status
        if 200 <= http_status < 300 and 100 <= envelope.status <= 599:
            status = envelope.status
        raise RequestError(status, _error_message(envelope.data, http_message))
    return envelope.data


class ImgurTransport:
    """Dispatches authenticated requests against the Imgur REST root."""

    def __init__(
        self,
        credentials: ImgurCredentials,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the transport.

        Args:
            credentials: Shared credentials used to decorate every request
            base_url: REST root that request paths are resolved against
            timeout: Seconds to wait for each response
        """
        self.credentials = credentials
        self.base_url = base_url
        self.timeout = timeout
        # No refresh status codes: a 401 is reported, never retried.
        self.session = AuthorizedSession(credentials, refresh_status_codes=())

    def request(
        self, method: str, path: str, data: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """Send one request and return the raw response.

        Raises:
            requests.RequestException: If the request could not be completed
        """
        url = urljoin(self.base_url, path)
        logger.debug("%s %s", method, url)
        return self.session.request(method, url, data=data, timeout=self.timeout)

    def call(self, method: str, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Send one request and return the unwrapped ``data`` of its envelope."""
        return self._unwrap_response(method, path, self.request(method, path, data=data))

    def _unwrap_response(self, method: str, path: str, response: requests.Response) -> Any:
        try:
            envelope = Envelope.from_json(response.json())
        except ValueError as e:
            logger.warning("Undecodable response from %s %s: %s", method, path, e)
            raise RequestError(response.status_code, response.reason or str(e)) from e

        try:
            return unwrap(envelope, response.status_code, response.reason or "")
        except RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise

    def call_record(
        self, method: str, path: str, data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send one request whose envelope data must be a single record object."""
        response = self.request(method, path, data=data)
        record = self._unwrap_response(method, path, response)
        if not isinstance(record, dict):
            logger.warning("%s %s returned %s data", method, path, type(record).__name__)
            raise RequestError(response.status_code, "Unexpected response data")
        return record

    def close(self) -> None:
        self.session.close()
