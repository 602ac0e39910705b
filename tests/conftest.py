"""Test configuration for pytest."""

import json
import sys
from http import HTTPStatus
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pytest
import requests
from requests.adapters import BaseAdapter

from imgur_api.main import ImgurAPI

# Add the project root directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

Handler = Callable[[requests.PreparedRequest], Tuple[int, Any]]


def make_response(request: requests.PreparedRequest, status: int, body: Any) -> requests.Response:
    """Build a requests.Response carrying ``body`` as JSON (or raw text)."""
    response = requests.Response()
    response.status_code = status
    response.reason = HTTPStatus(status).phrase
    if isinstance(body, str):
        response._content = body.encode("utf-8")
        response.headers["Content-Type"] = "text/html"
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    response.url = request.url
    response.request = request
    return response


class StubAdapter(BaseAdapter):
    """Transport adapter answering requests without touching the network.

    Responses come from ``handler`` when one is set, otherwise from the
    queue filled with :meth:`add`. Every prepared request is recorded.
    """

    def __init__(self, handler: Optional[Handler] = None):
        super().__init__()
        self.handler = handler
        self.queue: List[Tuple[int, Any]] = []
        self.requests: List[requests.PreparedRequest] = []

    def add(self, status: int, body: Any) -> None:
        self.queue.append((status, body))

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        if self.handler is not None:
            status, body = self.handler(request)
        else:
            status, body = self.queue.pop(0)
        return make_response(request, status, body)

    def close(self):
        pass

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]


def build_envelope(data: Any, status: int = 200, success: bool = True) -> dict:
    """Build a response envelope."""
    return {"data": data, "success": success, "status": status}


@pytest.fixture
def envelope():
    """Provide the envelope builder to tests."""
    return build_envelope


@pytest.fixture
def api_adapter() -> StubAdapter:
    return StubAdapter()


@pytest.fixture
def oauth_adapter() -> StubAdapter:
    return StubAdapter()


@pytest.fixture
def api(api_adapter, oauth_adapter):
    """Create an ImgurAPI whose sessions are served by stub adapters."""
    client = ImgurAPI("test_client_id", "test_client_secret")
    client.transport.session.mount("https://", api_adapter)
    client.oauth.session.mount("https://", oauth_adapter)
    yield client
    client.close()
