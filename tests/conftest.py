"""Shared fixtures: DropboxClient instances backed by httpx.MockTransport."""

import json

import httpx
import pytest

from dropbox_http import DropboxClient


class RecordingTransport:
    """Records requests and answers each with the configured response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        """Decode the JSON body of the last request."""
        return json.loads(self.last.content)

    def last_arg(self):
        """Decode the Dropbox-API-Arg header of the last request."""
        return json.loads(self.last.headers["Dropbox-API-Arg"])


@pytest.fixture
def transport():
    """A recording mock transport."""
    return RecordingTransport()


@pytest.fixture
def client(transport):
    """A DropboxClient that sends through the recording transport."""
    http_client = httpx.Client(transport=httpx.MockTransport(transport))
    with DropboxClient("test-token", http_client=http_client) as client:
        yield client


@pytest.fixture
def make_client():
    """Build a DropboxClient around an arbitrary request handler."""

    def _make(handler, token="test-token"):
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        return DropboxClient(token, http_client=http_client)

    return _make
