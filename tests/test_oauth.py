"""Tests for the OAuth 2.0 helpers."""

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from dropbox_http import DropboxAPIError
from dropbox_http.oauth import (
    AUTHORIZE_URL,
    SCOPES,
    TOKEN_URL,
    exchange_code_for_token,
    get_authorization_url,
    refresh_access_token,
    resolve_scopes,
)


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


class TestAuthorizationUrl:
    """Test authorization URL construction."""

    def test_full_url(self):
        """Should include client_id, redirect_uri, response_type, state and scope."""
        url = get_authorization_url("k", "https://cb", "st", ["a", "b"])
        assert url.startswith(AUTHORIZE_URL + "?")

        query = _query(url)
        assert query["client_id"] == ["k"]
        assert query["redirect_uri"] == ["https://cb"]
        assert query["response_type"] == ["code"]
        assert query["state"] == ["st"]
        assert query["scope"] == ["a b"]

    def test_redirect_uri_is_encoded(self):
        """Should percent-encode the redirect URI."""
        url = get_authorization_url("k", "https://cb", "st")
        assert "redirect_uri=https%3A%2F%2Fcb" in url

    def test_omits_empty_state_and_scope(self):
        """Should leave out state and scope when they are empty."""
        query = _query(get_authorization_url("k", "https://cb"))
        assert "state" not in query
        assert "scope" not in query
        assert query["response_type"] == ["code"]

    def test_offline_access(self):
        """Should pass token_access_type through when given."""
        query = _query(get_authorization_url("k", "https://cb", token_access_type="offline"))
        assert query["token_access_type"] == ["offline"]

    def test_deterministic(self):
        """Same inputs should give the same URL."""
        args = ("k", "https://cb", "st", ["files.content.read"])
        assert get_authorization_url(*args) == get_authorization_url(*args)


class TestResolveScopes:
    """Test scope name resolution."""

    def test_names_and_full_scopes(self):
        """Should map names and pass dotted scopes through."""
        assert resolve_scopes(["files_content_read", "sharing.write"]) == [
            "files.content.read",
            "sharing.write",
        ]

    def test_unknown_scope_raises(self):
        """Should raise error for unknown scope names."""
        with pytest.raises(ValueError, match="Unknown scope"):
            resolve_scopes(["unknown_scope"])

    def test_available_scopes(self):
        """Should have common Dropbox scopes defined."""
        assert "files_content_read" in SCOPES
        assert "files_content_write" in SCOPES
        assert "sharing_write" in SCOPES


class TestTokenRequests:
    """Test code exchange and refresh against a mock token endpoint."""

    @pytest.fixture
    def captured(self):
        return []

    @pytest.fixture
    def token_client(self, captured):
        def handler(request):
            captured.append(request)
            return httpx.Response(
                200,
                json={"access_token": "sl.new", "token_type": "bearer", "expires_in": 14400},
            )

        return httpx.Client(transport=httpx.MockTransport(handler))

    def test_exchange_code(self, token_client, captured):
        """Should POST an authorization_code grant as a form."""
        token = exchange_code_for_token(
            "the-code", "app-key", "app-secret", "https://cb", http_client=token_client
        )
        assert token["access_token"] == "sl.new"

        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == TOKEN_URL
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        form = parse_qs(request.content.decode())
        assert form["grant_type"] == ["authorization_code"]
        assert form["code"] == ["the-code"]
        assert form["client_id"] == ["app-key"]
        assert form["client_secret"] == ["app-secret"]
        assert form["redirect_uri"] == ["https://cb"]

    def test_refresh(self, token_client, captured):
        """Should POST a refresh_token grant as a form."""
        token = refresh_access_token("refresh-me", "app-key", "app-secret", http_client=token_client)
        assert token["expires_in"] == 14400

        form = parse_qs(captured[0].content.decode())
        assert form["grant_type"] == ["refresh_token"]
        assert form["refresh_token"] == ["refresh-me"]
        assert form["client_id"] == ["app-key"]
        assert "redirect_uri" not in form

    def test_exchange_failure(self):
        """Should raise DropboxAPIError with the status and error body."""
        body = {"error": "invalid_grant", "error_description": "code doesn't exist or has expired"}
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(400, json=body))
        )
        with pytest.raises(DropboxAPIError, match="Failed to get access token") as exc_info:
            exchange_code_for_token("bad", "k", "s", "https://cb", http_client=http_client)
        assert exc_info.value.code == 400
        assert exc_info.value.response == body

    def test_refresh_network_failure(self):
        """Should raise DropboxAPIError when the request cannot be sent."""

        def handler(request):
            raise httpx.ConnectError("no route to host", request=request)

        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(DropboxAPIError, match="Failed to refresh access token") as exc_info:
            refresh_access_token("r", "k", "s", http_client=http_client)
        assert exc_info.value.code == 0
