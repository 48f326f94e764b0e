"""Dropbox OAuth 2.0 helpers.

Stateless functions for the authorization-code flow:

    >>> url = get_authorization_url(app_key, redirect_uri, state, ["files.content.read"])
    >>> # ... user approves, Dropbox redirects back with ?code=...
    >>> token = exchange_code_for_token(code, app_key, app_secret, redirect_uri)
    >>> client = DropboxClient(token["access_token"])
    >>> # later
    >>> client.access_token = refresh_access_token(
    ...     token["refresh_token"], app_key, app_secret
    ... )["access_token"]

No token is stored; keeping it (and deciding when to refresh) is up to
the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri, prepare_token_request

from dropbox_http.client import DEFAULT_TIMEOUT, decode_json_body, send_request
from dropbox_http.exceptions import DropboxAPIError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://www.dropbox.com/oauth2/authorize"
TOKEN_URL = "https://api.dropboxapi.com/oauth2/token"

# Common Dropbox OAuth scopes
SCOPES = {
    "account_info_read": "account_info.read",
    "account_info_write": "account_info.write",
    "files_metadata_read": "files.metadata.read",
    "files_metadata_write": "files.metadata.write",
    "files_content_read": "files.content.read",
    "files_content_write": "files.content.write",
    "sharing_read": "sharing.read",
    "sharing_write": "sharing.write",
    "file_requests_read": "file_requests.read",
    "file_requests_write": "file_requests.write",
    "contacts_read": "contacts.read",
    "contacts_write": "contacts.write",
}


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Resolve scope names to Dropbox scope strings.

    Args:
        scopes: Scope names (e.g. ["files_content_read"]) or Dropbox scope
            strings (e.g. ["files.content.read"]).

    Raises:
        ValueError: For a name that is neither.
    """
    resolved = []
    for scope in scopes:
        if "." in scope:
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use a Dropbox scope or one of: {list(SCOPES.keys())}"
            )
    return resolved


def get_authorization_url(
    client_id: str,
    redirect_uri: str,
    state: str = "",
    scopes: list[str] | None = None,
    token_access_type: str | None = None,
) -> str:
    """Build the URL the user visits to authorize the app.

    Args:
        client_id: App key from the Dropbox App Console.
        redirect_uri: Redirect URI registered for the app.
        state: CSRF token echoed back on redirect. Omitted when empty.
        scopes: Scopes to request. Omitted when empty.
        token_access_type: "offline" to also receive a refresh token.

    Returns:
        Complete authorization URL.
    """
    return prepare_grant_uri(
        AUTHORIZE_URL,
        client_id,
        "code",
        redirect_uri=redirect_uri,
        scope=scopes or None,
        state=state or None,
        token_access_type=token_access_type,
    )


def _token_request(
    body: str,
    http_client: httpx.Client | None,
) -> dict[str, Any]:
    client = http_client or httpx.Client(timeout=DEFAULT_TIMEOUT)
    try:
        response = send_request(
            client,
            "POST",
            TOKEN_URL,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            content=body.encode("utf-8"),
        )
        return decode_json_body(response)
    finally:
        if http_client is None:
            client.close()


def exchange_code_for_token(
    code: str,
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    http_client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Exchange an authorization code for an access token.

    Args:
        code: Code from the OAuth redirect.
        client_id: App key.
        client_secret: App secret.
        redirect_uri: Redirect URI used when authorizing.
        http_client: Optional httpx client to send the request with.

    Returns:
        Token response (access_token, token_type, expires_in, ...).

    Raises:
        DropboxAPIError: If the exchange fails.
    """
    body = prepare_token_request(
        "authorization_code",
        redirect_uri=redirect_uri,
        code=code,
        client_id=client_id,
        client_secret=client_secret,
    )
    try:
        token = _token_request(body, http_client)
    except DropboxAPIError as e:
        raise DropboxAPIError(
            f"Failed to get access token: {e.message}", e.code, e.response
        ) from e

    logger.info("Exchanged authorization code for access token")
    return token


def refresh_access_token(
    refresh_token: str,
    client_id: str,
    client_secret: str,
    http_client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Get a new access token using a refresh token.

    Args:
        refresh_token: Refresh token from an offline authorization.
        client_id: App key.
        client_secret: App secret.
        http_client: Optional httpx client to send the request with.

    Returns:
        Token response with the new access_token.

    Raises:
        DropboxAPIError: If the refresh fails.
    """
    body = prepare_token_request(
        "refresh_token",
        refresh_token=refresh_token,
        client_id=client_id,
        client_secret=client_secret,
    )
    try:
        token = _token_request(body, http_client)
    except DropboxAPIError as e:
        raise DropboxAPIError(
            f"Failed to refresh access token: {e.message}", e.code, e.response
        ) from e

    logger.info("Refreshed access token")
    return token
