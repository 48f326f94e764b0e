"""Dropbox API client with bearer-token authentication.

Every call goes through one of three request shapes:

- RPC: JSON arguments in the body, JSON result in the body.
- Content upload: file bytes in the body, JSON arguments in the
  ``Dropbox-API-Arg`` header, JSON result in the body.
- Content download: empty body, JSON arguments in the ``Dropbox-API-Arg``
  header, file bytes in the body and JSON metadata in the
  ``Dropbox-API-Result`` header.

All of them end up in ``send_request``, which turns any HTTP failure into a
``DropboxAPIError``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from dropbox_http.endpoints import Check, FileRequests, Files, Paper, Sharing, Users
from dropbox_http.exceptions import DropboxAPIError
from dropbox_http.models import DownloadResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0

API_ARG_HEADER = "Dropbox-API-Arg"
API_RESULT_HEADER = "Dropbox-API-Result"


def _error_from_response(response: httpx.Response) -> DropboxAPIError:
    """Build a DropboxAPIError from a failed HTTP response."""
    try:
        parsed = response.json()
    except ValueError:
        parsed = None
    body = parsed if isinstance(parsed, dict) else None

    detail = (body or {}).get("error_summary") or response.text.strip() or response.reason_phrase
    return DropboxAPIError(
        f"API error {response.status_code}: {detail}",
        code=response.status_code,
        response=body,
    )


def send_request(
    http_client: httpx.Client,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request and normalize every failure to DropboxAPIError.

    Args:
        http_client: Client used to send the request.
        method: HTTP method.
        url: Full request URL.
        **kwargs: Passed through to ``httpx.Client.request``.

    Returns:
        The successful (status < 400) response.

    Raises:
        DropboxAPIError: On connection failures, timeouts and error statuses.
    """
    logger.debug(f"{method} {url}")

    try:
        response = http_client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.warning(f"{method} {url} failed: {e}")
        raise DropboxAPIError(f"Request failed: {e}") from e

    if response.status_code >= 400:
        error = _error_from_response(response)
        logger.warning(f"{method} {url} returned {response.status_code}: {error.summary()}")
        raise error

    return response


def decode_json_body(response: httpx.Response) -> Any:
    """Decode a JSON response body.

    An empty body yields ``{"status": <status code>}``; a body of ``null``
    yields ``{}``.

    Raises:
        DropboxAPIError: If the body is not valid JSON.
    """
    if not response.content:
        return {"status": response.status_code}

    try:
        data = json.loads(response.content)
    except ValueError as e:
        raise DropboxAPIError(f"Invalid JSON response: {e}", code=response.status_code) from e

    return {} if data is None else data


def encode_api_arg(params: dict[str, Any] | None) -> str:
    """Serialize arguments for the Dropbox-API-Arg header (ASCII only)."""
    return json.dumps(params if params is not None else {}, ensure_ascii=True)


class DropboxClient:
    """Dropbox API v2 client.

    Endpoint groups are exposed as attributes:

    Example:
        >>> client = DropboxClient("sl.your-access-token")
        >>> account = client.users.get_current_account()
        >>> listing = client.files.list_folder("/Photos")
        >>> while listing.get("has_more"):
        ...     listing = client.files.list_folder_continue(listing["cursor"])
        >>> link = client.sharing.create_direct_link("/Photos/vacation.jpg")
        >>> link["direct_url"]
        'https://dl.dropboxusercontent.com/...'

    The access token is a plain attribute; assign a new one after refreshing.
    """

    API_BASE_URL = "https://api.dropboxapi.com/2"
    CONTENT_BASE_URL = "https://content.dropboxapi.com/2"

    def __init__(
        self,
        access_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        """Initialize Dropbox client.

        Args:
            access_token: OAuth 2 access token.
            timeout: Overall request timeout in seconds.
            http_client: Preconfigured httpx client. Defaults to a new one
                with ``timeout``.
        """
        self.access_token = access_token
        self.timeout = timeout
        self._client = http_client or httpx.Client(timeout=timeout)

        self.files = Files(self)
        self.sharing = Sharing(self)
        self.users = Users(self)
        self.file_requests = FileRequests(self)
        self.paper = Paper(self)
        self.check = Check(self)

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def rpc_request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Make an RPC-style request.

        Args:
            endpoint: API path, e.g. "/files/list_folder".
            params: JSON arguments. None sends ``null`` for endpoints that
                take no arguments.

        Returns:
            Decoded JSON result.
        """
        headers = self._auth_headers()
        headers["Content-Type"] = "application/json"

        response = send_request(
            self._client,
            "POST",
            f"{self.API_BASE_URL}{endpoint}",
            headers=headers,
            content=json.dumps(params).encode("utf-8"),
        )
        return decode_json_body(response)

    def content_upload_request(
        self,
        endpoint: str,
        content: bytes,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a content-upload request.

        Args:
            endpoint: API path, e.g. "/files/upload".
            content: Raw bytes to upload.
            params: Arguments sent in the Dropbox-API-Arg header.

        Returns:
            Decoded JSON result.
        """
        headers = self._auth_headers()
        headers["Content-Type"] = "application/octet-stream"
        headers[API_ARG_HEADER] = encode_api_arg(params)

        response = send_request(
            self._client,
            "POST",
            f"{self.CONTENT_BASE_URL}{endpoint}",
            headers=headers,
            content=content,
        )
        return decode_json_body(response)

    def content_download_request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> DownloadResult:
        """Make a content-download request.

        Args:
            endpoint: API path, e.g. "/files/download".
            params: Arguments sent in the Dropbox-API-Arg header.

        Returns:
            DownloadResult with the raw body and the metadata decoded from
            the Dropbox-API-Result header (empty when the header is absent).
        """
        headers = self._auth_headers()
        headers[API_ARG_HEADER] = encode_api_arg(params)

        response = send_request(
            self._client,
            "POST",
            f"{self.CONTENT_BASE_URL}{endpoint}",
            headers=headers,
        )

        metadata: dict[str, Any] = {}
        raw_metadata = response.headers.get(API_RESULT_HEADER)
        if raw_metadata:
            try:
                metadata = json.loads(raw_metadata)
            except ValueError as e:
                raise DropboxAPIError(
                    f"Invalid {API_RESULT_HEADER} header: {e}",
                    code=response.status_code,
                ) from e

        return DownloadResult(content=response.content, metadata=metadata)

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
