"""dropbox-http - a typed client for the Dropbox HTTP API v2.

Usage:
    from dropbox_http import DropboxClient

    client = DropboxClient("your-access-token")
    client.files.upload("/notes.txt", b"hello")
    result = client.files.download("/notes.txt")
    link = client.sharing.create_direct_link("/Photos/vacation.jpg")

OAuth helpers live in ``dropbox_http.oauth``; shared-link conversion in
``dropbox_http.links``.
"""

from dropbox_http.client import DropboxClient
from dropbox_http.exceptions import (
    CredentialsNotFoundError,
    DropboxAPIError,
    DropboxError,
    InvalidLinkError,
)
from dropbox_http.links import (
    convert_to_direct_link,
    convert_to_raw_link,
    convert_to_usercontent_link,
)
from dropbox_http.models import DownloadResult
from dropbox_http.oauth import (
    exchange_code_for_token,
    get_authorization_url,
    refresh_access_token,
)

__version__ = "0.1.0"
__all__ = [
    "DropboxClient",
    "DownloadResult",
    "DropboxError",
    "DropboxAPIError",
    "InvalidLinkError",
    "CredentialsNotFoundError",
    "convert_to_direct_link",
    "convert_to_raw_link",
    "convert_to_usercontent_link",
    "get_authorization_url",
    "exchange_code_for_token",
    "refresh_access_token",
]
