"""Shared base for endpoint groups."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dropbox_http.client import DropboxClient


class Endpoint:
    """A group of API methods sharing one DropboxClient."""

    def __init__(self, client: DropboxClient) -> None:
        self._client = client
