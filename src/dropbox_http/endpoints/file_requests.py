"""File request endpoints: ask others to upload files into a folder."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from dropbox_http.endpoints.base import Endpoint
from dropbox_http.models import tagged


class FileRequests(Endpoint):
    """File request operations (``/file_requests/*``)."""

    def create(
        self,
        title: str,
        destination: str,
        deadline: str | None = None,
        open: bool = True,
        description: str | None = None,
    ) -> dict[str, Any]:
        """Create a file request.

        Args:
            title: Title shown to uploaders.
            destination: Folder that receives the uploads.
            deadline: Upload deadline (ISO 8601).
            open: Whether the request accepts uploads now.
            description: Description shown to uploaders.

        Returns:
            The file request, including its "url".
        """
        params: dict[str, Any] = {"title": title, "destination": destination, "open": open}
        if deadline:
            params["deadline"] = {"deadline": deadline}
        if description:
            params["description"] = description
        return self._client.rpc_request("/file_requests/create", params)

    def get(self, id: str) -> dict[str, Any]:
        return self._client.rpc_request("/file_requests/get", {"id": id})

    def list(self, limit: int = 1000) -> dict[str, Any]:
        """List file requests owned by the current user."""
        return self._client.rpc_request("/file_requests/list_v2", {"limit": limit})

    def list_continue(self, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request("/file_requests/list/continue", {"cursor": cursor})

    def update(
        self,
        id: str,
        title: str | None = None,
        destination: str | None = None,
        deadline: str | None = None,
        open: bool | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        """Update a file request. Only the given fields change."""
        params: dict[str, Any] = {"id": id}
        if title is not None:
            params["title"] = title
        if destination is not None:
            params["destination"] = destination
        if deadline is not None:
            params["deadline"] = tagged("update", deadline=deadline)
        if open is not None:
            params["open"] = open
        if description is not None:
            params["description"] = description
        return self._client.rpc_request("/file_requests/update", params)

    def delete(self, ids: Sequence[str]) -> dict[str, Any]:
        """Delete closed file requests."""
        return self._client.rpc_request("/file_requests/delete", {"ids": list(ids)})

    def delete_all_closed(self) -> dict[str, Any]:
        return self._client.rpc_request("/file_requests/delete_all_closed")

    def count(self) -> dict[str, Any]:
        """Count the file requests owned by the current user."""
        return self._client.rpc_request("/file_requests/count")
