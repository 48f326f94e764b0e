"""Check endpoints for testing connectivity and credentials."""

from __future__ import annotations

from typing import Any

from dropbox_http.endpoints.base import Endpoint


class Check(Endpoint):
    """Connectivity checks (``/check/*``). Both echo ``query`` back as ``result``."""

    def user(self, query: str = "foo") -> dict[str, Any]:
        """Check that the user access token is valid."""
        return self._client.rpc_request("/check/user", {"query": query})

    def app(self, query: str = "foo") -> dict[str, Any]:
        """Check that the app key and secret are valid."""
        return self._client.rpc_request("/check/app", {"query": query})
