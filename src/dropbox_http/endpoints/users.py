"""Users endpoints: account information and space usage."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from dropbox_http.endpoints.base import Endpoint
from dropbox_http.models import tagged_list


class Users(Endpoint):
    """Account operations (``/users/*``)."""

    def get_current_account(self) -> dict[str, Any]:
        """Get information about the account that owns the access token."""
        return self._client.rpc_request("/users/get_current_account")

    def get_account(self, account_id: str) -> dict[str, Any]:
        """Get information about a user's account."""
        return self._client.rpc_request("/users/get_account", {"account_id": account_id})

    def get_account_batch(self, account_ids: Sequence[str]) -> list[dict[str, Any]]:
        """Get information about several accounts (at most 300)."""
        return self._client.rpc_request(
            "/users/get_account_batch", {"account_ids": list(account_ids)}
        )

    def get_space_usage(self) -> dict[str, Any]:
        """Get used and allocated space for the current account."""
        return self._client.rpc_request("/users/get_space_usage")

    def get_features_values(self, features: Sequence[str]) -> dict[str, Any]:
        """Get the values of account features, e.g. ["paper_as_files", "file_locking"]."""
        return self._client.rpc_request(
            "/users/features/get_values", {"features": tagged_list(features)}
        )
