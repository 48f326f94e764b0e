"""Integration tests against the live Dropbox API."""

import os
import secrets

import pytest

from dropbox_http import DropboxAPIError
from dropbox_http.config import client_from_env

# Integration tests - skip if no credentials
skip_no_dropbox = pytest.mark.skipif(
    not os.environ.get("DROPBOX_ACCESS_TOKEN"),
    reason="DROPBOX_ACCESS_TOKEN required",
)


@skip_no_dropbox
class TestDropboxIntegration:
    """Integration tests for the Dropbox API (requires an access token)."""

    @pytest.fixture
    def client(self):
        """Create a client from environment variables."""
        with client_from_env() as client:
            yield client

    def test_check_user(self, client):
        """Should echo the query back."""
        query = secrets.token_hex(4)
        assert client.check.user(query)["result"] == query

    def test_get_current_account(self, client):
        account = client.users.get_current_account()
        assert "account_id" in account

    def test_list_root(self, client):
        listing = client.files.list_folder("", limit=5)
        assert isinstance(listing["entries"], list)
        assert "cursor" in listing

    def test_missing_path(self, client):
        """Should raise an API error carrying the error tag."""
        with pytest.raises(DropboxAPIError) as exc_info:
            client.files.get_metadata(f"/does-not-exist-{secrets.token_hex(8)}")
        assert exc_info.value.code == 409
        assert exc_info.value.tag() == "path"
