"""Tests for the dropbox-http CLI."""

import os
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest

from dropbox_http import DropboxAPIError
from dropbox_http.cli import main, parse_scopes

SHARED_URL = "https://www.dropbox.com/s/abcd1234/vacation.jpg?dl=0"


class TestParseScopes:
    """Test scope parsing."""

    def test_empty(self):
        assert parse_scopes(None) == []
        assert parse_scopes("") == []

    def test_comma_separated(self):
        """Should split and strip, dropping empty entries."""
        assert parse_scopes("files_read, sharing_write,,") == ["files_read", "sharing_write"]


class TestLinkCommand:
    """Test the link command."""

    def test_default_method(self, capsys):
        assert main(["link", SHARED_URL]) == 0
        out = capsys.readouterr().out
        assert out.strip() == "https://dl.dropboxusercontent.com/s/abcd1234/vacation.jpg"

    def test_raw_method(self, capsys):
        assert main(["link", SHARED_URL, "--method", "raw"]) == 0
        out = capsys.readouterr().out
        assert out.strip() == "https://www.dropbox.com/s/abcd1234/vacation.jpg?raw=1"

    def test_not_dropbox(self, capsys):
        """Should report non-Dropbox links and fail."""
        assert main(["link", "https://example.com/file.jpg"]) == 1
        assert "URL must be a Dropbox link" in capsys.readouterr().out

    def test_unknown_method_rejected(self):
        with pytest.raises(SystemExit):
            main(["link", SHARED_URL, "--method", "bogus"])


class TestStatusCommand:
    """Test the status command."""

    def test_shows_variables(self, capsys):
        with patch.dict(os.environ, {"DROPBOX_ACCESS_TOKEN": "token"}, clear=True):
            assert main(["status"]) == 0
        out = capsys.readouterr().out
        assert "[x] DROPBOX_ACCESS_TOKEN" in out
        assert "[ ] DROPBOX_APP_KEY" in out


class TestCheckCommand:
    """Test the check command."""

    def test_missing_token(self, capsys):
        with patch.dict(os.environ, {}, clear=True):
            assert main(["check"]) == 1
        assert "DROPBOX_ACCESS_TOKEN" in capsys.readouterr().out


class TestAuthCommands:
    """Test the auth subcommands."""

    ENV = {
        "DROPBOX_APP_KEY": "app-key",
        "DROPBOX_APP_SECRET": "app-secret",
        "DROPBOX_REDIRECT_URI": "https://localhost/cb",
    }

    def test_url(self, capsys):
        """Should print an authorization URL with the given state and scopes."""
        with patch.dict(os.environ, self.ENV, clear=True):
            code = main(["auth", "url", "--state", "xyz", "--scopes", "files_content_read", "--offline"])
        assert code == 0

        out = capsys.readouterr().out
        url = next(line for line in out.splitlines() if line.startswith("https://"))
        query = parse_qs(urlparse(url).query)
        assert query["client_id"] == ["app-key"]
        assert query["state"] == ["xyz"]
        assert query["scope"] == ["files.content.read"]
        assert query["token_access_type"] == ["offline"]

    def test_url_unknown_scope(self, capsys):
        with patch.dict(os.environ, self.ENV, clear=True):
            assert main(["auth", "url", "--scopes", "nope"]) == 1
        assert "Unknown scope" in capsys.readouterr().out

    def test_url_missing_app_key(self, capsys):
        with patch.dict(os.environ, {}, clear=True):
            assert main(["auth", "url"]) == 1
        assert "DROPBOX_APP_KEY" in capsys.readouterr().out

    def test_token(self, capsys):
        """Should exchange the code with the configured app credentials."""
        token = {"access_token": "sl.new", "token_type": "bearer"}
        with (
            patch.dict(os.environ, self.ENV, clear=True),
            patch("dropbox_http.oauth.exchange_code_for_token", return_value=token) as exchange,
        ):
            assert main(["auth", "token", "the-code"]) == 0
        exchange.assert_called_once_with(
            "the-code", "app-key", "app-secret", "https://localhost/cb"
        )
        assert "sl.new" in capsys.readouterr().out

    def test_refresh_error(self, capsys):
        """Should print API errors and fail."""
        error = DropboxAPIError("Failed to refresh access token: API error 400: invalid_grant")
        with (
            patch.dict(os.environ, self.ENV, clear=True),
            patch("dropbox_http.oauth.refresh_access_token", side_effect=error),
        ):
            assert main(["auth", "refresh", "old-refresh"]) == 1
        assert "invalid_grant" in capsys.readouterr().out
