"""Tests for credential configuration."""

import os
from unittest.mock import patch

import httpx
import pytest

from dropbox_http import CredentialsNotFoundError, DropboxClient
from dropbox_http.config import (
    ACCESS_TOKEN,
    CREDENTIAL_VARS,
    client_from_env,
    get_credential_status,
    load_env_file,
    require,
)


class TestLoadEnvFile:
    """Test .env file loading."""

    def test_missing_file(self, tmp_path):
        """Should load nothing when the file doesn't exist."""
        assert load_env_file(tmp_path / "missing.env") == {}

    def test_loads_values(self, tmp_path):
        """Should parse keys, skip comments and strip quotes."""
        env_path = tmp_path / ".env"
        env_path.write_text(
            "# Dropbox app\n"
            "\n"
            "DROPBOX_APP_KEY=abc123\n"
            'DROPBOX_APP_SECRET="s3cret"\n'
            "DROPBOX_REDIRECT_URI='https://localhost/cb'\n"
            "not a variable\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            loaded = load_env_file(env_path)
            assert loaded == {
                "DROPBOX_APP_KEY": "abc123",
                "DROPBOX_APP_SECRET": "s3cret",
                "DROPBOX_REDIRECT_URI": "https://localhost/cb",
            }
            assert os.environ["DROPBOX_APP_SECRET"] == "s3cret"

    def test_environment_takes_precedence(self, tmp_path):
        """Should not override variables already set."""
        env_path = tmp_path / ".env"
        env_path.write_text("DROPBOX_ACCESS_TOKEN=from-file\n")
        with patch.dict(os.environ, {"DROPBOX_ACCESS_TOKEN": "from-env"}, clear=True):
            assert load_env_file(env_path) == {}
            assert os.environ["DROPBOX_ACCESS_TOKEN"] == "from-env"

    def test_loads_any_variable(self, tmp_path):
        """Should load variables outside the DROPBOX_ set too."""
        env_path = tmp_path / ".env"
        env_path.write_text("HTTPS_PROXY=http://proxy:3128\n")
        with patch.dict(os.environ, {}, clear=True):
            assert load_env_file(env_path) == {"HTTPS_PROXY": "http://proxy:3128"}


class TestRequire:
    """Test required variable lookup."""

    def test_returns_value(self):
        with patch.dict(os.environ, {"DROPBOX_APP_KEY": "abc123"}):
            assert require("DROPBOX_APP_KEY") == "abc123"

    def test_missing_raises(self):
        """Should name the missing variable."""
        with (
            patch.dict(os.environ, {}, clear=True),
            pytest.raises(CredentialsNotFoundError, match="DROPBOX_APP_KEY"),
        ):
            require("DROPBOX_APP_KEY")

    def test_blank_raises(self):
        """Should treat whitespace-only values as missing."""
        with (
            patch.dict(os.environ, {"DROPBOX_APP_KEY": "  "}),
            pytest.raises(CredentialsNotFoundError),
        ):
            require("DROPBOX_APP_KEY")


class TestClientFromEnv:
    """Test building a client from the environment."""

    def test_uses_access_token(self):
        with patch.dict(os.environ, {ACCESS_TOKEN: "env-token"}):
            client = client_from_env(timeout=10.0)
        assert isinstance(client, DropboxClient)
        assert client.access_token == "env-token"
        assert client.timeout == 10.0
        client.close()

    def test_passes_http_client(self):
        """Should send requests through the given http_client."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"result": "foo"})

        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        with patch.dict(os.environ, {ACCESS_TOKEN: "env-token"}):
            with client_from_env(http_client=http_client) as client:
                client.check.user()
        assert seen[0].headers["Authorization"] == "Bearer env-token"

    def test_missing_token_raises(self):
        with (
            patch.dict(os.environ, {}, clear=True),
            pytest.raises(CredentialsNotFoundError, match=ACCESS_TOKEN),
        ):
            client_from_env()


class TestCredentialStatus:
    """Test credential status reporting."""

    def test_reports_each_variable(self):
        with patch.dict(os.environ, {ACCESS_TOKEN: "token"}, clear=True):
            status = get_credential_status()
        assert set(status["credentials"]) == set(CREDENTIAL_VARS)
        assert status["credentials"][ACCESS_TOKEN] is True
        assert status["credentials"]["DROPBOX_APP_SECRET"] is False
        assert "env_file" in status
        assert isinstance(status["env_file_exists"], bool)
