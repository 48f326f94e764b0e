"""Centralized credential configuration.

Credentials come from environment variables:

    DROPBOX_ACCESS_TOKEN   - OAuth access token used by DropboxClient
    DROPBOX_APP_KEY        - app key (OAuth client ID)
    DROPBOX_APP_SECRET     - app secret (OAuth client secret)
    DROPBOX_REDIRECT_URI   - redirect URI registered for the app
    DROPBOX_REFRESH_TOKEN  - refresh token from an offline authorization

A ``.env`` file in the working directory (or at DROPBOX_HTTP_ENV_FILE) is
loaded on import. Variables already set in the environment win.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dropbox_http.client import DropboxClient
from dropbox_http.exceptions import CredentialsNotFoundError

ENV_FILE = Path(os.environ.get("DROPBOX_HTTP_ENV_FILE", ".env"))

ACCESS_TOKEN = "DROPBOX_ACCESS_TOKEN"
APP_KEY = "DROPBOX_APP_KEY"
APP_SECRET = "DROPBOX_APP_SECRET"
REDIRECT_URI = "DROPBOX_REDIRECT_URI"
REFRESH_TOKEN = "DROPBOX_REFRESH_TOKEN"

CREDENTIAL_VARS = (ACCESS_TOKEN, APP_KEY, APP_SECRET, REDIRECT_URI, REFRESH_TOKEN)


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Used for the DROPBOX_* credentials listed above, but any KEY=value line
    is loaded.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def require(name: str) -> str:
    """Get a required, non-empty environment variable.

    Raises:
        CredentialsNotFoundError: If the variable is unset or empty.
    """
    value = os.environ.get(name, "").strip()
    if not value:
        raise CredentialsNotFoundError(name)
    return value


def client_from_env(**kwargs: Any) -> DropboxClient:
    """Create a DropboxClient using DROPBOX_ACCESS_TOKEN.

    Args:
        **kwargs: Passed to DropboxClient (timeout, http_client).

    Raises:
        CredentialsNotFoundError: If DROPBOX_ACCESS_TOKEN is not configured.
    """
    return DropboxClient(require(ACCESS_TOKEN), **kwargs)


def get_credential_status() -> dict[str, Any]:
    """Get status of all configured credentials.

    Returns:
        Dictionary with credential status.
    """
    return {
        "env_file": str(ENV_FILE.resolve()),
        "env_file_exists": ENV_FILE.exists(),
        "credentials": {name: bool(os.environ.get(name, "").strip()) for name in CREDENTIAL_VARS},
    }


# Auto-load .env on import
_loaded = load_env_file(ENV_FILE)
