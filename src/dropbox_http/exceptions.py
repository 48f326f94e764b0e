"""Dropbox API exceptions."""

from __future__ import annotations

from typing import Any


class DropboxError(Exception):
    """Base exception for dropbox-http errors."""


class DropboxAPIError(DropboxError):
    """Raised when a request to the Dropbox API fails.

    Carries the HTTP status code (0 when the request never got a response)
    and, when the failing response had a JSON object body, that body.
    """

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        response: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.response = response
        super().__init__(message)

    def summary(self) -> str | None:
        """Get the ``error_summary`` field from the error body, if any."""
        if not isinstance(self.response, dict):
            return None
        return self.response.get("error_summary")

    def tag(self) -> str | None:
        """Get the ``.tag`` of the nested ``error`` object, if any."""
        if not isinstance(self.response, dict):
            return None
        error = self.response.get("error")
        if not isinstance(error, dict):
            return None
        return error.get(".tag")


class InvalidLinkError(DropboxError, ValueError):
    """Raised when a shared link cannot be converted."""


class CredentialsNotFoundError(DropboxError):
    """Raised when a required credential is not configured."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"{name} is not configured. "
            f"Set {name} in the environment or in your .env file."
        )
