"""Dropbox API endpoint groups.

Each group maps method arguments onto the request the API expects and
returns the decoded result as-is.
"""

from __future__ import annotations

from dropbox_http.endpoints.base import Endpoint
from dropbox_http.endpoints.check import Check
from dropbox_http.endpoints.file_requests import FileRequests
from dropbox_http.endpoints.files import Files
from dropbox_http.endpoints.paper import Paper
from dropbox_http.endpoints.sharing import Sharing
from dropbox_http.endpoints.users import Users

__all__ = ["Check", "Endpoint", "FileRequests", "Files", "Paper", "Sharing", "Users"]
