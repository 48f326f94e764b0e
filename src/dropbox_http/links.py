"""Convert Dropbox shared links into direct links.

A shared link such as ``https://www.dropbox.com/s/abc/photo.jpg?dl=0``
opens a preview page. Two rewrites make it fetchable directly (for
``<img src>``, hotlinking, downloads):

- ``raw``: keep the host and ask for the raw file with ``raw=1``.
- ``userusercontent``: point at the content host
  ``dl.dropboxusercontent.com`` and drop the ``dl`` flag.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from dropbox_http.exceptions import InvalidLinkError

DROPBOX_DOMAIN = "dropbox.com"
USERCONTENT_HOST = "dl.dropboxusercontent.com"

# Most specific first
WEB_HOSTS = ("www.dropbox.com", "dropbox.com")

METHOD_RAW = "raw"
METHOD_USERCONTENT = "userusercontent"
METHODS = (METHOD_RAW, METHOD_USERCONTENT)

_DL_FLAG = re.compile(r"dl=\d+")


def _split(url: str) -> tuple[str, list[str], str]:
    """Split a URL into (base, query parameters, fragment suffix)."""
    url, hash_mark, fragment = url.partition("#")
    base, _, query = url.partition("?")
    params = [param for param in query.split("&") if param]
    return base, params, hash_mark + fragment


def _join(base: str, params: list[str], fragment: str) -> str:
    query = "?" + "&".join(params) if params else ""
    return base + query + fragment


def is_valid_url(url: str) -> bool:
    """Check that ``url`` is an absolute URL with a scheme and a host."""
    if not url or any(char.isspace() for char in url):
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc and parts.hostname)


def convert_to_raw_link(url: str) -> str:
    """Rewrite a shared link to serve the raw file (``raw=1``).

    ``dl=0`` becomes ``raw=1`` in place; otherwise ``raw=1`` is appended.
    The result always has exactly one ``raw=1`` parameter.
    """
    base, params, fragment = _split(url)

    converted = []
    for param in params:
        if param == "dl=0":
            param = "raw=1"
        if param == "raw=1" and "raw=1" in converted:
            continue
        converted.append(param)

    if "raw=1" not in converted:
        converted.append("raw=1")

    return _join(base, converted, fragment)


def convert_to_usercontent_link(url: str) -> str:
    """Rewrite a shared link to the dl.dropboxusercontent.com host.

    Only the www.dropbox.com and dropbox.com hosts are rewritten; other
    Dropbox hosts such as dl.dropbox.com are kept as they are. Any
    ``dl=<n>`` parameter is removed, along with a dangling ``?`` or ``&``.
    """
    for host in WEB_HOSTS:
        marker = f"//{host}"
        if marker in url:
            url = url.replace(marker, f"//{USERCONTENT_HOST}", 1)
            break

    base, params, fragment = _split(url)
    params = [param for param in params if not _DL_FLAG.fullmatch(param)]
    return _join(base, params, fragment)


def convert_to_direct_link(url: str, method: str = METHOD_USERCONTENT) -> str:
    """Convert a Dropbox shared link into a direct link.

    Args:
        url: Shared link, e.g. ``https://www.dropbox.com/s/abc/photo.jpg?dl=0``.
        method: "raw" or "userusercontent".

    Returns:
        Direct link.

    Raises:
        InvalidLinkError: If the URL is malformed, is not a Dropbox link, or
            the method is unknown.
    """
    if not is_valid_url(url):
        raise InvalidLinkError(f"Invalid URL provided: {url!r}")

    if DROPBOX_DOMAIN not in url:
        raise InvalidLinkError(f"URL must be a Dropbox link: {url}")

    if method == METHOD_RAW:
        return convert_to_raw_link(url)
    if method == METHOD_USERCONTENT:
        return convert_to_usercontent_link(url)

    raise InvalidLinkError(
        f"Invalid conversion method: {method!r}. Use one of: {', '.join(METHODS)}"
    )
