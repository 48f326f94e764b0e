"""CLI for dropbox-http.

Usage:
    dropbox-http status                         # Show configured credentials
    dropbox-http check                          # Verify the access token
    dropbox-http auth url [--scopes a,b]        # Print the OAuth authorization URL
    dropbox-http auth token <code>              # Exchange an authorization code
    dropbox-http auth refresh [refresh_token]   # Get a new access token
    dropbox-http link <url> [--method raw]      # Convert a shared link to a direct link
"""

from __future__ import annotations

import argparse
import json
import logging
import secrets
import sys
import webbrowser


def cmd_status() -> int:
    """Show status of all configured credentials."""
    from dropbox_http.config import get_credential_status

    status = get_credential_status()

    print("=" * 60)
    print("DROPBOX-HTTP CREDENTIAL STATUS")
    print("=" * 60)
    print()
    print(f".env file: {status['env_file']} {'[x]' if status['env_file_exists'] else '[ ]'}")
    print()
    for name, configured in status["credentials"].items():
        mark = "[x]" if configured else "[ ]"
        print(f"  {mark} {name}")
    print()

    return 0


def cmd_check() -> int:
    """Verify the configured access token with /check/user."""
    from dropbox_http.config import client_from_env
    from dropbox_http.exceptions import DropboxError

    query = secrets.token_hex(4)
    try:
        with client_from_env() as client:
            result = client.check.user(query)
    except DropboxError as e:
        print(f"[✗] {e}")
        return 1

    if result.get("result") != query:
        print(f"[✗] unexpected response: {result}")
        return 1

    print("[✓] access token is valid")
    return 0


def auth_url(scopes: list[str], state: str | None, offline: bool, open_browser: bool) -> int:
    """Print the authorization URL for the configured app."""
    from dropbox_http.config import APP_KEY, REDIRECT_URI, require
    from dropbox_http.exceptions import CredentialsNotFoundError
    from dropbox_http.oauth import get_authorization_url, resolve_scopes

    try:
        app_key = require(APP_KEY)
        redirect_uri = require(REDIRECT_URI)
        resolved = resolve_scopes(scopes)
    except (CredentialsNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    state = state or secrets.token_urlsafe(16)
    url = get_authorization_url(
        app_key,
        redirect_uri,
        state,
        resolved,
        token_access_type="offline" if offline else None,
    )

    print(f"State: {state}")
    print(f"Authorization URL:\n{url}\n")
    print("After approving, run: dropbox-http auth token <code>")

    if open_browser:
        webbrowser.open(url)
    return 0


def auth_token(code: str) -> int:
    """Exchange an authorization code and print the token response."""
    from dropbox_http.config import APP_KEY, APP_SECRET, REDIRECT_URI, require
    from dropbox_http.exceptions import DropboxError
    from dropbox_http.oauth import exchange_code_for_token

    try:
        token = exchange_code_for_token(
            code,
            require(APP_KEY),
            require(APP_SECRET),
            require(REDIRECT_URI),
        )
    except DropboxError as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(token, indent=2))
    print()
    print("Save access_token as DROPBOX_ACCESS_TOKEN (and refresh_token as DROPBOX_REFRESH_TOKEN)")
    return 0


def auth_refresh(refresh_token: str | None) -> int:
    """Refresh the access token and print the token response."""
    from dropbox_http.config import APP_KEY, APP_SECRET, REFRESH_TOKEN, require
    from dropbox_http.exceptions import DropboxError
    from dropbox_http.oauth import refresh_access_token

    try:
        token = refresh_access_token(
            refresh_token or require(REFRESH_TOKEN),
            require(APP_KEY),
            require(APP_SECRET),
        )
    except DropboxError as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(token, indent=2))
    return 0


def cmd_link(url: str, method: str) -> int:
    """Convert a shared link to a direct link."""
    from dropbox_http.exceptions import InvalidLinkError
    from dropbox_http.links import convert_to_direct_link

    try:
        print(convert_to_direct_link(url, method))
    except InvalidLinkError as e:
        print(f"Error: {e}")
        return 1
    return 0


def parse_scopes(scope_str: str | None) -> list[str]:
    """Parse comma-separated scopes."""
    if not scope_str:
        return []
    return [s.strip() for s in scope_str.split(",") if s.strip()]


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from dropbox_http.links import METHOD_USERCONTENT, METHODS

    parser = argparse.ArgumentParser(
        prog="dropbox-http",
        description="Dropbox API credentials, OAuth and shared-link tools",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("status", help="Show configured credentials")
    subparsers.add_parser("check", help="Verify the access token")

    # auth subcommand
    auth_parser = subparsers.add_parser("auth", help="OAuth 2.0 authorization")
    auth_subparsers = auth_parser.add_subparsers(dest="auth_command", help="Command")

    url_parser = auth_subparsers.add_parser("url", help="Print the authorization URL")
    url_parser.add_argument("--scopes", type=str, default=None, help="Comma-separated scopes")
    url_parser.add_argument("--state", type=str, default=None, help="State (default: random)")
    url_parser.add_argument(
        "--offline",
        action="store_true",
        help="Request a refresh token",
    )
    url_parser.add_argument(
        "--open",
        action="store_true",
        help="Open the URL in a browser",
    )

    token_parser = auth_subparsers.add_parser("token", help="Exchange an authorization code")
    token_parser.add_argument("code", help="Authorization code from the redirect")

    refresh_parser = auth_subparsers.add_parser("refresh", help="Refresh the access token")
    refresh_parser.add_argument(
        "refresh_token",
        nargs="?",
        default=None,
        help="Refresh token (default: DROPBOX_REFRESH_TOKEN)",
    )

    # link command
    link_parser = subparsers.add_parser("link", help="Convert a shared link to a direct link")
    link_parser.add_argument("url", help="Dropbox shared link")
    link_parser.add_argument(
        "--method",
        choices=METHODS,
        default=METHOD_USERCONTENT,
        help=f"Conversion method (default: {METHOD_USERCONTENT})",
    )

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()

    if args.command == "check":
        return cmd_check()

    if args.command == "link":
        return cmd_link(args.url, args.method)

    if args.command == "auth":
        if args.auth_command == "url":
            return auth_url(parse_scopes(args.scopes), args.state, args.offline, args.open)
        elif args.auth_command == "token":
            return auth_token(args.code)
        elif args.auth_command == "refresh":
            return auth_refresh(args.refresh_token)
        else:
            auth_parser.print_help()
            return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
