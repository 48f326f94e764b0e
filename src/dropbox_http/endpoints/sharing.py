"""Sharing endpoints: shared links, shared folders and file members."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from dropbox_http.endpoints.base import Endpoint
from dropbox_http.links import METHOD_USERCONTENT, convert_to_direct_link
from dropbox_http.models import (
    AccessLevel,
    AddMember,
    MemberSelector,
    SharedLinkSettings,
    as_params,
    tagged,
    tagged_list,
)

logger = logging.getLogger(__name__)

Member = MemberSelector | Mapping[str, Any]


def _policy(value: str | Enum | Mapping[str, Any]) -> Any:
    """Tag a policy choice; mappings are sent as given."""
    if isinstance(value, Mapping):
        return dict(value)
    return tagged(value)


class Sharing(Endpoint):
    """Sharing operations (``/sharing/*``).

    Listing methods come in ``list_x`` / ``list_x_continue`` pairs driven by
    the returned cursor. ``share_folder`` and member changes may return an
    ``async_job_id`` for ``check_share_job_status`` / ``check_job_status``.
    """

    # =========================================================================
    # Shared links
    # =========================================================================

    def create_shared_link_with_settings(
        self,
        path: str,
        settings: SharedLinkSettings | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a shared link for a file or folder.

        Args:
            path: Path to share.
            settings: Visibility, password, expiry, audience and access.

        Returns:
            Shared link metadata including "url".
        """
        params: dict[str, Any] = {"path": path}
        if settings is not None:
            params["settings"] = as_params(settings)
        return self._client.rpc_request("/sharing/create_shared_link_with_settings", params)

    def get_shared_link_metadata(
        self,
        url: str,
        path: str | None = None,
        link_password: str | None = None,
    ) -> dict[str, Any]:
        """Get metadata for a shared link (or a path inside a shared folder link)."""
        params: dict[str, Any] = {"url": url}
        if path:
            params["path"] = path
        if link_password:
            params["link_password"] = link_password
        return self._client.rpc_request("/sharing/get_shared_link_metadata", params)

    def get_folder_metadata(
        self,
        url: str,
        path: str | None = None,
        link_password: str | None = None,
    ) -> dict[str, Any]:
        """Get metadata for a folder behind a shared link.

        Dropbox resolves folder links through get_shared_link_metadata; use
        ``get_shared_folder_metadata`` for a shared folder ID.
        """
        return self.get_shared_link_metadata(url, path, link_password)

    def list_shared_links(
        self,
        path: str | None = None,
        cursor: str | None = None,
        direct_only: bool = False,
    ) -> dict[str, Any]:
        """List shared links, optionally for one path.

        Pass the previous page's ``cursor`` to continue a listing.
        """
        params: dict[str, Any] = {}
        if path:
            params["path"] = path
        if cursor:
            params["cursor"] = cursor
        if direct_only:
            params["direct_only"] = True
        return self._client.rpc_request("/sharing/list_shared_links", params)

    def modify_shared_link_settings(
        self,
        url: str,
        settings: SharedLinkSettings | Mapping[str, Any] | None = None,
        remove_expiration: bool = False,
    ) -> dict[str, Any]:
        """Change the settings of an existing shared link."""
        return self._client.rpc_request(
            "/sharing/modify_shared_link_settings",
            {
                "url": url,
                "settings": as_params(settings) or {},
                "remove_expiration": remove_expiration,
            },
        )

    def revoke_shared_link(self, url: str) -> dict[str, Any]:
        return self._client.rpc_request("/sharing/revoke_shared_link", {"url": url})

    def create_direct_link(
        self,
        path: str,
        settings: SharedLinkSettings | Mapping[str, Any] | None = None,
        method: str = METHOD_USERCONTENT,
    ) -> dict[str, Any]:
        """Create a shared link and convert it into a direct link.

        Args:
            path: Path to share.
            settings: Shared link settings.
            method: "raw" or "userusercontent" (see ``dropbox_http.links``).

        Returns:
            The shared link metadata with an added "direct_url".

        Raises:
            DropboxAPIError: If creating the link fails (including when the
                link already exists).
            InvalidLinkError: If the returned link cannot be converted.
        """
        link = self.create_shared_link_with_settings(path, settings)
        link["direct_url"] = convert_to_direct_link(link.get("url", ""), method)
        logger.debug(f"Created direct link for {path}")
        return link

    # =========================================================================
    # Shared files
    # =========================================================================

    def get_file_metadata(
        self,
        file: str,
        actions: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Get sharing metadata for a file (ID or path)."""
        params: dict[str, Any] = {"file": file}
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/get_file_metadata", params)

    def get_file_metadata_batch(
        self,
        files: Sequence[str],
        actions: Sequence[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Get sharing metadata for up to 100 files."""
        params: dict[str, Any] = {"files": list(files)}
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/get_file_metadata/batch", params)

    def add_file_member(
        self,
        file: str,
        members: Sequence[Member],
        custom_message: str | None = None,
        quiet: bool = False,
        access_level: AccessLevel | str = AccessLevel.VIEWER,
        add_message_as_comment: bool = False,
    ) -> list[dict[str, Any]]:
        """Share a file with members.

        Args:
            file: File ID or path.
            members: Members to add, e.g. ``MemberSelector.email("a@b.c")``.
            custom_message: Message included in the invitation.
            quiet: Don't notify the members.
            access_level: Access granted to the members.
            add_message_as_comment: Add ``custom_message`` as a file comment.
        """
        params: dict[str, Any] = {
            "file": file,
            "members": [as_params(member) for member in members],
            "quiet": quiet,
            "access_level": tagged(access_level),
            "add_message_as_comment": add_message_as_comment,
        }
        if custom_message:
            params["custom_message"] = custom_message
        return self._client.rpc_request("/sharing/add_file_member", params)

    def list_file_members(
        self,
        file: str,
        actions: Sequence[str] | None = None,
        include_inherited: bool = True,
        limit: int = 100,
    ) -> dict[str, Any]:
        """List the members of a shared file."""
        params: dict[str, Any] = {
            "file": file,
            "include_inherited": include_inherited,
            "limit": limit,
        }
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/list_file_members", params)

    def list_file_members_continue(self, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request("/sharing/list_file_members/continue", {"cursor": cursor})

    def list_file_members_batch(self, files: Sequence[str], limit: int = 10) -> list[dict[str, Any]]:
        """List members of several shared files."""
        return self._client.rpc_request(
            "/sharing/list_file_members/batch", {"files": list(files), "limit": limit}
        )

    def list_received_files(
        self,
        limit: int = 100,
        actions: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """List files shared with the current user."""
        params: dict[str, Any] = {"limit": limit}
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/list_received_files", params)

    def list_received_files_continue(self, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/sharing/list_received_files/continue", {"cursor": cursor}
        )

    def update_file_member(
        self,
        file: str,
        member: Member,
        access_level: AccessLevel | str,
    ) -> dict[str, Any]:
        """Change a member's access to a shared file."""
        return self._client.rpc_request(
            "/sharing/update_file_member",
            {"file": file, "member": as_params(member), "access_level": tagged(access_level)},
        )

    def remove_file_member(self, file: str, member: Member) -> dict[str, Any]:
        """Remove a member from a shared file."""
        return self._client.rpc_request(
            "/sharing/remove_file_member_2", {"file": file, "member": as_params(member)}
        )

    def relinquish_file_membership(self, file: str) -> dict[str, Any]:
        """Leave a file shared with the current user."""
        return self._client.rpc_request("/sharing/relinquish_file_membership", {"file": file})

    def unshare_file(self, file: str) -> dict[str, Any]:
        """Remove all members from a file."""
        return self._client.rpc_request("/sharing/unshare_file", {"file": file})

    # =========================================================================
    # Shared folders
    # =========================================================================

    def share_folder(
        self,
        path: str,
        acl_update_policy: str | Enum | None = None,
        force_async: bool = False,
        member_policy: str | Enum | None = None,
        shared_link_policy: str | Enum | None = None,
        viewer_info_policy: str | Enum | None = None,
        access_inheritance: str | Enum | None = None,
        actions: Sequence[str] | None = None,
        link_settings: SharedLinkSettings | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Share a folder.

        Args:
            path: Folder path.
            acl_update_policy: "owner" or "editors".
            force_async: Always return an async job ID.
            member_policy: "team" or "anyone".
            shared_link_policy: "anyone", "team" or "members".
            viewer_info_policy: "enabled" or "disabled".
            access_inheritance: "inherit" or "no_inherit".
            actions: Permissions to report in the result.
            link_settings: Settings for the folder's shared link.

        Returns:
            Shared folder metadata, or an async job ID for
            ``check_share_job_status``.
        """
        params: dict[str, Any] = {"path": path, "force_async": force_async}
        if acl_update_policy:
            params["acl_update_policy"] = tagged(acl_update_policy)
        if member_policy:
            params["member_policy"] = tagged(member_policy)
        if shared_link_policy:
            params["shared_link_policy"] = tagged(shared_link_policy)
        if viewer_info_policy:
            params["viewer_info_policy"] = tagged(viewer_info_policy)
        if access_inheritance:
            params["access_inheritance"] = tagged(access_inheritance)
        if actions:
            params["actions"] = tagged_list(actions)
        if link_settings:
            params["link_settings"] = as_params(link_settings)
        return self._client.rpc_request("/sharing/share_folder", params)

    def check_share_job_status(self, async_job_id: str) -> dict[str, Any]:
        """Check the status of a share_folder job."""
        return self._client.rpc_request(
            "/sharing/check_share_job_status", {"async_job_id": async_job_id}
        )

    def check_job_status(self, async_job_id: str) -> dict[str, Any]:
        """Check the status of a member-change or unshare job."""
        return self._client.rpc_request("/sharing/check_job_status", {"async_job_id": async_job_id})

    def get_shared_folder_metadata(
        self,
        shared_folder_id: str,
        actions: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Get metadata for a shared folder by ID."""
        params: dict[str, Any] = {"shared_folder_id": shared_folder_id}
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/get_folder_metadata", params)

    def list_folders(self, limit: int = 100, actions: Sequence[str] | None = None) -> dict[str, Any]:
        """List the shared folders the current user can access."""
        params: dict[str, Any] = {"limit": limit}
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/list_folders", params)

    def list_folders_continue(self, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request("/sharing/list_folders/continue", {"cursor": cursor})

    def list_folder_members(
        self,
        shared_folder_id: str,
        actions: Sequence[str] | None = None,
        limit: int = 100,
    ) -> dict[str, Any]:
        """List the members of a shared folder."""
        params: dict[str, Any] = {"shared_folder_id": shared_folder_id, "limit": limit}
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/list_folder_members", params)

    def list_folder_members_continue(self, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/sharing/list_folder_members/continue", {"cursor": cursor}
        )

    def add_folder_member(
        self,
        shared_folder_id: str,
        members: Sequence[AddMember | Mapping[str, Any]],
        quiet: bool = False,
        custom_message: str | None = None,
    ) -> dict[str, Any]:
        """Invite members to a shared folder.

        Args:
            shared_folder_id: Shared folder ID.
            members: e.g. ``AddMember(MemberSelector.email("a@b.c"), "viewer")``.
            quiet: Don't notify the members.
            custom_message: Message included in the invitation.
        """
        params: dict[str, Any] = {
            "shared_folder_id": shared_folder_id,
            "members": [as_params(member) for member in members],
            "quiet": quiet,
        }
        if custom_message:
            params["custom_message"] = custom_message
        return self._client.rpc_request("/sharing/add_folder_member", params)

    def update_folder_member(
        self,
        shared_folder_id: str,
        member: Member,
        access_level: AccessLevel | str,
    ) -> dict[str, Any]:
        """Change a member's access to a shared folder."""
        return self._client.rpc_request(
            "/sharing/update_folder_member",
            {
                "shared_folder_id": shared_folder_id,
                "member": as_params(member),
                "access_level": tagged(access_level),
            },
        )

    def remove_folder_member(
        self,
        shared_folder_id: str,
        member: Member,
        leave_a_copy: bool = False,
    ) -> dict[str, Any]:
        """Remove a member from a shared folder. Returns an async job ID."""
        return self._client.rpc_request(
            "/sharing/remove_folder_member",
            {
                "shared_folder_id": shared_folder_id,
                "member": as_params(member),
                "leave_a_copy": leave_a_copy,
            },
        )

    def update_folder_policy(
        self,
        shared_folder_id: str,
        member_policy: str | Enum | None = None,
        acl_update_policy: str | Enum | None = None,
        viewer_info_policy: str | Enum | None = None,
        shared_link_policy: str | Enum | None = None,
        link_settings: SharedLinkSettings | Mapping[str, Any] | None = None,
        actions: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Update the sharing policies of a shared folder."""
        params: dict[str, Any] = {"shared_folder_id": shared_folder_id}
        policies = {
            "member_policy": member_policy,
            "acl_update_policy": acl_update_policy,
            "viewer_info_policy": viewer_info_policy,
            "shared_link_policy": shared_link_policy,
        }
        for key, value in policies.items():
            if value is not None:
                params[key] = _policy(value)
        if link_settings is not None:
            params["link_settings"] = as_params(link_settings)
        if actions:
            params["actions"] = tagged_list(actions)
        return self._client.rpc_request("/sharing/update_folder_policy", params)

    def mount_folder(self, shared_folder_id: str) -> dict[str, Any]:
        """Add a shared folder to the user's Dropbox."""
        return self._client.rpc_request(
            "/sharing/mount_folder", {"shared_folder_id": shared_folder_id}
        )

    def unmount_folder(self, shared_folder_id: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/sharing/unmount_folder", {"shared_folder_id": shared_folder_id}
        )

    def relinquish_folder_membership(
        self,
        shared_folder_id: str,
        leave_a_copy: bool = False,
    ) -> dict[str, Any]:
        """Leave a shared folder."""
        return self._client.rpc_request(
            "/sharing/relinquish_folder_membership",
            {"shared_folder_id": shared_folder_id, "leave_a_copy": leave_a_copy},
        )

    def transfer_folder(self, shared_folder_id: str, to_dropbox_id: str) -> dict[str, Any]:
        """Transfer ownership of a shared folder."""
        return self._client.rpc_request(
            "/sharing/transfer_folder",
            {"shared_folder_id": shared_folder_id, "to_dropbox_id": to_dropbox_id},
        )

    def unshare_folder(self, shared_folder_id: str, leave_a_copy: bool = False) -> dict[str, Any]:
        """Stop sharing a folder. Returns an async job ID."""
        return self._client.rpc_request(
            "/sharing/unshare_folder",
            {"shared_folder_id": shared_folder_id, "leave_a_copy": leave_a_copy},
        )
