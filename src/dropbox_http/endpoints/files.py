"""Files endpoints: upload, download, listing, search and file management."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from dropbox_http.endpoints.base import Endpoint
from dropbox_http.models import (
    CommitInfo,
    DownloadResult,
    FileCategory,
    FileStatus,
    RelocationPath,
    SearchOrderBy,
    ThumbnailFormat,
    ThumbnailMode,
    ThumbnailSize,
    UploadSessionCursor,
    WriteMode,
    as_params,
    tagged,
    tagged_list,
)


class Files(Endpoint):
    """File and folder operations (``/files/*``).

    Listing and search are paginated by cursor: call ``list_folder`` (or
    ``search``) once, then ``*_continue`` with the returned ``cursor`` while
    ``has_more`` is true. Batch operations may return an ``async_job_id``;
    poll the matching ``*_check`` method with it.
    """

    # =========================================================================
    # Copy / move / delete
    # =========================================================================

    def copy(
        self,
        from_path: str,
        to_path: str,
        autorename: bool = False,
        allow_ownership_transfer: bool = False,
    ) -> dict[str, Any]:
        """Copy a file or folder to a different location.

        Args:
            from_path: Source path.
            to_path: Destination path.
            autorename: Rename the copy if the destination exists.
            allow_ownership_transfer: Allow copies that change ownership.

        Returns:
            Metadata of the copy.
        """
        return self._client.rpc_request(
            "/files/copy_v2",
            {
                "from_path": from_path,
                "to_path": to_path,
                "autorename": autorename,
                "allow_ownership_transfer": allow_ownership_transfer,
            },
        )

    def copy_batch(
        self,
        entries: Sequence[RelocationPath | Mapping[str, Any]],
        autorename: bool = False,
        allow_ownership_transfer: bool = False,
    ) -> dict[str, Any]:
        """Copy several files or folders. May return an async job ID."""
        return self._client.rpc_request(
            "/files/copy_batch_v2",
            {
                "entries": [as_params(entry) for entry in entries],
                "autorename": autorename,
                "allow_ownership_transfer": allow_ownership_transfer,
            },
        )

    def copy_batch_check(self, async_job_id: str) -> dict[str, Any]:
        """Check the status of a copy_batch job."""
        return self._client.rpc_request(
            "/files/copy_batch/check_v2", {"async_job_id": async_job_id}
        )

    def move(
        self,
        from_path: str,
        to_path: str,
        autorename: bool = False,
        allow_shared_folder: bool = False,
        allow_ownership_transfer: bool = False,
    ) -> dict[str, Any]:
        """Move a file or folder to a different location.

        Args:
            from_path: Source path.
            to_path: Destination path.
            autorename: Rename if the destination exists.
            allow_shared_folder: Allow moving shared folders.
            allow_ownership_transfer: Allow moves that change ownership.

        Returns:
            Metadata of the moved item.
        """
        return self._client.rpc_request(
            "/files/move_v2",
            {
                "from_path": from_path,
                "to_path": to_path,
                "autorename": autorename,
                "allow_shared_folder": allow_shared_folder,
                "allow_ownership_transfer": allow_ownership_transfer,
            },
        )

    def move_batch(
        self,
        entries: Sequence[RelocationPath | Mapping[str, Any]],
        autorename: bool = False,
        allow_ownership_transfer: bool = False,
    ) -> dict[str, Any]:
        """Move several files or folders. May return an async job ID."""
        return self._client.rpc_request(
            "/files/move_batch_v2",
            {
                "entries": [as_params(entry) for entry in entries],
                "autorename": autorename,
                "allow_ownership_transfer": allow_ownership_transfer,
            },
        )

    def delete(self, path: str) -> dict[str, Any]:
        """Delete a file or folder."""
        return self._client.rpc_request("/files/delete_v2", {"path": path})

    def delete_batch(self, paths: Sequence[str]) -> dict[str, Any]:
        """Delete several files or folders. May return an async job ID.

        Args:
            paths: Paths to delete.
        """
        return self._client.rpc_request(
            "/files/delete_batch",
            {"entries": [{"path": path} for path in paths]},
        )

    def permanently_delete(self, path: str) -> dict[str, Any]:
        return self._client.rpc_request("/files/permanently_delete", {"path": path})

    def restore(self, path: str, rev: str) -> dict[str, Any]:
        """Restore a file to a previous revision."""
        return self._client.rpc_request("/files/restore", {"path": path, "rev": rev})

    # =========================================================================
    # Folders
    # =========================================================================

    def create_folder(self, path: str, autorename: bool = False) -> dict[str, Any]:
        """Create a folder."""
        return self._client.rpc_request(
            "/files/create_folder_v2", {"path": path, "autorename": autorename}
        )

    def create_folder_batch(
        self,
        paths: Sequence[str],
        autorename: bool = False,
        force_async: bool = False,
    ) -> dict[str, Any]:
        """Create several folders at once."""
        return self._client.rpc_request(
            "/files/create_folder_batch",
            {"paths": list(paths), "autorename": autorename, "force_async": force_async},
        )

    def list_folder(
        self,
        path: str = "",
        recursive: bool = False,
        include_media_info: bool = False,
        include_deleted: bool = False,
        include_has_explicit_shared_members: bool = False,
        include_mounted_folders: bool = True,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List the contents of a folder.

        Args:
            path: Folder path; "" is the root.
            recursive: Include the contents of subfolders.
            include_media_info: Include photo/video metadata.
            include_deleted: Include deleted entries.
            include_has_explicit_shared_members: Flag entries with explicit members.
            include_mounted_folders: Include mounted shared folders.
            limit: Approximate maximum number of entries per page.

        Returns:
            Page with "entries", "cursor" and "has_more".
        """
        params: dict[str, Any] = {
            "path": path,
            "recursive": recursive,
            "include_media_info": include_media_info,
            "include_deleted": include_deleted,
            "include_has_explicit_shared_members": include_has_explicit_shared_members,
            "include_mounted_folders": include_mounted_folders,
        }
        if limit is not None:
            params["limit"] = limit
        return self._client.rpc_request("/files/list_folder", params)

    def list_folder_continue(self, cursor: str) -> dict[str, Any]:
        """Get the next page of a folder listing."""
        return self._client.rpc_request("/files/list_folder/continue", {"cursor": cursor})

    def list_folder_get_latest_cursor(self, path: str = "", recursive: bool = False) -> dict[str, Any]:
        """Get a cursor for the current state of a folder, without its entries."""
        return self._client.rpc_request(
            "/files/list_folder/get_latest_cursor", {"path": path, "recursive": recursive}
        )

    def list_folder_longpoll(self, cursor: str, timeout: int = 30) -> dict[str, Any]:
        """Wait up to ``timeout`` seconds for changes under a cursor."""
        return self._client.rpc_request(
            "/files/list_folder/longpoll", {"cursor": cursor, "timeout": timeout}
        )

    # =========================================================================
    # Metadata / revisions / search
    # =========================================================================

    def get_metadata(
        self,
        path: str,
        include_media_info: bool = False,
        include_deleted: bool = False,
        include_has_explicit_shared_members: bool = False,
    ) -> dict[str, Any]:
        """Get metadata for a file or folder."""
        return self._client.rpc_request(
            "/files/get_metadata",
            {
                "path": path,
                "include_media_info": include_media_info,
                "include_deleted": include_deleted,
                "include_has_explicit_shared_members": include_has_explicit_shared_members,
            },
        )

    def list_revisions(self, path: str, mode: str = "path", limit: int = 10) -> dict[str, Any]:
        """List revisions of a file ("path" or "id" mode)."""
        return self._client.rpc_request(
            "/files/list_revisions",
            {"path": path, "mode": tagged(mode), "limit": limit},
        )

    def search(
        self,
        query: str,
        path: str | None = None,
        max_results: int | None = 100,
        order_by: SearchOrderBy | str | None = SearchOrderBy.RELEVANCE,
        file_status: FileStatus | str | None = FileStatus.ACTIVE,
        filename_only: bool | None = None,
        file_extensions: Sequence[str] | None = None,
        file_categories: Sequence[FileCategory | str] | None = None,
    ) -> dict[str, Any]:
        """Search for files and folders.

        Args:
            query: Search string.
            path: Restrict the search to this folder.
            max_results: Maximum number of matches per page.
            order_by: Sort order of matches.
            file_status: Search active or deleted files.
            filename_only: Match file names only, not content.
            file_extensions: Restrict to these extensions (e.g. ["jpg", "png"]).
            file_categories: Restrict to these categories.

        Returns:
            Page with "matches", "has_more" and, when more, "cursor".
        """
        options: dict[str, Any] = {}
        if path:
            options["path"] = path
        if max_results:
            options["max_results"] = max_results
        if order_by:
            options["order_by"] = tagged(order_by)
        if file_status:
            options["file_status"] = tagged(file_status)
        if filename_only is not None:
            options["filename_only"] = filename_only
        if file_extensions:
            options["file_extensions"] = list(file_extensions)
        if file_categories:
            options["file_categories"] = tagged_list(file_categories)

        return self._client.rpc_request("/files/search_v2", {"query": query, "options": options})

    def search_continue(self, cursor: str) -> dict[str, Any]:
        """Get the next page of search results."""
        return self._client.rpc_request("/files/search/continue_v2", {"cursor": cursor})

    # =========================================================================
    # Copy references / links / save_url
    # =========================================================================

    def get_copy_reference(self, path: str) -> dict[str, Any]:
        """Get a reference that another account can use to save a copy."""
        return self._client.rpc_request("/files/copy_reference/get", {"path": path})

    def save_copy_reference(self, copy_reference: str, path: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/files/copy_reference/save", {"copy_reference": copy_reference, "path": path}
        )

    def get_temporary_link(self, path: str) -> dict[str, Any]:
        """Get a four-hour link to stream a file's content."""
        return self._client.rpc_request("/files/get_temporary_link", {"path": path})

    def get_temporary_upload_link(
        self,
        commit_info: CommitInfo | Mapping[str, Any],
        duration: int = 14400,
    ) -> dict[str, Any]:
        """Get a one-time link that uploads a file to ``commit_info``."""
        return self._client.rpc_request(
            "/files/get_temporary_upload_link",
            {"commit_info": as_params(commit_info), "duration": duration},
        )

    def save_url(self, path: str, url: str) -> dict[str, Any]:
        """Save the file at ``url`` to ``path``. Returns an async job ID."""
        return self._client.rpc_request("/files/save_url", {"path": path, "url": url})

    def save_url_check_job_status(self, async_job_id: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/files/save_url/check_job_status", {"async_job_id": async_job_id}
        )

    # =========================================================================
    # Downloads
    # =========================================================================

    def download(self, path: str, rev: str | None = None) -> DownloadResult:
        """Download a file.

        Args:
            path: File path.
            rev: Specific revision to download.

        Returns:
            DownloadResult with the file bytes and its metadata.
        """
        params: dict[str, Any] = {"path": path}
        if rev:
            params["rev"] = rev
        return self._client.content_download_request("/files/download", params)

    def download_zip(self, path: str) -> DownloadResult:
        """Download a folder as a zip archive."""
        return self._client.content_download_request("/files/download_zip", {"path": path})

    def export(self, path: str, export_format: str | None = None) -> DownloadResult:
        """Export a file that cannot be downloaded directly (e.g. Paper docs)."""
        params: dict[str, Any] = {"path": path}
        if export_format:
            params["export_format"] = export_format
        return self._client.content_download_request("/files/export", params)

    def get_preview(self, path: str, rev: str | None = None) -> DownloadResult:
        """Get a PDF or HTML preview of a file."""
        params: dict[str, Any] = {"path": path}
        if rev:
            params["rev"] = rev
        return self._client.content_download_request("/files/get_preview", params)

    def get_thumbnail(
        self,
        path: str,
        format: ThumbnailFormat | str = ThumbnailFormat.JPEG,
        size: ThumbnailSize | str = ThumbnailSize.W64H64,
        mode: ThumbnailMode | str = ThumbnailMode.STRICT,
    ) -> DownloadResult:
        """Get a thumbnail for an image file."""
        return self._client.content_download_request(
            "/files/get_thumbnail_v2",
            {
                "resource": tagged("path", path=path),
                "format": tagged(format),
                "size": tagged(size),
                "mode": tagged(mode),
            },
        )

    def get_thumbnail_batch(self, entries: Sequence[str | Mapping[str, Any]]) -> dict[str, Any]:
        """Get thumbnails for up to 25 files.

        Args:
            entries: Paths, or ThumbnailArg mappings with "path", "format",
                "size" and "mode".

        Returns:
            Result with base64 thumbnails in "entries".
        """
        return self._client.rpc_request(
            "/files/get_thumbnail_batch",
            {
                "entries": [
                    {"path": entry} if isinstance(entry, str) else dict(entry) for entry in entries
                ]
            },
        )

    # =========================================================================
    # Uploads
    # =========================================================================

    def upload(
        self,
        path: str,
        content: bytes,
        mode: WriteMode | str = WriteMode.ADD,
        autorename: bool = False,
        mute: bool = False,
        strict_conflict: bool = False,
        rev: str | None = None,
        client_modified: str | None = None,
    ) -> dict[str, Any]:
        """Upload a file of up to 150 MB.

        Args:
            path: Destination path.
            content: File bytes.
            mode: add, overwrite, or update (with ``rev``).
            autorename: Rename on conflict instead of failing.
            mute: Don't notify the user's devices.
            strict_conflict: Treat identical content as a conflict.
            rev: Revision to replace in update mode.
            client_modified: Client-side modification time (ISO 8601).

        Returns:
            Metadata of the uploaded file.

        Raises:
            ValueError: If mode is update and no rev is given.
        """
        commit = CommitInfo(
            path=path,
            mode=mode,
            autorename=autorename,
            client_modified=client_modified,
            mute=mute,
            strict_conflict=strict_conflict,
            rev=rev,
        )
        return self._client.content_upload_request("/files/upload", content, commit.to_params())

    def upload_session_start(self, content: bytes, close: bool = False) -> dict[str, Any]:
        """Start an upload session for a large file. Returns a session_id."""
        return self._client.content_upload_request(
            "/files/upload_session/start", content, {"close": close}
        )

    def upload_session_append(
        self,
        session_id: str,
        offset: int,
        content: bytes,
        close: bool = False,
    ) -> dict[str, Any]:
        """Append a chunk to an upload session at ``offset``."""
        return self._client.content_upload_request(
            "/files/upload_session/append_v2",
            content,
            {"cursor": UploadSessionCursor(session_id, offset).to_params(), "close": close},
        )

    def upload_session_finish(
        self,
        session_id: str,
        offset: int,
        content: bytes,
        commit: CommitInfo | Mapping[str, Any],
    ) -> dict[str, Any]:
        """Upload the last chunk and commit the session to a file."""
        return self._client.content_upload_request(
            "/files/upload_session/finish",
            content,
            {
                "cursor": UploadSessionCursor(session_id, offset).to_params(),
                "commit": as_params(commit),
            },
        )

    def upload_session_finish_batch(self, entries: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
        """Commit several closed sessions at once. Returns an async job ID.

        Args:
            entries: Mappings with "cursor" and "commit"; values may be
                UploadSessionCursor / CommitInfo records.
        """
        return self._client.rpc_request(
            "/files/upload_session/finish_batch",
            {
                "entries": [
                    {key: as_params(value) for key, value in entry.items()} for entry in entries
                ]
            },
        )

    def upload_session_finish_batch_check(self, async_job_id: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/files/upload_session/finish_batch/check", {"async_job_id": async_job_id}
        )
