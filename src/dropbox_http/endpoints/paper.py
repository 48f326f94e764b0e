"""Paper endpoints: collaborative documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from dropbox_http.endpoints.base import Endpoint
from dropbox_http.models import (
    DocUpdatePolicy,
    DownloadResult,
    ExportFormat,
    ImportFormat,
    MemberSelector,
    PaperDocsFilterBy,
    PaperDocsSortBy,
    SortOrder,
    as_params,
    tagged,
)


class Paper(Endpoint):
    """Paper document operations (``/paper/docs/*``)."""

    def docs_create(
        self,
        content: bytes,
        import_format: ImportFormat | str = ImportFormat.HTML,
        parent_folder_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a Paper doc from ``content``.

        Args:
            content: Document body in ``import_format``.
            import_format: html, markdown, plain_text or other.
            parent_folder_id: Paper folder to create the doc in.

        Returns:
            "doc_id", "revision" and "title" of the new doc.
        """
        params: dict[str, Any] = {"import_format": tagged(import_format)}
        if parent_folder_id:
            params["parent_folder_id"] = parent_folder_id
        return self._client.content_upload_request("/paper/docs/create", content, params)

    def docs_download(
        self,
        doc_id: str,
        export_format: ExportFormat | str = ExportFormat.HTML,
    ) -> DownloadResult:
        """Export a Paper doc as HTML or Markdown."""
        return self._client.content_download_request(
            "/paper/docs/download",
            {"doc_id": doc_id, "export_format": tagged(export_format)},
        )

    def docs_get_metadata(self, doc_id: str) -> dict[str, Any]:
        return self._client.rpc_request("/paper/docs/get_metadata", {"doc_id": doc_id})

    def docs_list(
        self,
        filter_by: PaperDocsFilterBy | str = PaperDocsFilterBy.DOCS_ACCESSED,
        sort_by: PaperDocsSortBy | str = PaperDocsSortBy.ACCESSED,
        sort_order: SortOrder | str = SortOrder.DESCENDING,
        limit: int = 100,
    ) -> dict[str, Any]:
        """List Paper docs the user has accessed or created."""
        return self._client.rpc_request(
            "/paper/docs/list",
            {
                "filter_by": tagged(filter_by),
                "sort_by": tagged(sort_by),
                "sort_order": tagged(sort_order),
                "limit": limit,
            },
        )

    def docs_list_continue(self, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request("/paper/docs/list/continue", {"cursor": cursor})

    def docs_permanently_delete(self, doc_id: str) -> dict[str, Any]:
        return self._client.rpc_request("/paper/docs/permanently_delete", {"doc_id": doc_id})

    def docs_update(
        self,
        doc_id: str,
        content: bytes,
        import_format: ImportFormat | str = ImportFormat.HTML,
        doc_update_policy: DocUpdatePolicy | str = DocUpdatePolicy.APPEND,
        revision: int = 1,
    ) -> dict[str, Any]:
        """Update a Paper doc.

        Args:
            doc_id: Doc to update.
            content: New content in ``import_format``.
            import_format: html, markdown, plain_text or other.
            doc_update_policy: append, prepend or overwrite_all.
            revision: Latest known revision; stale revisions are rejected.
        """
        return self._client.content_upload_request(
            "/paper/docs/update",
            content,
            {
                "doc_id": doc_id,
                "import_format": tagged(import_format),
                "doc_update_policy": tagged(doc_update_policy),
                "revision": revision,
            },
        )

    def docs_users_add(
        self,
        doc_id: str,
        members: Sequence[MemberSelector | Mapping[str, Any]],
        custom_message: str | None = None,
        quiet: bool = False,
        permission_level: str = "edit",
    ) -> list[dict[str, Any]]:
        """Share a Paper doc with members.

        MemberSelector entries get ``permission_level``; mappings are sent
        as given (``{"member": ..., "permission_level": ...}``).
        """
        entries = []
        for member in members:
            if isinstance(member, MemberSelector):
                entries.append(
                    {"member": member.to_params(), "permission_level": tagged(permission_level)}
                )
            else:
                entries.append(dict(member))

        params: dict[str, Any] = {"doc_id": doc_id, "members": entries, "quiet": quiet}
        if custom_message:
            params["custom_message"] = custom_message
        return self._client.rpc_request("/paper/docs/users/add", params)

    def docs_users_list(self, doc_id: str, limit: int = 100) -> dict[str, Any]:
        """List the users a Paper doc is shared with."""
        return self._client.rpc_request(
            "/paper/docs/users/list", {"doc_id": doc_id, "limit": limit}
        )

    def docs_users_list_continue(self, doc_id: str, cursor: str) -> dict[str, Any]:
        return self._client.rpc_request(
            "/paper/docs/users/list/continue", {"doc_id": doc_id, "cursor": cursor}
        )

    def docs_users_remove(
        self,
        doc_id: str,
        member: MemberSelector | Mapping[str, Any],
    ) -> dict[str, Any]:
        """Stop sharing a Paper doc with a member."""
        return self._client.rpc_request(
            "/paper/docs/users/remove", {"doc_id": doc_id, "member": as_params(member)}
        )
