"""Request and response models for the Dropbox API.

Dropbox encodes enumerated choices as tagged unions: ``{".tag": "viewer"}``.
The enums below list the common choices; every method that accepts one also
accepts the plain string. ``tagged`` is the one place that builds the wire
form.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TAG = ".tag"


def tag_value(value: str | Enum) -> str:
    """Get the wire string for an enum member or plain string."""
    if isinstance(value, Enum):
        return value.value
    return value


def tagged(value: str | Enum, **fields: Any) -> dict[str, Any]:
    """Wrap a choice as a tagged-union object, with optional variant fields."""
    return {TAG: tag_value(value), **fields}


def tagged_list(values: Iterable[str | Enum]) -> list[dict[str, Any]]:
    """Wrap every choice in ``values`` as a tagged-union object."""
    return [tagged(value) for value in values]


def as_params(value: Any) -> Any:
    """Convert an option record (or mapping) into request parameters."""
    if value is None:
        return None
    if hasattr(value, "to_params"):
        return value.to_params()
    if isinstance(value, Mapping):
        return dict(value)
    return value


# =============================================================================
# Choices
# =============================================================================


class AccessLevel(str, Enum):
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"
    VIEWER_NO_COMMENT = "viewer_no_comment"
    TRAVERSE = "traverse"
    NO_ACCESS = "no_access"


class WriteMode(str, Enum):
    ADD = "add"
    OVERWRITE = "overwrite"
    UPDATE = "update"


class SearchOrderBy(str, Enum):
    RELEVANCE = "relevance"
    LAST_MODIFIED_TIME = "last_modified_time"


class FileStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class FileCategory(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    PDF = "pdf"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    AUDIO = "audio"
    VIDEO = "video"
    FOLDER = "folder"
    PAPER = "paper"
    OTHERS = "others"


class ThumbnailFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"


class ThumbnailSize(str, Enum):
    W32H32 = "w32h32"
    W64H64 = "w64h64"
    W128H128 = "w128h128"
    W256H256 = "w256h256"
    W480H320 = "w480h320"
    W640H480 = "w640h480"
    W960H640 = "w960h640"
    W1024H768 = "w1024h768"
    W2048H1536 = "w2048h1536"


class ThumbnailMode(str, Enum):
    STRICT = "strict"
    BESTFIT = "bestfit"
    FITONE_BESTFIT = "fitone_bestfit"


class ImportFormat(str, Enum):
    HTML = "html"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"
    OTHER = "other"


class ExportFormat(str, Enum):
    HTML = "html"
    MARKDOWN = "markdown"


class DocUpdatePolicy(str, Enum):
    APPEND = "append"
    PREPEND = "prepend"
    OVERWRITE_ALL = "overwrite_all"


class PaperDocsFilterBy(str, Enum):
    DOCS_ACCESSED = "docs_accessed"
    DOCS_CREATED = "docs_created"


class PaperDocsSortBy(str, Enum):
    ACCESSED = "accessed"
    MODIFIED = "modified"
    CREATED = "created"


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class RequestedVisibility(str, Enum):
    PUBLIC = "public"
    TEAM_ONLY = "team_only"
    PASSWORD = "password"


class LinkAudience(str, Enum):
    PUBLIC = "public"
    TEAM = "team"
    NO_ONE = "no_one"
    PASSWORD = "password"
    MEMBERS = "members"


class LinkAccessLevel(str, Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    MAX = "max"


# =============================================================================
# Option records
# =============================================================================


@dataclass
class SharedLinkSettings:
    """Settings for creating or modifying a shared link."""

    requested_visibility: RequestedVisibility | str | None = None
    link_password: str | None = None
    expires: str | None = None  # ISO 8601, e.g. "2030-01-01T00:00:00Z"
    audience: LinkAudience | str | None = None
    access: LinkAccessLevel | str | None = None
    allow_download: bool | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.requested_visibility is not None:
            params["requested_visibility"] = tagged(self.requested_visibility)
        if self.link_password is not None:
            params["link_password"] = self.link_password
        if self.expires is not None:
            params["expires"] = self.expires
        if self.audience is not None:
            params["audience"] = tagged(self.audience)
        if self.access is not None:
            params["access"] = tagged(self.access)
        if self.allow_download is not None:
            params["allow_download"] = self.allow_download
        return params


@dataclass
class CommitInfo:
    """Where and how an uploaded file is committed.

    ``rev`` is only used with ``WriteMode.UPDATE``; it names the revision
    the upload is expected to replace. Update mode without ``rev``
    raises ValueError.
    """

    path: str
    mode: WriteMode | str = WriteMode.ADD
    autorename: bool = False
    client_modified: str | None = None
    mute: bool = False
    strict_conflict: bool = False
    rev: str | None = None

    def to_params(self) -> dict[str, Any]:
        if tag_value(self.mode) == WriteMode.UPDATE.value:
            if not self.rev:
                raise ValueError("rev is required for update mode")
            mode = tagged(self.mode, update=self.rev)
        else:
            mode = tagged(self.mode)

        params: dict[str, Any] = {
            "path": self.path,
            "mode": mode,
            "autorename": self.autorename,
            "mute": self.mute,
            "strict_conflict": self.strict_conflict,
        }
        if self.client_modified is not None:
            params["client_modified"] = self.client_modified
        return params


@dataclass
class UploadSessionCursor:
    """Position within an upload session."""

    session_id: str
    offset: int

    def to_params(self) -> dict[str, Any]:
        return {"session_id": self.session_id, "offset": self.offset}


@dataclass
class RelocationPath:
    """A source/destination pair for batch copy and move."""

    from_path: str
    to_path: str

    def to_params(self) -> dict[str, Any]:
        return {"from_path": self.from_path, "to_path": self.to_path}


@dataclass
class MemberSelector:
    """Identifies a sharing member by email or Dropbox ID."""

    kind: str
    value: str

    @classmethod
    def email(cls, address: str) -> MemberSelector:
        return cls("email", address)

    @classmethod
    def dropbox_id(cls, dropbox_id: str) -> MemberSelector:
        return cls("dropbox_id", dropbox_id)

    def to_params(self) -> dict[str, Any]:
        return tagged(self.kind, **{self.kind: self.value})


@dataclass
class AddMember:
    """A member to add to a shared folder."""

    member: MemberSelector | Mapping[str, Any]
    access_level: AccessLevel | str = AccessLevel.EDITOR

    def to_params(self) -> dict[str, Any]:
        return {
            "member": as_params(self.member),
            "access_level": tagged(self.access_level),
        }


# =============================================================================
# Responses
# =============================================================================


@dataclass
class DownloadResult:
    """Raw content and metadata returned by a content-download endpoint."""

    content: bytes
    metadata: dict[str, Any] = field(default_factory=dict)
