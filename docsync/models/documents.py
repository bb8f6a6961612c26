"""Data models for local files, remote documents and reconciliation actions."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union


@dataclass(frozen=True)
class LocalFile:
    """A candidate file found under the import root."""

    path: Path
    display_name: str  # Basename without its final extension


@dataclass(frozen=True)
class Tag:
    """A single entry of the remote tag catalog."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tag":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
        )


@dataclass(frozen=True)
class RemoteDocument:
    """A document as listed by the remote service.

    The service owns these; the sync only reads them and requests mutations.
    """

    id: str
    title: str
    tag_ids: tuple[str, ...] = ()
    file_count: int = 0

    @property
    def has_file(self) -> bool:
        """True if at least one file is attached to the document."""
        return self.file_count > 0

    def matches(self, display_name: str, signature: tuple[str, ...]) -> bool:
        """Check title equality and exact tag-set equality with a signature."""
        return self.title == display_name and tuple(sorted(self.tag_ids)) == signature

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteDocument":
        """Create from a document listing entry.

        Tags arrive as objects (``{"id": ..., "name": ..., "color": ...}``);
        only their ids are kept.
        """
        tag_ids = tuple(str(tag["id"]) for tag in data.get("tags") or [])
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            tag_ids=tag_ids,
            file_count=int(data.get("file_count") or 0),
        )


# ---------------------------------------------------------------------------
# Reconciliation actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateDocument:
    """Create a document for a local file, then upload the file into it."""

    display_name: str
    local_path: Path


@dataclass(frozen=True)
class UploadFile:
    """Attach a local file to an existing document that has no file yet."""

    document_id: str
    local_path: Path
    display_name: str


@dataclass(frozen=True)
class DeleteDocument:
    """Delete a remote document that has no local counterpart."""

    document_id: str
    title: str = ""


SyncAction = Union[CreateDocument, UploadFile, DeleteDocument]


@dataclass
class SyncPlan:
    """Outcome of one reconciliation pass."""

    actions: list[SyncAction] = field(default_factory=list)
    skipped: list[tuple[LocalFile, str]] = field(default_factory=list)  # (file, document id)

    @property
    def creates(self) -> list[CreateDocument]:
        return [a for a in self.actions if isinstance(a, CreateDocument)]

    @property
    def uploads(self) -> list[UploadFile]:
        return [a for a in self.actions if isinstance(a, UploadFile)]

    @property
    def deletes(self) -> list[DeleteDocument]:
        return [a for a in self.actions if isinstance(a, DeleteDocument)]

    @property
    def is_empty(self) -> bool:
        return not self.actions
