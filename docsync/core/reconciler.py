"""Reconciliation of local files against remote documents.

A local file and a remote document are the same item when the document title
equals the file's display name and the document carries exactly the tags of
the signature. The pass produces three kinds of actions:

- ``CreateDocument`` for a local file with no matching document,
- ``UploadFile`` for a matching document that has no file attached,
- ``DeleteDocument`` for a document whose title no local file carries.

The delete check compares titles only. A document with the right title but
different tags is therefore never reused for upload and never deleted; the
local file gets a fresh document next to it.

When several documents match one file, the last one listed wins. Duplicates
are not detected.

The pass is pure: it reads one snapshot of both sides and does not look at
the effect of its own actions.
"""

from collections.abc import Iterable

from ..models.documents import (
    CreateDocument,
    DeleteDocument,
    LocalFile,
    RemoteDocument,
    SyncAction,
    SyncPlan,
    UploadFile,
)


class Reconciler:
    """Computes sync plans against a fixed tag signature."""

    def __init__(self, signature: Iterable[str]) -> None:
        """Initialize reconciler.

        Args:
            signature: Tag ids a document must carry exactly; sorted here
        """
        self.signature = tuple(sorted(signature))

    def find_match(
        self,
        local_file: LocalFile,
        documents: list[RemoteDocument],
    ) -> RemoteDocument | None:
        """Return the last document matching the file by title and tags."""
        match = None
        for doc in documents:
            if doc.matches(local_file.display_name, self.signature):
                match = doc
        return match

    def plan(
        self,
        local_files: Iterable[LocalFile],
        documents: Iterable[RemoteDocument],
    ) -> SyncPlan:
        """Compute the actions for one reconciliation pass.

        Args:
            local_files: Files found under the import root, in scan order
            documents: Remote document snapshot, in listing order

        Returns:
            SyncPlan with create/upload actions first, then deletions
        """
        local_files = list(local_files)
        documents = list(documents)
        plan = SyncPlan()

        for local_file in local_files:
            doc = self.find_match(local_file, documents)
            if doc is None:
                plan.actions.append(CreateDocument(local_file.display_name, local_file.path))
            elif not doc.has_file:
                plan.actions.append(UploadFile(doc.id, local_file.path, local_file.display_name))
            else:
                plan.skipped.append((local_file, doc.id))

        local_names = {local_file.display_name for local_file in local_files}
        for doc in documents:
            if doc.title not in local_names:
                plan.actions.append(DeleteDocument(doc.id, doc.title))

        return plan


def reconcile(
    local_files: Iterable[LocalFile],
    documents: Iterable[RemoteDocument],
    signature: Iterable[str],
) -> list[SyncAction]:
    """Compute the ordered action list for one reconciliation pass."""
    return Reconciler(signature).plan(local_files, documents).actions
