"""Tests for the reconciliation pass."""

from pathlib import Path

from docsync.core.reconciler import Reconciler, reconcile
from docsync.core.scanner import display_name
from docsync.models.documents import (
    CreateDocument,
    DeleteDocument,
    LocalFile,
    RemoteDocument,
    UploadFile,
)


def local(path: str) -> LocalFile:
    return LocalFile(path=Path(path), display_name=display_name(path))


def doc(id: str, title: str, tags: tuple[str, ...] = (), file_count: int = 0) -> RemoteDocument:
    return RemoteDocument(id=id, title=title, tag_ids=tags, file_count=file_count)


class TestReconcileScenarios:
    """End-to-end scenarios of a single pass."""

    def test_new_file_is_created(self) -> None:
        invoice = local("/import/invoice.pdf")

        actions = reconcile([invoice], [], ("t1", "t2"))

        assert actions == [CreateDocument("invoice", invoice.path)]

    def test_matching_document_without_file_gets_upload(self) -> None:
        invoice = local("/import/invoice.pdf")
        remote = doc("5", "invoice", ("t1", "t2"), file_count=0)

        actions = reconcile([invoice], [remote], ("t1", "t2"))

        assert actions == [UploadFile("5", invoice.path, "invoice")]

    def test_orphan_document_is_deleted(self) -> None:
        remote = doc("5", "orphan", ("t1",), file_count=1)

        actions = reconcile([], [remote], ("t1",))

        assert actions == [DeleteDocument("5", "orphan")]

    def test_synced_document_is_skipped(self) -> None:
        invoice = local("/import/invoice.pdf")
        remote = doc("5", "invoice", ("t1",), file_count=3)

        plan = Reconciler(("t1",)).plan([invoice], [remote])

        assert plan.actions == []
        assert plan.skipped == [(invoice, "5")]

    def test_upload_keeps_percent_in_display_name(self) -> None:
        report = local("/import/100%.pdf")
        remote = doc("7", "100%", ())

        actions = reconcile([report], [remote], ())

        assert actions == [UploadFile("7", report.path, "100%")]

    def test_creates_come_before_deletes(self) -> None:
        a = local("/import/a.txt")
        remote = doc("9", "gone", ())

        actions = reconcile([a], [remote], ())

        assert actions == [CreateDocument("a", a.path), DeleteDocument("9", "gone")]


class TestTagMatching:
    """Tag signature must equal the document's tag set exactly."""

    def test_tag_order_on_document_does_not_matter(self) -> None:
        a = local("/import/a.txt")
        remote = doc("1", "a", ("t2", "t1"), file_count=1)

        assert reconcile([a], [remote], ("t1", "t2")) == []

    def test_extra_document_tag_prevents_match(self) -> None:
        a = local("/import/a.txt")
        remote = doc("1", "a", ("t1", "t2", "t3"), file_count=1)

        assert reconcile([a], [remote], ("t1", "t2")) == [CreateDocument("a", a.path)]

    def test_missing_document_tag_prevents_match(self) -> None:
        a = local("/import/a.txt")
        remote = doc("1", "a", ("t1",), file_count=1)

        assert reconcile([a], [remote], ("t1", "t2")) == [CreateDocument("a", a.path)]

    def test_empty_signature_matches_only_untagged_documents(self) -> None:
        a = local("/import/a.txt")
        b = local("/import/b.txt")
        untagged = doc("1", "a", (), file_count=1)
        tagged = doc("2", "b", ("t1",), file_count=1)

        actions = reconcile([a, b], [untagged, tagged], ())

        assert actions == [CreateDocument("b", b.path)]

    def test_unsorted_signature_is_normalized(self) -> None:
        a = local("/import/a.txt")
        remote = doc("1", "a", ("t1", "t2"), file_count=1)

        assert reconcile([a], [remote], ("t2", "t1")) == []


class TestKnownQuirks:
    """Behaviour kept as-is even though it looks unintended."""

    def test_quirk_title_match_with_wrong_tags_is_neither_reused_nor_deleted(self) -> None:
        # Create/upload matching is tag-aware, delete protection is title-only:
        # the mistagged document survives and a second "a" document is created.
        a = local("/import/a.txt")
        mistagged = doc("1", "a", ("wrong",), file_count=1)

        actions = reconcile([a], [mistagged], ("t1",))

        assert actions == [CreateDocument("a", a.path)]

    def test_quirk_last_matching_duplicate_wins(self) -> None:
        # Duplicates sharing title and tags are not detected.
        a = local("/import/a.txt")
        first = doc("1", "a", ("t1",), file_count=1)
        second = doc("2", "a", ("t1",), file_count=0)

        actions = reconcile([a], [first, second], ("t1",))

        assert actions == [UploadFile("2", a.path, "a")]

    def test_quirk_last_duplicate_with_file_hides_earlier_empty_one(self) -> None:
        a = local("/import/a.txt")
        first = doc("1", "a", ("t1",), file_count=0)
        second = doc("2", "a", ("t1",), file_count=1)

        assert reconcile([a], [first, second], ("t1",)) == []

    def test_quirk_files_differing_by_extension_collide(self) -> None:
        pdf = local("/import/scan.pdf")
        png = local("/import/scan.png")
        remote = doc("1", "scan", (), file_count=0)

        actions = reconcile([pdf, png], [remote], ())

        assert actions == [
            UploadFile("1", pdf.path, "scan"),
            UploadFile("1", png.path, "scan"),
        ]

    def test_quirk_same_name_in_two_folders_creates_two_documents(self) -> None:
        first = local("/import/2023/report.pdf")
        second = local("/import/2024/report.pdf")

        actions = reconcile([first, second], [], ())

        assert actions == [
            CreateDocument("report", first.path),
            CreateDocument("report", second.path),
        ]


class TestReconcileProperties:
    """General properties of a pass."""

    def setup_method(self) -> None:
        self.signature = ("t1", "t2")
        self.files = [
            local("/import/a.pdf"),
            local("/import/b.pdf"),
            local("/import/c.pdf"),
            local("/import/d.pdf"),
        ]
        self.documents = [
            doc("1", "a", ("t1", "t2"), file_count=1),
            doc("2", "b", ("t2", "t1"), file_count=0),
            doc("3", "c", ("t1",), file_count=1),
            doc("4", "x", ("t1", "t2"), file_count=1),
            doc("5", "y", (), file_count=0),
        ]

    def test_full_plan(self) -> None:
        actions = reconcile(self.files, self.documents, self.signature)

        assert actions == [
            UploadFile("2", Path("/import/b.pdf"), "b"),
            CreateDocument("c", Path("/import/c.pdf")),
            CreateDocument("d", Path("/import/d.pdf")),
            DeleteDocument("4", "x"),
            DeleteDocument("5", "y"),
        ]

    def test_no_create_for_matched_files(self) -> None:
        actions = reconcile(self.files, self.documents, self.signature)
        created = {a.display_name for a in actions if isinstance(a, CreateDocument)}

        for f in self.files:
            if any(d.matches(f.display_name, self.signature) for d in self.documents):
                assert f.display_name not in created

    def test_no_upload_to_documents_with_files(self) -> None:
        actions = reconcile(self.files, self.documents, self.signature)
        with_files = {d.id for d in self.documents if d.has_file}

        assert not [a for a in actions if isinstance(a, UploadFile) and a.document_id in with_files]

    def test_delete_iff_no_local_title(self) -> None:
        actions = reconcile(self.files, self.documents, self.signature)
        deleted = {a.document_id for a in actions if isinstance(a, DeleteDocument)}
        names = {f.display_name for f in self.files}

        assert deleted == {d.id for d in self.documents if d.title not in names}

    def test_idempotent(self) -> None:
        first = reconcile(self.files, self.documents, self.signature)
        second = reconcile(self.files, self.documents, self.signature)

        assert first == second

    def test_accepts_generators(self) -> None:
        actions = reconcile(iter(self.files), iter(self.documents), iter(self.signature))

        assert actions == reconcile(self.files, self.documents, self.signature)
