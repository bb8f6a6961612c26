"""Tests for tag signature resolution."""

from docsync.core.tags import resolve_tag_signature
from docsync.models.documents import Tag

CATALOG = [
    Tag(id="t3", name="Scanned"),
    Tag(id="t1", name="Invoices"),
    Tag(id="t9", name="invoices"),
    Tag(id="t2", name="Archive"),
    Tag(id="t4", name="Archive"),
]


class TestResolveTagSignature:
    """Tests for resolve_tag_signature."""

    def test_resolves_and_sorts(self) -> None:
        assert resolve_tag_signature(["Scanned", "Invoices"], CATALOG) == ("t1", "t3")

    def test_exact_name_match(self) -> None:
        assert resolve_tag_signature(["Invoices"], CATALOG) == ("t1",)
        assert resolve_tag_signature(["Invoices "], CATALOG) == ()

    def test_name_with_several_entries_contributes_all(self) -> None:
        assert resolve_tag_signature(["Archive"], CATALOG) == ("t2", "t4")

    def test_unknown_name_is_ignored(self) -> None:
        assert resolve_tag_signature(["Missing", "Scanned"], CATALOG) == ("t3",)

    def test_empty_names_give_empty_signature(self) -> None:
        assert resolve_tag_signature([], CATALOG) == ()

    def test_signature_is_a_tuple(self) -> None:
        assert isinstance(resolve_tag_signature(["Scanned"], CATALOG), tuple)
