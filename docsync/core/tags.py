"""Resolution of configured tag names into the tag signature."""

from collections.abc import Iterable

from rich.console import Console

from ..models.documents import Tag

console = Console()


def resolve_tag_signature(names: Iterable[str], catalog: Iterable[Tag]) -> tuple[str, ...]:
    """Map tag names to the sorted tuple of matching tag ids.

    Each name contributes the id of every catalog entry with exactly the same
    name: none, one, or several. Unknown names are not an error.

    Args:
        names: Configured tag names
        catalog: Tag catalog fetched from the service

    Returns:
        Tag ids sorted lexicographically
    """
    catalog = list(catalog)
    ids: list[str] = []

    for name in names:
        matched = [tag.id for tag in catalog if tag.name == name]
        if not matched:
            console.print(f"[yellow]Warning: tag '{name}' not found on the server")
        ids.extend(matched)

    return tuple(sorted(ids))
