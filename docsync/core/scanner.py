"""Local file discovery under the import root."""

from pathlib import Path

from rich.console import Console

from ..models.documents import LocalFile

console = Console()


class TraversalError(Exception):
    """Raised when the import tree cannot be read."""
    pass


def display_name(path: str | Path) -> str:
    """Derive the title used to match a file against remote documents.

    The last path segment loses its final extension (everything from the
    last ``.``); a name without a dot is returned unchanged.
    """
    name = Path(path).name
    if "." not in name:
        return name
    return name.rpartition(".")[0]


def scan_directory(root: str | Path, verbose: bool = True) -> list[LocalFile]:
    """List every non-directory entry under ``root``, recursively.

    Entries are visited in lexical order and a subdirectory is descended into
    at its lexical position. Symlinked directories are not followed.

    Args:
        root: Import root directory
        verbose: Report each found file on the console

    Returns:
        LocalFile list in traversal order

    Raises:
        TraversalError: If the root or any directory below it cannot be listed
    """
    root = Path(root)
    if not root.is_dir():
        raise TraversalError(f"Error traversing folder: {root} is not a directory")

    files: list[LocalFile] = []
    _walk(root, files, verbose)
    return files


def _walk(directory: Path, files: list[LocalFile], verbose: bool) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise TraversalError(f"Error traversing folder: {e}") from e

    for entry in entries:
        if entry.is_dir() and not entry.is_symlink():
            _walk(entry, files, verbose)
            continue

        files.append(LocalFile(path=entry, display_name=display_name(entry)))
        if verbose:
            try:
                size = entry.lstat().st_size
            except OSError as e:
                raise TraversalError(f"Error traversing folder: {e}") from e
            console.print(f"[dim]found file {entry} - {size} bytes[/dim]")
