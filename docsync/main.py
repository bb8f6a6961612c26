#!/usr/bin/env python3
"""CLI entry point for the document sync system."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.client import DocsAPIError
from .core.operations import SyncOperations
from .core.scanner import TraversalError
from .core.tags import resolve_tag_signature
from .models.config import SyncConfig, load_config

console = Console()


def _load_config(args: argparse.Namespace) -> SyncConfig:
    """Build the config from --config, the environment and CLI overrides."""
    return load_config(
        Path(args.config) if args.config else None,
        host=args.host,
        tags=args.tags,
        language=args.language,
        import_path=args.path,
        username=args.username,
        password=args.password,
    )


def cmd_check(args: argparse.Namespace) -> int:
    """Verify the service is reachable and the credentials work."""
    try:
        config = _load_config(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
        return 1

    console.print(f"Checking {config.host}...", style="blue")

    try:
        ops = SyncOperations(config)
        ops.connect()
    except DocsAPIError as e:
        console.print(f"[red]Check failed: {e}")
        return 1

    console.print("[green]Login successful!")
    return 0


def cmd_tags(args: argparse.Namespace) -> int:
    """Show the tag catalog and the resolved signature."""
    try:
        config = _load_config(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
        return 1

    try:
        ops = SyncOperations(config)
        ops.connect()
        catalog = ops.client.list_tags()
    except DocsAPIError as e:
        console.print(f"[red]Failed to fetch tags: {e}")
        return 1

    if not catalog:
        console.print("[yellow]No tags defined on the server")
    else:
        table = Table(title="Tags")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Configured")

        for tag in catalog:
            configured = "[green]Yes" if tag.name in config.tags else "[dim]No"
            table.add_row(tag.id, tag.name, configured)

        console.print(table)

    signature = resolve_tag_signature(config.tags, catalog)
    console.print(f"\n[bold]Signature:[/bold] {', '.join(signature) or '(no tags)'}")
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    """Mirror the import directory into the service."""
    try:
        config = _load_config(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
        return 1

    console.print(f"Syncing {config.import_path} -> {config.host}", style="blue")
    if args.dry_run:
        console.print("[yellow](DRY RUN - no changes will be made)")

    ops = SyncOperations(config)

    try:
        report = ops.run(dry_run=args.dry_run)
    except (DocsAPIError, TraversalError) as e:
        console.print(f"[red]Sync aborted: {e}")
        return 1

    if report.plan.is_empty:
        console.print("[dim]Nothing to do, remote documents are up to date.[/dim]")

    verb = "would be applied" if report.dry_run else "applied"
    console.print(f"\n[bold]Summary ({verb}):[/bold] {report.summary()}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="YAML config file (default: ./docsync.yaml)")
    parser.add_argument("--host", help="Service base URL")
    parser.add_argument("--tags", help="Comma-separated tag names")
    parser.add_argument("--language", help="Language code for new documents")
    parser.add_argument("--path", help="Local directory to import")
    parser.add_argument("--username", help="Login name")
    parser.add_argument("--password", help="Login password")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="docsync",
        description="Mirror a local directory into a document management service",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    check_parser = subparsers.add_parser("check", help="Verify connection and credentials")
    _add_common_arguments(check_parser)

    tags_parser = subparsers.add_parser("tags", help="Show tag catalog and resolved signature")
    _add_common_arguments(tags_parser)

    sync_parser = subparsers.add_parser("sync", help="Create, upload and delete documents")
    _add_common_arguments(sync_parser)
    sync_parser.add_argument("--dry-run", action="store_true", help="Show what would happen")

    args = parser.parse_args(argv)

    if args.command == "check":
        return cmd_check(args)
    elif args.command == "tags":
        return cmd_tags(args)
    elif args.command == "sync":
        return cmd_sync(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
