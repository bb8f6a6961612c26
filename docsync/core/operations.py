"""Sync run driver and execution of reconciliation actions."""

from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from ..models.config import SyncConfig
from ..models.documents import (
    CreateDocument,
    DeleteDocument,
    RemoteDocument,
    SyncAction,
    SyncPlan,
    Tag,
    UploadFile,
)
from .auth import DocsAuth
from .client import DocsClient
from .reconciler import Reconciler
from .scanner import scan_directory
from .tags import resolve_tag_signature

console = Console()


@dataclass
class SyncResult:
    """Result of a sync operation."""

    success: bool
    filepath: str
    operation: str  # "create", "upload" or "delete"
    message: str
    skipped: bool = False


@dataclass
class RunReport:
    """Everything a sync run computed and did."""

    version: str
    signature: tuple[str, ...]
    plan: SyncPlan
    results: list[SyncResult] = field(default_factory=list)
    dry_run: bool = False

    def count(self, operation: str) -> int:
        """Number of completed (not skipped) results for an operation."""
        return sum(1 for r in self.results if r.operation == operation and r.success and not r.skipped)

    @property
    def skipped_count(self) -> int:
        return len(self.plan.skipped) + sum(1 for r in self.results if r.skipped)

    def summary(self) -> str:
        return (
            f"{self.count('create')} created, {self.count('upload')} uploaded, "
            f"{self.count('delete')} deleted, {self.skipped_count} skipped"
        )


class SyncOperations:
    """Runs a reconciliation pass and applies its actions to the service.

    Any service error raised while applying actions aborts the run; actions
    already applied stay applied. The only local recovery is a file that
    cannot be opened for upload, which is reported and skipped.
    """

    def __init__(
        self,
        config: SyncConfig,
        client: DocsClient | None = None,
    ) -> None:
        """Initialize sync operations.

        Args:
            config: Validated sync configuration
            client: DocsClient (created from config if not provided)
        """
        self.config = config
        self._client = client

    @property
    def client(self) -> DocsClient:
        """Get or create DocsClient."""
        if self._client is None:
            auth = DocsAuth(
                username=self.config.username,
                password=self.config.password,
                base_url=self.config.host,
            )
            self._client = DocsClient(
                auth,
                timeout=self.config.timeout,
                page_size=self.config.page_size,
            )
        return self._client

    # =========================================================================
    # Run phases
    # =========================================================================

    def connect(self) -> str:
        """Check the service and log in. Returns the service version."""
        version = self.client.get_version()
        console.print(f"Connection successful. Version: {version}", style="blue")
        self.client.login()
        return version

    def fetch_inventory(self) -> tuple[list[Tag], list[RemoteDocument]]:
        """Read the tag catalog and the full document list."""
        tags = self.client.list_tags()
        documents = self.client.list_documents()
        console.print(f"Fetched {len(tags)} tags and {len(documents)} documents", style="blue")
        return tags, documents

    def run(self, dry_run: bool = False) -> RunReport:
        """Execute a full sync pass.

        Args:
            dry_run: If True, compute and report actions without applying them

        Returns:
            RunReport with the plan and per-action results
        """
        version = self.connect()
        tags, documents = self.fetch_inventory()

        signature = resolve_tag_signature(self.config.tags, tags)
        local_files = scan_directory(Path(self.config.import_path))

        plan = Reconciler(signature).plan(local_files, documents)
        for local_file, document_id in plan.skipped:
            console.print(
                f"[dim]Skipping {local_file.display_name}: document {document_id} already has a file[/dim]"
            )

        results = self.execute(plan.actions, signature, dry_run=dry_run)

        return RunReport(
            version=version,
            signature=signature,
            plan=plan,
            results=results,
            dry_run=dry_run,
        )

    # =========================================================================
    # Action execution
    # =========================================================================

    def execute(
        self,
        actions: list[SyncAction],
        signature: tuple[str, ...] = (),
        dry_run: bool = False,
    ) -> list[SyncResult]:
        """Apply actions in order.

        Args:
            actions: Output of a reconciliation pass
            signature: Tag ids attached to created documents
            dry_run: If True, show what would happen without making changes

        Returns:
            List of SyncResults
        """
        results: list[SyncResult] = []

        for action in actions:
            if isinstance(action, CreateDocument):
                results.extend(self._create_document(action, signature, dry_run))
            elif isinstance(action, UploadFile):
                results.append(
                    self._upload_file(action.document_id, action.local_path, action.display_name, dry_run)
                )
            elif isinstance(action, DeleteDocument):
                results.append(self._delete_document(action, dry_run))
            else:
                raise TypeError(f"Unknown sync action: {action!r}")

        return results

    def _create_document(
        self,
        action: CreateDocument,
        signature: tuple[str, ...],
        dry_run: bool,
    ) -> list[SyncResult]:
        """Create a document, then upload the local file into it."""
        if dry_run:
            message = f"Would create document '{action.display_name}'"
            console.print(f"[yellow]{message}")
            return [
                SyncResult(
                    success=True,
                    filepath=str(action.local_path),
                    operation="create",
                    message=message,
                ),
                self._upload_file("<new document>", action.local_path, action.display_name, dry_run),
            ]

        document_id = self.client.create_document(
            action.display_name,
            self.config.language,
            signature,
        )
        message = f"Created document '{action.display_name}' ({document_id})"
        console.print(f"[green]{message}")

        results = [SyncResult(
            success=True,
            filepath=str(action.local_path),
            operation="create",
            message=message,
        )]
        results.append(self._upload_file(document_id, action.local_path, action.display_name, dry_run))
        return results

    def _upload_file(
        self,
        document_id: str,
        local_path: Path,
        display_name: str,
        dry_run: bool,
    ) -> SyncResult:
        """Upload one local file; an unreadable file is skipped, not fatal."""
        if dry_run:
            message = f"Would upload {local_path} to document {document_id}"
            console.print(f"[yellow]{message}")
            return SyncResult(success=True, filepath=str(local_path), operation="upload", message=message)

        try:
            fileobj = open(local_path, "rb")
        except OSError as e:
            message = f"Error opening file `{local_path}`: {e}"
            console.print(f"[red]{message}")
            return SyncResult(
                success=False,
                filepath=str(local_path),
                operation="upload",
                message=message,
                skipped=True,
            )

        # Multipart filenames must not contain "%"
        upload_name = display_name.replace("%", "")
        with fileobj:
            status = self.client.upload_file(document_id, upload_name, fileobj)

        message = f"Upload complete: {local_path}. Status: {status}"
        console.print(f"[green]{message}")
        return SyncResult(success=True, filepath=str(local_path), operation="upload", message=message)

    def _delete_document(self, action: DeleteDocument, dry_run: bool) -> SyncResult:
        """Delete a document that no local file carries anymore."""
        if dry_run:
            message = f"Would remove document '{action.title}' ({action.document_id})"
            console.print(f"[yellow]{message}")
            return SyncResult(success=True, filepath=action.title, operation="delete", message=message)

        console.print(f"Removing document '{action.title}' ({action.document_id})", style="blue")
        self.client.delete_document(action.document_id)

        message = f"Deleted document '{action.title}'"
        console.print(f"[green]{message}")
        return SyncResult(success=True, filepath=action.title, operation="delete", message=message)
