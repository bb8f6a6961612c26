"""Core sync functionality."""

from .auth import DocsAuth
from .client import (
    AuthError,
    DecodeError,
    DocsAPIError,
    DocsClient,
    ServiceError,
    UploadError,
)
from .operations import RunReport, SyncOperations, SyncResult
from .reconciler import Reconciler, reconcile
from .scanner import TraversalError, display_name, scan_directory
from .tags import resolve_tag_signature

__all__ = [
    "AuthError",
    "DecodeError",
    "DocsAPIError",
    "DocsAuth",
    "DocsClient",
    "Reconciler",
    "RunReport",
    "ServiceError",
    "SyncOperations",
    "SyncResult",
    "TraversalError",
    "UploadError",
    "display_name",
    "reconcile",
    "resolve_tag_signature",
    "scan_directory",
]
