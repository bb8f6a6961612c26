"""Data models for sync system."""

from .config import (
    SyncConfig,
    load_config,
    parse_tag_list,
)
from .documents import (
    CreateDocument,
    DeleteDocument,
    LocalFile,
    RemoteDocument,
    SyncAction,
    SyncPlan,
    Tag,
    UploadFile,
)

__all__ = [
    "CreateDocument",
    "DeleteDocument",
    "LocalFile",
    "RemoteDocument",
    "SyncAction",
    "SyncConfig",
    "SyncPlan",
    "Tag",
    "UploadFile",
    "load_config",
    "parse_tag_list",
]
