"""Release resolution and asset reconciliation."""

from .context import SyncContext
from .errors import (
    AssetDeletionFailed,
    AssetListingFailed,
    AssetUploadFailed,
    ConfigurationError,
    LocalFileUnreadable,
    ReleaseResolutionFailed,
    SyncError,
)
from .reconciler import reconcile_assets
from .resolver import resolve_release
from .sync import SyncReport, run_sync

__all__ = [
    "AssetDeletionFailed",
    "AssetListingFailed",
    "AssetUploadFailed",
    "ConfigurationError",
    "LocalFileUnreadable",
    "ReleaseResolutionFailed",
    "SyncContext",
    "SyncError",
    "SyncReport",
    "reconcile_assets",
    "resolve_release",
    "run_sync",
]
