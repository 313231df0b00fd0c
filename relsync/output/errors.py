"""Error presentation and exit code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relsync.core.errors import ErrorCode
from relsync.output.console import Style
from relsync.services.errors import (
    AssetDeletionFailed,
    AssetListingFailed,
    AssetUploadFailed,
    ConfigurationError,
    LocalFileUnreadable,
    ReleaseResolutionFailed,
    SyncError,
)

if TYPE_CHECKING:
    from relsync.output.console import ConsoleProtocol

__all__ = ["print_sync_error", "sync_error_exit_code"]


def print_sync_error(error: SyncError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def sync_error_exit_code(error: SyncError) -> int:
    match error:
        case ConfigurationError():
            return int(ErrorCode.CONFIG_ERROR)
        case ReleaseResolutionFailed():
            return int(ErrorCode.RELEASE_ERROR)
        case AssetListingFailed() | AssetDeletionFailed() | AssetUploadFailed():
            return int(ErrorCode.API_ERROR)
        case LocalFileUnreadable():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.API_ERROR)
