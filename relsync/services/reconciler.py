"""Replace release assets with local artifacts, by file name."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.github.model import Asset, Release, ReleaseTarget
from relsync.services.context import SyncContext
from relsync.services.errors import (
    AssetDeletionFailed,
    AssetListingFailed,
    AssetUploadFailed,
    LocalFileUnreadable,
    SyncError,
)

__all__ = ["reconcile_assets"]


def reconcile_assets(
    ctx: SyncContext,
    target: ReleaseTarget,
    release: Release,
    files: Sequence[Path],
) -> Result[list[Asset], SyncError]:
    """Make the release hold exactly one asset per local file basename.

    Files are processed in order. For each one the file is opened first, then
    every asset with the same name is deleted, then the file is uploaded. The
    first failure stops the run; files after it are left untouched. Assets
    whose names match no local file are never modified.

    Returns:
        Ok with the uploaded assets in upload order, or Err with the failure
    """
    listed = ctx.client.list_assets(target, release.id)
    if isinstance(listed, Err):
        return Err(AssetListingFailed(release_id=release.id, cause=listed.error))

    existing: list[Asset] = listed.value
    uploaded: list[Asset] = []

    for path in files:
        name = path.name
        try:
            handle = path.open("rb")
        except OSError as e:
            return Err(LocalFileUnreadable(path=path, reason=e.strerror or str(e)))

        with handle:
            for asset in [a for a in existing if a.name == name]:
                deleted = ctx.client.delete_asset(target, asset.id)
                if isinstance(deleted, Err):
                    return Err(AssetDeletionFailed(path=path, asset_name=name, cause=deleted.error))
                existing.remove(asset)
                ctx.console.success(f"deleted old {name} artifact")

            result = ctx.client.upload_asset(target, release.id, name, handle)
            if isinstance(result, Err):
                return Err(AssetUploadFailed(path=path, cause=result.error))

        existing.append(result.value)
        uploaded.append(result.value)
        ctx.console.success(f"uploaded {path} artifact")

    return Ok(uploaded)
