"""The release sync pipeline.

    trigger gate -> credential -> globs -> endpoints -> resolve -> reconcile

The release client is built through ``make_client`` only once the run is known
to need it, so the non-tag path and every configuration failure perform no
remote calls at all.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from relsync.core.config import BuildInfo, SyncSettings, validate_endpoint
from relsync.core.result import Err, Ok, Result
from relsync.github.client import ReleaseClient
from relsync.github.model import Asset, Release, ReleaseTarget
from relsync.output.console import ConsoleProtocol, Style
from relsync.platform.files import expand_patterns
from relsync.services.context import SyncContext
from relsync.services.errors import ConfigurationError, SyncError
from relsync.services.reconciler import reconcile_assets
from relsync.services.resolver import resolve_release

__all__ = ["SyncReport", "ClientFactory", "run_sync"]

ClientFactory = Callable[[SyncSettings], ReleaseClient]


def _no_assets() -> list[Asset]:
    return []


@dataclass(frozen=True, slots=True)
class SyncReport:
    skipped: bool
    release: Release | None = None
    files: tuple[Path, ...] = ()
    uploaded: list[Asset] = field(default_factory=_no_assets)


def _check_settings(settings: SyncSettings, build: BuildInfo) -> Result[None, ConfigurationError]:
    if not settings.api_key:
        return Err(
            ConfigurationError(
                "You must provide an API key",
                hint="set PLUGIN_API_KEY or pass --api-key",
            )
        )

    if not build.owner or not build.repo:
        return Err(
            ConfigurationError(
                "Repository owner and name are required",
                hint="set DRONE_REPO_OWNER/DRONE_REPO_NAME or pass --owner/--repo",
            )
        )

    if not build.tag_name:
        return Err(ConfigurationError(f"Cannot derive a tag from ref '{build.ref}'"))
    return Ok(None)


def run_sync(
    settings: SyncSettings,
    build: BuildInfo,
    *,
    console: ConsoleProtocol,
    make_client: ClientFactory,
) -> Result[SyncReport, SyncError]:
    """Run one sync for a build.

    Args:
        settings: Resolved plugin settings
        build: The triggering build
        console: Progress output
        make_client: Builds the release client from validated settings

    Returns:
        Ok(SyncReport), skipped for non-tag events, or Err with the first failure
    """
    if not build.is_tag:
        console.info("The GitHub Release plugin is only available for tags")
        return Ok(SyncReport(skipped=True))

    checked = _check_settings(settings, build)
    if isinstance(checked, Err):
        return checked

    files = expand_patterns(settings.files, root=settings.workspace)
    if isinstance(files, Err):
        return Err(ConfigurationError.from_config_error(files.error))
    if not files.value:
        console.warning("no files matched the configured patterns")

    for url, label in ((settings.base_url, "base"), (settings.upload_url, "upload")):
        valid = validate_endpoint(url, label)
        if isinstance(valid, Err):
            return Err(ConfigurationError.from_config_error(valid.error))

    target = ReleaseTarget(owner=build.owner, repo=build.repo, tag=build.tag_name)
    ctx = SyncContext(client=make_client(settings), console=console)
    console.header(f"{target.slug}@{target.tag}")
    console.print(f"{len(files.value)} artifact(s) to publish", Style.DIM)

    release = resolve_release(ctx, target)
    if isinstance(release, Err):
        return release

    uploaded = reconcile_assets(ctx, target, release.value, files.value)
    if isinstance(uploaded, Err):
        return uploaded

    return Ok(
        SyncReport(
            skipped=False,
            release=release.value,
            files=tuple(files.value),
            uploaded=uploaded.value,
        )
    )
