"""Fetch-or-create for the release of a tag."""

from __future__ import annotations

from relsync.core.result import Err, Ok, Result
from relsync.github.model import Release, ReleaseTarget
from relsync.output.console import Style
from relsync.services.context import SyncContext
from relsync.services.errors import ReleaseResolutionFailed

__all__ = ["resolve_release"]


def resolve_release(
    ctx: SyncContext,
    target: ReleaseTarget,
) -> Result[Release, ReleaseResolutionFailed]:
    """Return the release for ``target.tag``, creating it if needed.

    Any lookup failure (404 or otherwise) is treated as "no release yet" and
    leads to exactly one creation attempt. Only when both calls fail is the
    run aborted.
    """
    found = ctx.client.get_release_by_tag(target)
    if isinstance(found, Ok):
        ctx.console.success(f"retrieved {target.tag} release")
        return found

    lookup_error = found.error
    if not lookup_error.not_found:
        ctx.console.print(f"lookup of {target.tag} failed: {lookup_error}", Style.DIM)

    created = ctx.client.create_release(target)
    if isinstance(created, Err):
        return Err(
            ReleaseResolutionFailed(
                tag=target.tag,
                lookup_error=lookup_error,
                create_error=created.error,
            )
        )

    ctx.console.success(f"created {target.tag} release")
    return created
