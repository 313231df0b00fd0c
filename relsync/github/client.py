"""Release service capability.

The synchronizer only ever needs five remote operations. They are expressed
as a Protocol so the pipeline can run against the real API or against an
in-memory fake in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol, runtime_checkable

from relsync.core.result import Result
from relsync.github.model import Asset, Release, ReleaseTarget

__all__ = ["ApiError", "ReleaseClient"]


@dataclass(frozen=True, slots=True)
class ApiError:
    """Failure of a single remote call.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    @property
    def not_found(self) -> bool:
        return self.status == 404

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class ReleaseClient(Protocol):
    """Protocol for the release-hosting API."""

    def get_release_by_tag(self, target: ReleaseTarget) -> Result[Release, ApiError]:
        """Look up the release for ``target.tag``.

        A missing release is reported as an ApiError with status 404.
        """
        ...

    def create_release(self, target: ReleaseTarget) -> Result[Release, ApiError]:
        """Create a release named after ``target.tag``."""
        ...

    def list_assets(self, target: ReleaseTarget, release_id: int) -> Result[list[Asset], ApiError]:
        """List every asset attached to the release."""
        ...

    def delete_asset(self, target: ReleaseTarget, asset_id: int) -> Result[None, ApiError]:
        ...

    def upload_asset(
        self,
        target: ReleaseTarget,
        release_id: int,
        name: str,
        handle: BinaryIO,
    ) -> Result[Asset, ApiError]:
        """Upload the content of ``handle`` as a new asset called ``name``."""
        ...
