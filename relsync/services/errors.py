"""Failure kinds of a sync run.

All of them are terminal: nothing is retried and the run stops at the first
one. Each carries the tag or file it concerns so the CLI can print a precise
message and choose an exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relsync.core.config import ConfigError
from relsync.github.client import ApiError

__all__ = [
    "ConfigurationError",
    "ReleaseResolutionFailed",
    "AssetListingFailed",
    "LocalFileUnreadable",
    "AssetDeletionFailed",
    "AssetUploadFailed",
    "SyncError",
]


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    message: str
    hint: str | None = None

    @classmethod
    def from_config_error(cls, error: ConfigError) -> ConfigurationError:
        hint = error.hint
        if hint is None and error.path is not None:
            hint = str(error.path)
        return cls(message=error.message, hint=hint)


@dataclass(frozen=True, slots=True)
class ReleaseResolutionFailed:
    tag: str
    lookup_error: ApiError
    create_error: ApiError

    @property
    def message(self) -> str:
        return f"Failed to retrieve or create {self.tag} release"

    @property
    def hint(self) -> str:
        return f"lookup: {self.lookup_error}; create: {self.create_error}"


@dataclass(frozen=True, slots=True)
class AssetListingFailed:
    release_id: int
    cause: ApiError

    @property
    def message(self) -> str:
        return "Failed to fetch existing assets"

    @property
    def hint(self) -> str:
        return str(self.cause)


@dataclass(frozen=True, slots=True)
class LocalFileUnreadable:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"Failed to read {self.path} artifact"

    @property
    def hint(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class AssetDeletionFailed:
    path: Path
    asset_name: str
    cause: ApiError

    @property
    def message(self) -> str:
        return f"Failed to delete {self.path} artifact"

    @property
    def hint(self) -> str:
        return f"existing asset {self.asset_name}: {self.cause}"


@dataclass(frozen=True, slots=True)
class AssetUploadFailed:
    path: Path
    cause: ApiError

    @property
    def message(self) -> str:
        return f"Failed to upload {self.path} artifact"

    @property
    def hint(self) -> str:
        return str(self.cause)


SyncError = (
    ConfigurationError
    | ReleaseResolutionFailed
    | AssetListingFailed
    | LocalFileUnreadable
    | AssetDeletionFailed
    | AssetUploadFailed
)
