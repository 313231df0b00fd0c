"""In-memory release service for tests.

Usage:
    client = FakeReleaseClient()
    release = client.add_release("v1.0.0")
    client.add_asset(release, "app.tar.gz", b"old")
    client.fail_on("upload_asset", name="app.sha256")

    ...run the pipeline against ``client``...

    assert client.operations() == ["get_release_by_tag", "list_assets", ...]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import BinaryIO

from relsync.core.result import Err, Ok, Result
from relsync.github.client import ApiError
from relsync.github.model import Asset, Release, ReleaseTarget

__all__ = ["FakeCall", "FakeReleaseClient"]


@dataclass(frozen=True, slots=True)
class FakeCall:
    operation: str
    detail: str


@dataclass
class FakeReleaseClient:
    """Release client that keeps releases and assets in dictionaries.

    Every call is recorded in ``calls``, including failed ones.
    """

    releases: dict[str, Release] = field(default_factory=lambda: {})
    assets: dict[int, list[Asset]] = field(default_factory=lambda: {})
    contents: dict[int, bytes] = field(default_factory=lambda: {})
    calls: list[FakeCall] = field(default_factory=lambda: [])
    _failures: dict[str, ApiError] = field(default_factory=lambda: {})
    _ids: count[int] = field(default_factory=lambda: count(1))

    # Setup helpers

    def add_release(self, tag: str) -> Release:
        release = Release(id=next(self._ids), tag_name=tag)
        self.releases[tag] = release
        self.assets[release.id] = []
        return release

    def add_asset(self, release: Release, name: str, content: bytes = b"") -> Asset:
        asset = Asset(id=next(self._ids), name=name, size=len(content))
        self.assets.setdefault(release.id, []).append(asset)
        self.contents[asset.id] = content
        return asset

    def fail_on(
        self,
        operation: str,
        *,
        name: str | None = None,
        status: int = 500,
        message: str = "Server Error (fake)",
    ) -> None:
        """Make ``operation`` fail; ``name`` limits it to one asset name."""
        key = f"{operation}:{name}" if name else operation
        self._failures[key] = ApiError(url=f"fake://{operation}", status=status, message=message)

    # Inspection helpers

    def operations(self) -> list[str]:
        return [c.operation for c in self.calls]

    def calls_of(self, operation: str) -> list[str]:
        return [c.detail for c in self.calls if c.operation == operation]

    def asset_names(self, release_id: int) -> list[str]:
        return [a.name for a in self.assets.get(release_id, [])]

    def content_of(self, release_id: int, name: str) -> bytes | None:
        for asset in self.assets.get(release_id, []):
            if asset.name == name:
                return self.contents[asset.id]
        return None

    # ReleaseClient

    def _failure(self, operation: str, name: str | None = None) -> ApiError | None:
        if name is not None and f"{operation}:{name}" in self._failures:
            return self._failures[f"{operation}:{name}"]
        return self._failures.get(operation)

    def get_release_by_tag(self, target: ReleaseTarget) -> Result[Release, ApiError]:
        self.calls.append(FakeCall("get_release_by_tag", target.tag))
        failure = self._failure("get_release_by_tag")
        if failure is not None:
            return Err(failure)

        release = self.releases.get(target.tag)
        if release is None:
            return Err(ApiError(url="fake://get_release_by_tag", status=404, message="Not Found"))
        return Ok(release)

    def create_release(self, target: ReleaseTarget) -> Result[Release, ApiError]:
        self.calls.append(FakeCall("create_release", target.tag))
        failure = self._failure("create_release")
        if failure is not None:
            return Err(failure)
        if target.tag in self.releases:
            return Err(
                ApiError(url="fake://create_release", status=422, message="already_exists")
            )
        return Ok(self.add_release(target.tag))

    def list_assets(self, target: ReleaseTarget, release_id: int) -> Result[list[Asset], ApiError]:
        self.calls.append(FakeCall("list_assets", str(release_id)))
        failure = self._failure("list_assets")
        if failure is not None:
            return Err(failure)
        return Ok(list(self.assets.get(release_id, [])))

    def delete_asset(self, target: ReleaseTarget, asset_id: int) -> Result[None, ApiError]:
        owner_id, asset = self._find_asset(asset_id)
        name = asset.name if asset is not None else str(asset_id)
        self.calls.append(FakeCall("delete_asset", name))

        failure = self._failure("delete_asset", name)
        if failure is not None:
            return Err(failure)
        if owner_id is None or asset is None:
            return Err(ApiError(url="fake://delete_asset", status=404, message="Not Found"))

        self.assets[owner_id].remove(asset)
        self.contents.pop(asset.id, None)
        return Ok(None)

    def upload_asset(
        self,
        target: ReleaseTarget,
        release_id: int,
        name: str,
        handle: BinaryIO,
    ) -> Result[Asset, ApiError]:
        self.calls.append(FakeCall("upload_asset", name))
        failure = self._failure("upload_asset", name)
        if failure is not None:
            return Err(failure)
        if release_id not in self.assets:
            return Err(ApiError(url="fake://upload_asset", status=404, message="Not Found"))

        content = handle.read()
        asset = Asset(id=next(self._ids), name=name, size=len(content))
        self.assets[release_id].append(asset)
        self.contents[asset.id] = content
        return Ok(asset)

    def _find_asset(self, asset_id: int) -> tuple[int | None, Asset | None]:
        for release_id, assets in self.assets.items():
            for asset in assets:
                if asset.id == asset_id:
                    return release_id, asset
        return None, None
