"""Tests for relsync.github.fake - in-memory release service."""

from __future__ import annotations

import io

from relsync.core.result import Err, Ok
from relsync.github.client import ReleaseClient
from relsync.github.fake import FakeReleaseClient
from relsync.github.model import ReleaseTarget

TARGET = ReleaseTarget(owner="acme", repo="app", tag="v1.0.0")


def test_implements_protocol() -> None:
    assert isinstance(FakeReleaseClient(), ReleaseClient)


def test_missing_release_is_404() -> None:
    client = FakeReleaseClient()

    result = client.get_release_by_tag(TARGET)

    assert isinstance(result, Err)
    assert result.error.not_found


def test_create_then_lookup() -> None:
    client = FakeReleaseClient()

    created = client.create_release(TARGET)
    found = client.get_release_by_tag(TARGET)

    assert isinstance(created, Ok)
    assert found == created
    assert client.operations() == ["create_release", "get_release_by_tag"]


def test_create_existing_tag_fails() -> None:
    client = FakeReleaseClient()
    client.add_release("v1.0.0")

    result = client.create_release(TARGET)

    assert isinstance(result, Err)
    assert result.error.status == 422


def test_upload_and_delete_track_state() -> None:
    client = FakeReleaseClient()
    release = client.add_release("v1.0.0")
    old = client.add_asset(release, "app.tar.gz", b"old")

    assert client.delete_asset(TARGET, old.id) == Ok(None)
    uploaded = client.upload_asset(TARGET, release.id, "app.tar.gz", io.BytesIO(b"new"))

    assert isinstance(uploaded, Ok)
    assert client.asset_names(release.id) == ["app.tar.gz"]
    assert client.content_of(release.id, "app.tar.gz") == b"new"
    assert client.calls_of("delete_asset") == ["app.tar.gz"]


def test_fail_on_named_asset_only() -> None:
    client = FakeReleaseClient()
    release = client.add_release("v1.0.0")
    client.fail_on("upload_asset", name="bad.bin")

    ok = client.upload_asset(TARGET, release.id, "good.bin", io.BytesIO(b""))
    bad = client.upload_asset(TARGET, release.id, "bad.bin", io.BytesIO(b""))

    assert isinstance(ok, Ok)
    assert isinstance(bad, Err)
    assert client.asset_names(release.id) == ["good.bin"]
