"""Tests for relsync.github.http - urllib release client (no network)."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from email.message import Message
from typing import Any

import pytest

from relsync.core.result import Err, Ok
from relsync.github.client import ApiError, ReleaseClient
from relsync.github.http import ASSETS_PER_PAGE, UrllibReleaseClient
from relsync.github.model import Asset, Release, ReleaseTarget

TARGET = ReleaseTarget(owner="acme", repo="app", tag="v1.2.0")


class _Response:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _Response:
        return self

    def __exit__(self, *_: object) -> None:
        return None


@dataclass
class _Seen:
    method: str
    url: str
    headers: dict[str, str]
    body: bytes | None


@dataclass
class FakeUrlopen:
    """Replays queued responses and records requests."""

    responses: list[object] = field(default_factory=lambda: [])
    seen: list[_Seen] = field(default_factory=lambda: [])

    def queue_json(self, payload: object) -> None:
        self.responses.append(json.dumps(payload).encode("utf-8"))

    def queue_error(self, status: int, payload: object | None = None) -> None:
        self.responses.append((status, payload))

    def __call__(self, req: urllib.request.Request, **_: Any) -> _Response:
        data = req.data
        if hasattr(data, "read"):
            data = data.read()  # type: ignore[union-attr]
        headers = {k.lower(): v for k, v in req.header_items()}
        self.seen.append(_Seen(req.get_method(), req.full_url, headers, data))  # type: ignore[arg-type]

        item = self.responses.pop(0)
        if isinstance(item, tuple):
            status, payload = item  # type: ignore[misc]
            fp = io.BytesIO(json.dumps(payload).encode("utf-8") if payload is not None else b"")
            raise urllib.error.HTTPError(req.full_url, status, "Error", Message(), fp)
        if isinstance(item, Exception):
            raise item
        return _Response(item)  # type: ignore[arg-type]


@pytest.fixture
def http(monkeypatch: pytest.MonkeyPatch) -> FakeUrlopen:
    fake = FakeUrlopen()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


def _client() -> UrllibReleaseClient:
    return UrllibReleaseClient(
        api_key="secret",
        base_url="https://ghe.example.com/api/v3/",
        upload_url="https://ghe.example.com/api/uploads/",
    )


class TestUrllibReleaseClient:
    def test_implements_protocol(self) -> None:
        assert isinstance(_client(), ReleaseClient)

    def test_defaults(self) -> None:
        client = UrllibReleaseClient(api_key="k")
        assert client.base_url == "https://api.github.com/"
        assert client.upload_url == "https://uploads.github.com/"
        assert client.timeout is None

    def test_get_release_by_tag(self, http: FakeUrlopen) -> None:
        http.queue_json({"id": 7, "tag_name": "v1.2.0"})

        result = _client().get_release_by_tag(TARGET)

        assert result == Ok(Release(id=7, tag_name="v1.2.0"))
        seen = http.seen[0]
        assert seen.method == "GET"
        assert seen.url == "https://ghe.example.com/api/v3/repos/acme/app/releases/tags/v1.2.0"
        assert seen.headers["authorization"] == "token secret"
        assert seen.headers["accept"] == "application/vnd.github+json"

    def test_get_release_not_found(self, http: FakeUrlopen) -> None:
        http.queue_error(404, {"message": "Not Found"})

        result = _client().get_release_by_tag(TARGET)

        assert isinstance(result, Err)
        assert result.error.not_found
        assert result.error.message == "Not Found"

    def test_network_error(self, http: FakeUrlopen) -> None:
        http.responses.append(urllib.error.URLError("connection refused"))

        result = _client().get_release_by_tag(TARGET)

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert not result.error.not_found

    def test_create_release_posts_tag_name(self, http: FakeUrlopen) -> None:
        http.queue_json({"id": 9, "tag_name": "v1.2.0", "upload_url": "https://u/{?name}"})

        result = _client().create_release(TARGET)

        assert isinstance(result, Ok)
        assert result.value.id == 9
        seen = http.seen[0]
        assert seen.method == "POST"
        assert seen.url == "https://ghe.example.com/api/v3/repos/acme/app/releases"
        assert json.loads(seen.body or b"") == {"tag_name": "v1.2.0"}
        assert seen.headers["content-type"] == "application/json"

    def test_unexpected_release_payload(self, http: FakeUrlopen) -> None:
        http.queue_json({"tag_name": "v1.2.0"})

        result = _client().create_release(TARGET)

        assert isinstance(result, Err)
        assert "Unexpected release payload" in result.error.message

    def test_list_assets_single_page(self, http: FakeUrlopen) -> None:
        http.queue_json([{"id": 1, "name": "app.tar.gz", "size": 10}])

        result = _client().list_assets(TARGET, 7)

        assert result == Ok([Asset(id=1, name="app.tar.gz", size=10)])
        assert http.seen[0].url == (
            "https://ghe.example.com/api/v3/repos/acme/app/releases/7/assets?per_page=100&page=1"
        )

    def test_list_assets_follows_pages(self, http: FakeUrlopen) -> None:
        http.queue_json([{"id": i, "name": f"f{i}"} for i in range(ASSETS_PER_PAGE)])
        http.queue_json([{"id": 1000, "name": "last"}])

        result = _client().list_assets(TARGET, 7)

        assert isinstance(result, Ok)
        assert len(result.value) == ASSETS_PER_PAGE + 1
        assert result.value[-1].name == "last"
        assert http.seen[1].url.endswith("page=2")

    def test_list_assets_rejects_non_list(self, http: FakeUrlopen) -> None:
        http.queue_json({"message": "weird"})

        result = _client().list_assets(TARGET, 7)

        assert isinstance(result, Err)

    def test_delete_asset(self, http: FakeUrlopen) -> None:
        http.responses.append(b"")

        result = _client().delete_asset(TARGET, 42)

        assert result == Ok(None)
        assert http.seen[0].method == "DELETE"
        assert http.seen[0].url.endswith("/repos/acme/app/releases/assets/42")

    def test_delete_asset_failure(self, http: FakeUrlopen) -> None:
        http.queue_error(403, {"message": "Resource not accessible"})

        result = _client().delete_asset(TARGET, 42)

        assert result == Err(
            ApiError(
                url="https://ghe.example.com/api/v3/repos/acme/app/releases/assets/42",
                status=403,
                message="Resource not accessible",
            )
        )

    def test_upload_asset_uses_upload_endpoint(self, http: FakeUrlopen) -> None:
        http.queue_json({"id": 5, "name": "app.tar.gz", "size": 4})

        result = _client().upload_asset(TARGET, 7, "app.tar.gz", io.BytesIO(b"data"))

        assert result == Ok(Asset(id=5, name="app.tar.gz", size=4))
        seen = http.seen[0]
        assert seen.method == "POST"
        assert seen.url == (
            "https://ghe.example.com/api/uploads/repos/acme/app/releases/7/assets?name=app.tar.gz"
        )
        assert seen.body == b"data"
        assert seen.headers["content-length"] == "4"
        assert seen.headers["content-type"] == "application/x-tar"

    def test_upload_unknown_extension_is_octet_stream(self, http: FakeUrlopen) -> None:
        http.queue_json({"id": 5, "name": "app.sha256"})

        _client().upload_asset(TARGET, 7, "app.sha256", io.BytesIO(b""))

        assert http.seen[0].headers["content-type"] == "application/octet-stream"

    def test_error_without_json_body_uses_reason(self, http: FakeUrlopen) -> None:
        http.queue_error(502)

        result = _client().get_release_by_tag(TARGET)

        assert isinstance(result, Err)
        assert result.error.status == 502
        assert result.error.message == "Error"


class TestApiError:
    def test_str_with_status(self) -> None:
        error = ApiError(url="https://x/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://x/api)"

    def test_str_without_status(self) -> None:
        assert str(ApiError(url="https://x", status=0, message="Timeout")) == "Timeout (https://x)"
