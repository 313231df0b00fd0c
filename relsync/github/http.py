"""GitHub Releases client over urllib.

Handles:
- token authentication
- separate metadata and upload endpoints (GitHub Enterprise friendly)
- JSON decoding of responses
- streaming uploads from an open file handle
- asset list pagination
"""

from __future__ import annotations

import json
import mimetypes
import os
import ssl
import urllib.error
import urllib.request
from typing import Any, BinaryIO
from urllib.parse import quote, urlencode

from relsync import __version__
from relsync.core.config import DEFAULT_BASE_URL, DEFAULT_UPLOAD_URL
from relsync.core.result import Err, Ok, Result
from relsync.core.structured import StrDict, as_obj_list, as_str_dict, get_str
from relsync.github.client import ApiError
from relsync.github.model import Asset, Release, ReleaseTarget

__all__ = ["UrllibReleaseClient", "ASSETS_PER_PAGE"]

ASSETS_PER_PAGE = 100

_RequestBody = bytes | BinaryIO | None


class UrllibReleaseClient:
    """Real release client using urllib.

    Endpoints must already be normalized (slash-terminated).
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        upload_url: str = DEFAULT_UPLOAD_URL,
        timeout: float | None = None,
        user_agent: str = f"relsync/{__version__}",
    ) -> None:
        self.base_url = base_url
        self.upload_url = upload_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._api_key = api_key
        self._ssl_context = ssl.create_default_context()

    def _repo_url(self, target: ReleaseTarget, *, upload: bool = False) -> str:
        root = self.upload_url if upload else self.base_url
        return f"{root}repos/{quote(target.owner, safe='')}/{quote(target.repo, safe='')}"

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Authorization": f"token {self._api_key}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        url: str,
        *,
        body: _RequestBody = None,
        headers: dict[str, str] | None = None,
    ) -> Result[bytes, ApiError]:
        req = urllib.request.Request(
            url,
            data=body,
            method=method,
            headers=self._headers(headers),
        )
        kwargs: dict[str, Any] = {"context": self._ssl_context}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            with urllib.request.urlopen(req, **kwargs) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(ApiError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(ApiError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(ApiError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(ApiError(url=url, status=0, message=str(e)))

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        body: _RequestBody = None,
        headers: dict[str, str] | None = None,
    ) -> Result[object, ApiError]:
        result = self._request(method, url, body=body, headers=headers)
        if isinstance(result, Err):
            return result

        try:
            return Ok(json.loads(result.value.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(ApiError(url=url, status=0, message=f"JSON parse error: {e}"))

    def _release(self, method: str, url: str, body: bytes | None = None) -> Result[Release, ApiError]:
        headers = {"Content-Type": "application/json"} if body is not None else None
        result = self._request_json(method, url, body=body, headers=headers)
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        release = Release.from_payload(data) if data is not None else None
        if release is None:
            return Err(ApiError(url=url, status=0, message="Unexpected release payload"))
        return Ok(release)

    def get_release_by_tag(self, target: ReleaseTarget) -> Result[Release, ApiError]:
        url = f"{self._repo_url(target)}/releases/tags/{quote(target.tag, safe='')}"
        return self._release("GET", url)

    def create_release(self, target: ReleaseTarget) -> Result[Release, ApiError]:
        url = f"{self._repo_url(target)}/releases"
        body = json.dumps({"tag_name": target.tag}).encode("utf-8")
        return self._release("POST", url, body)

    def list_assets(self, target: ReleaseTarget, release_id: int) -> Result[list[Asset], ApiError]:
        assets: list[Asset] = []
        page = 1
        while True:
            query = urlencode({"per_page": ASSETS_PER_PAGE, "page": page})
            url = f"{self._repo_url(target)}/releases/{release_id}/assets?{query}"
            result = self._request_json("GET", url)
            if isinstance(result, Err):
                return result

            items = as_obj_list(result.value)
            if items is None:
                return Err(ApiError(url=url, status=0, message="Unexpected assets payload"))

            for item in items:
                data = as_str_dict(item)
                asset = Asset.from_payload(data) if data is not None else None
                if asset is None:
                    return Err(ApiError(url=url, status=0, message="Unexpected asset entry"))
                assets.append(asset)

            if len(items) < ASSETS_PER_PAGE:
                return Ok(assets)
            page += 1

    def delete_asset(self, target: ReleaseTarget, asset_id: int) -> Result[None, ApiError]:
        url = f"{self._repo_url(target)}/releases/assets/{asset_id}"
        result = self._request("DELETE", url)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def upload_asset(
        self,
        target: ReleaseTarget,
        release_id: int,
        name: str,
        handle: BinaryIO,
    ) -> Result[Asset, ApiError]:
        query = urlencode({"name": name})
        url = f"{self._repo_url(target, upload=True)}/releases/{release_id}/assets?{query}"
        content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"

        try:
            length = _remaining_length(handle)
        except OSError as e:
            return Err(ApiError(url=url, status=0, message=f"Failed to size upload: {e}"))

        result = self._request_json(
            "POST",
            url,
            body=handle,
            headers={"Content-Type": content_type, "Content-Length": str(length)},
        )
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        asset = Asset.from_payload(data) if data is not None else None
        if asset is None:
            return Err(ApiError(url=url, status=0, message="Unexpected asset payload"))
        return Ok(asset)


def _remaining_length(handle: BinaryIO) -> int:
    start = handle.tell()
    end = handle.seek(0, os.SEEK_END)
    handle.seek(start)
    return end - start


def _error_message(error: urllib.error.HTTPError) -> str:
    # GitHub puts the useful text in a JSON "message" field.
    try:
        payload: object = json.loads(error.read().decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError, ValueError):
        return str(error.reason)

    data: StrDict | None = as_str_dict(payload)
    if data is not None:
        message = get_str(data, "message")
        if message:
            return message
    return str(error.reason)
