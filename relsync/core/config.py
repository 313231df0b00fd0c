"""Typed configuration for a sync run.

Settings come from three places, highest priority first:
- explicit CLI flags / plugin environment variables
- an optional TOML file (``[release]`` table)
- built-in defaults (public GitHub endpoints)

The access credential is only ever taken from flags or the environment.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_UPLOAD_URL",
    "TAG_EVENT",
    "BuildInfo",
    "ConfigError",
    "FileConfig",
    "SyncSettings",
    "load_file_config",
    "normalize_endpoint",
    "validate_endpoint",
]

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_UPLOAD_URL = "https://uploads.github.com/"

TAG_EVENT = "tag"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when settings cannot be resolved."""

    message: str
    path: Path | None = None
    hint: str | None = None


def normalize_endpoint(value: str | None, default: str) -> str:
    """Return the effective endpoint root.

    Empty or missing values resolve to ``default``; anything else gets exactly
    one trailing slash appended if it does not already end with one.
    """
    if not value or not value.strip():
        return default
    url = value.strip()
    if not url.endswith("/"):
        url += "/"
    return url


def validate_endpoint(url: str, label: str) -> Result[str, ConfigError]:
    """Reject endpoints that are not absolute http(s) URLs."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        return Err(ConfigError(f"Failed to parse {label} URL: {url}", hint=str(e)))

    if parts.scheme not in ("http", "https") or not parts.netloc:
        return Err(
            ConfigError(
                f"Failed to parse {label} URL: {url}",
                hint="expected an absolute http(s) URL",
            )
        )
    return Ok(url)


@dataclass(frozen=True, slots=True)
class BuildInfo:
    """The CI build that triggered this run."""

    event: str
    owner: str
    repo: str
    ref: str = ""
    tag: str | None = None

    @property
    def is_tag(self) -> bool:
        return self.event == TAG_EVENT

    @property
    def tag_name(self) -> str:
        """Explicit tag if given, else the last component of the ref.

        ``refs/tags/v1.2.0`` -> ``v1.2.0``
        """
        if self.tag and self.tag.strip():
            return self.tag.strip()
        return posixpath.basename(self.ref.strip().rstrip("/"))


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Values read from a TOML config file."""

    base_url: str | None = None
    upload_url: str | None = None
    files: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: StrDict) -> FileConfig:
        release: StrDict = get_table(data, "release") or {}
        return cls(
            base_url=get_str(release, "base_url"),
            upload_url=get_str(release, "upload_url"),
            files=tuple(get_str_list(release, "files") or ()),
        )


def load_file_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Load a TOML config file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(FileConfig) on success, Err(ConfigError) on failure
    """
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (UnicodeDecodeError, OSError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    if "release" in data and get_table(data, "release") is None:
        return Err(ConfigError("[release] must be a TOML table", path=path))
    return Ok(FileConfig.from_dict(data))


@dataclass(frozen=True, slots=True)
class SyncSettings:
    """Fully resolved plugin settings.

    Attributes:
        base_url: Metadata API root, always slash-terminated
        upload_url: Upload API root, always slash-terminated
        api_key: Access token; empty when not provided
        files: Glob patterns, in the order given
        workspace: Directory relative patterns are expanded against
    """

    base_url: str = DEFAULT_BASE_URL
    upload_url: str = DEFAULT_UPLOAD_URL
    api_key: str = ""
    files: tuple[str, ...] = ()
    workspace: Path | None = None

    @classmethod
    def resolve(
        cls,
        *,
        base_url: str | None = None,
        upload_url: str | None = None,
        api_key: str | None = None,
        files: list[str] | tuple[str, ...] | None = None,
        workspace: Path | None = None,
        file_config: FileConfig | None = None,
    ) -> SyncSettings:
        fc = file_config or FileConfig()
        patterns = tuple(p.strip() for p in (files or ()) if p.strip()) or fc.files
        return cls(
            base_url=normalize_endpoint(base_url or fc.base_url, DEFAULT_BASE_URL),
            upload_url=normalize_endpoint(upload_url or fc.upload_url, DEFAULT_UPLOAD_URL),
            api_key=(api_key or "").strip(),
            files=patterns,
            workspace=workspace,
        )
