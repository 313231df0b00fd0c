"""GitHub Releases access layer."""

from .client import ApiError, ReleaseClient
from .fake import FakeReleaseClient
from .http import UrllibReleaseClient
from .model import Asset, Release, ReleaseTarget

__all__ = [
    "ApiError",
    "Asset",
    "FakeReleaseClient",
    "Release",
    "ReleaseClient",
    "ReleaseTarget",
    "UrllibReleaseClient",
]
