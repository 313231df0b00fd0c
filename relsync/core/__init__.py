"""Core types shared by every layer."""

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_UPLOAD_URL,
    BuildInfo,
    ConfigError,
    FileConfig,
    SyncSettings,
    load_file_config,
    normalize_endpoint,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "DEFAULT_BASE_URL",
    "DEFAULT_UPLOAD_URL",
    "BuildInfo",
    "ConfigError",
    "FileConfig",
    "SyncSettings",
    "load_file_config",
    "normalize_endpoint",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
