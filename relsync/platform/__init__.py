"""Local machine helpers."""

from .files import expand_patterns

__all__ = ["expand_patterns"]
