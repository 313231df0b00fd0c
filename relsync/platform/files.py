"""Local artifact discovery."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from pathlib import Path

from relsync.core.config import ConfigError
from relsync.core.result import Err, Ok, Result

__all__ = ["expand_patterns"]


def expand_patterns(
    patterns: Iterable[str],
    *,
    root: Path | None = None,
) -> Result[list[Path], ConfigError]:
    """Expand glob patterns into artifact paths.

    Each pattern is expanded on its own. Matches within one pattern are sorted;
    results are concatenated in pattern order. A pattern that matches nothing
    contributes nothing. Relative patterns are resolved against ``root`` when
    given, and the returned paths keep that prefix.

    Args:
        patterns: Glob expressions (``dist/*.tar.gz``); hidden files match ``*``
        root: Base directory for relative patterns

    Returns:
        Ok with the matched paths, or Err(ConfigError) if a pattern is invalid
    """
    files: list[Path] = []
    for pattern in patterns:
        reason = _pattern_error(pattern)
        if reason is not None:
            return Err(ConfigError(f"Failed to glob {pattern}", hint=reason))

        full = pattern
        if root is not None and not Path(pattern).is_absolute():
            full = str(root / pattern)

        try:
            matches = sorted(glob.glob(full, include_hidden=True))
        except (OSError, ValueError) as e:
            return Err(ConfigError(f"Failed to glob {pattern}", hint=str(e)))

        files.extend(Path(m) for m in matches)
    return Ok(files)


def _pattern_error(pattern: str) -> str | None:
    """Return why a character class in ``pattern`` is malformed, if it is.

    ``glob`` treats a bad class as literal text and silently matches nothing.
    """
    for part in pattern.split("/"):
        i = part.find("[")
        while i != -1:
            start = i + 1
            if start < len(part) and part[start] in "!^":
                start += 1
            end = part.find("]", start)
            if end == -1:
                return f"unterminated character class in {part!r}"
            if end == start:
                return f"empty character class in {part!r}"
            i = part.find("[", end + 1)
    return None
