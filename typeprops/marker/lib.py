"""Staleness marker writer.

Build caches key on file contents, so a file whose helper calls depend on
types declared elsewhere would otherwise keep a stale transform result.
Stamping writes a timestamp comment above every helper call line:

    ```ts
    // typescript-type-transformer:update=1624351200000
    const keys = transformTypeToKeys<Props>();
    ```

Older markers are removed wherever they are, so repeated stamping keeps
exactly one marker per call line.
"""

from __future__ import annotations

import re
import time
from pathlib import Path

from typeprops.core import get_logger

logger = get_logger("marker")

MARKER_PREFIX = "// typescript-type-transformer:update="

HELPER_NAMES = ("transformTypeToKeys", "transformTypeToPropTypes", "transformTypeToSchema")

_CALL_RE = re.compile(r"\b(?:%s)\s*[<(]" % "|".join(HELPER_NAMES))
_IMPORT_RE = re.compile(r"^\s*import\b")


def marker_line(timestamp: int, indent: str = "") -> str:
    return f"{indent}{MARKER_PREFIX}{timestamp}"


def _calls_helper(line: str) -> bool:
    return not _IMPORT_RE.match(line) and _CALL_RE.search(line) is not None


def stamp_text(text: str, timestamp: int) -> str:
    """Refresh markers in source text.

    Args:
        text: Source file contents.
        timestamp: Marker value, epoch milliseconds.

    Returns:
        str: Text with old markers removed and one marker placed before
        each line calling a helper (import lines excluded).
    """
    stamped: list[str] = []
    for line in text.split("\n"):
        if line.strip().startswith(MARKER_PREFIX):
            continue
        if _calls_helper(line):
            indent = line[: len(line) - len(line.lstrip())]
            stamped.append(marker_line(timestamp, indent))
        stamped.append(line)
    return "\n".join(stamped)


def stamp_file(path: str | Path, timestamp: int | None = None) -> bool:
    """Refresh markers in a file on disk.

    Args:
        path: Source file to update.
        timestamp: Marker value; defaults to now in epoch milliseconds.

    Returns:
        bool: True if the file was rewritten.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    path = Path(path)
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    text = path.read_text(encoding="utf-8")
    stamped = stamp_text(text, timestamp)
    if stamped == text:
        return False
    path.write_text(stamped, encoding="utf-8")
    logger.debug(f"Stamped {path} with {timestamp}")
    return True


__all__ = ["MARKER_PREFIX", "HELPER_NAMES", "marker_line", "stamp_text", "stamp_file"]
