"""Staleness markers for source files that call the runtime helpers."""

from .lib import HELPER_NAMES, MARKER_PREFIX, marker_line, stamp_file, stamp_text

__all__ = ["MARKER_PREFIX", "HELPER_NAMES", "marker_line", "stamp_text", "stamp_file"]
