"""Data lake path and URL helpers.

Lake paths are always ``/``-separated and relative to the container root.
``None`` and ``""`` both mean the root itself.
"""

from __future__ import annotations

import os
import posixpath
from urllib.parse import quote


def normalize_separators(path: str) -> str:
    """Replace host-native separators with ``/``."""
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return path


def split_segments(path: str | None) -> list[str]:
    """Split a lake path into its non-empty segments."""
    if not path:
        return []
    return [part for part in normalize_separators(path).split("/") if part]


def join_path(*parts: str | None) -> str:
    """Join path pieces with ``/``, dropping empty pieces and duplicate slashes."""
    segments: list[str] = []
    for part in parts:
        segments.extend(split_segments(part))
    return "/".join(segments)


def leaf_name(path: str) -> str:
    """Last segment of a lake path."""
    segments = split_segments(path)
    return segments[-1] if segments else ""


def parent_directory(path: str) -> str:
    """Parent of a lake path, ``""`` for items directly under the root."""
    return posixpath.dirname(join_path(path))


def is_root(path: str | None) -> bool:
    return path is None or path.strip() in ("", "/")


def url_combine(base_url: str, relative_path: str) -> str:
    """Append a relative lake path to a base URL, quoting unsafe characters."""
    relative = join_path(relative_path)
    if not relative:
        return base_url.rstrip("/")
    return f"{base_url.rstrip('/')}/{quote(relative, safe='/')}"
