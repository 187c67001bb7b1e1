"""Domain errors raised by path resolution, listing and storage providers."""

from __future__ import annotations


class LakePathError(Exception):
    """Base class for all LakePath errors."""


class AmbiguousMatch(LakePathError):
    """More than one stored name matches a path segment case-insensitively."""

    def __init__(self, segment: str, candidates: list[str]):
        self.segment = segment
        self.candidates = list(candidates)
        super().__init__(
            f"Multiple paths matched '{segment}' with case insensitive compare: "
            + ", ".join(self.candidates)
        )


class DirectoryNotFound(LakePathError):
    """The listing directory does not exist, even after case correction."""

    def __init__(self, directory: str | None):
        self.directory = directory
        super().__init__(f"Directory '{directory}' could not be found")


class InvalidSortField(LakePathError):
    """The order-by column is not a known item field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Cannot order by unknown column '{field}'")


class StorageError(LakePathError):
    """A listing provider failed to talk to its backend."""

    def __init__(self, message: str, is_recoverable: bool = False):
        self.is_recoverable = is_recoverable
        super().__init__(message)
