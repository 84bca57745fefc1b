"""Error kinds raised by path validation and artifact packaging."""

from __future__ import annotations

from pathlib import Path


class PackagerError(Exception):
    """Base class for every terminal packaging failure."""


class InvalidPathError(PackagerError):
    """Raised when a path argument cannot be normalized."""


class PathTraversalError(PackagerError):
    """Raised when the raw path input contains a traversal marker."""


class PathResolutionError(PackagerError):
    """Raised when symlink resolution fails for a reason other than nonexistence."""


class RestrictedPathError(PackagerError):
    """Raised when a path falls under a blocked system directory."""

    def __init__(self, path: str, blocked: str) -> None:
        super().__init__(f"path {path!r} resolves to restricted directory {blocked!r}")
        self.path = path
        self.blocked = blocked


class DirectoryNotFoundError(PackagerError):
    """Raised when the build root is missing or not a directory."""


class FileReadError(PackagerError):
    """Raised when a file cannot be read while building an artifact."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"reading {path}: {reason}")
        self.path = path


class ArtifactTooLargeError(PackagerError):
    """Raised when the finished artifact exceeds the size ceiling."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        super().__init__(
            f"artifact too large ({size_bytes / 1024 / 1024:.0f} MB, "
            f"max {max_bytes / 1024 / 1024:.0f} MB)"
        )
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
