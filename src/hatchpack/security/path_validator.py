"""Traversal and restricted-directory checks for user-supplied paths."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from hatchpack.errors import (
    InvalidPathError,
    PackagerError,
    PathResolutionError,
    PathTraversalError,
    RestrictedPathError,
)
from hatchpack.schemas.artifact_models import ValidationResult
from hatchpack.schemas.enums import RejectionReason

LOGGER = logging.getLogger(__name__)

RESTRICTED_DIRECTORIES = (
    "/etc",
    "/root",
    "/var",
    "/usr",
    "/bin",
    "/sbin",
    "/sys",
    "/proc",
)
TRAVERSAL_MARKER = ".."

_REASONS: dict[type[PackagerError], RejectionReason] = {
    InvalidPathError: RejectionReason.INVALID_PATH,
    PathTraversalError: RejectionReason.PATH_TRAVERSAL,
    PathResolutionError: RejectionReason.RESOLUTION_ERROR,
    RestrictedPathError: RejectionReason.RESTRICTED_PATH,
}


class PathValidator:
    """Reject traversal attempts and paths under sensitive system directories.

    The raw string is checked for ``..`` before anything touches the
    filesystem. Both the absolute and the symlink-resolved forms are then
    compared against the blocklist, so a symlink inside a project cannot
    smuggle a blocked location past the check.
    """

    def __init__(self, restricted_dirs: tuple[str, ...] = RESTRICTED_DIRECTORIES) -> None:
        self.restricted_dirs = restricted_dirs

    def validate(self, path: str | os.PathLike[str]) -> Path:
        """Return the resolved absolute path or raise a ``PackagerError``."""
        raw = os.fspath(path)
        # An empty path is relative and resolves to the working directory.
        if "\x00" in raw:
            raise InvalidPathError(f"invalid path: {raw!r}")
        try:
            absolute = os.path.abspath(raw)
        except (OSError, ValueError) as exc:
            raise InvalidPathError(f"invalid path {raw!r}: {exc}") from exc

        if TRAVERSAL_MARKER in raw:
            LOGGER.warning("Rejected path with traversal marker: %r", raw)
            raise PathTraversalError(f"path traversal detected in {raw!r}")

        try:
            resolved = os.path.realpath(absolute, strict=True)
        except FileNotFoundError:
            # Not-yet-created paths are judged on their absolute form.
            resolved = absolute
        except OSError as exc:
            raise PathResolutionError(
                f"resolving path {raw!r}: {exc.strerror or exc}"
            ) from exc

        blocked = self.restricted_root(resolved, absolute)
        if blocked is not None:
            LOGGER.warning("Rejected path %r under restricted %s", raw, blocked)
            raise RestrictedPathError(raw, blocked)
        return Path(resolved)

    def restricted_root(self, *candidates: str) -> str | None:
        """Return the first blocked directory containing any candidate path."""
        for blocked in self.restricted_dirs:
            if any(is_within(candidate, blocked) for candidate in candidates):
                return blocked
        return None

    def check(self, path: str | os.PathLike[str]) -> ValidationResult:
        """Non-raising variant of ``validate`` for reporting surfaces."""
        raw = os.fspath(path)
        try:
            resolved = self.validate(raw)
        except PackagerError as exc:
            return ValidationResult(
                path=raw,
                accepted=False,
                reason=_REASONS[type(exc)],
                message=str(exc),
            )
        return ValidationResult(path=raw, accepted=True, resolved_path=str(resolved))


def is_within(candidate: str, blocked: str) -> bool:
    return candidate == blocked or candidate.startswith(blocked.rstrip("/") + "/")


def validate_path(path: str | os.PathLike[str]) -> Path:
    """Validate against the default blocklist."""
    return PathValidator().validate(path)
