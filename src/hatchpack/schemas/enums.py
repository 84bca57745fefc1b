"""Enum definitions for canonical contracts."""

from __future__ import annotations

from enum import Enum


class Runtime(str, Enum):
    NODE = "node"
    BUN = "bun"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    STATIC = "static"
    PHP = "php"


class RejectionReason(str, Enum):
    INVALID_PATH = "invalid_path"
    PATH_TRAVERSAL = "path_traversal"
    RESOLUTION_ERROR = "resolution_error"
    RESTRICTED_PATH = "restricted_path"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


# Runtimes the deploy target accepts for uploaded artifacts.
DEPLOYABLE_RUNTIMES = frozenset(
    {Runtime.NODE, Runtime.PYTHON, Runtime.GO, Runtime.STATIC}
)

RUNTIME_ALIASES: dict[str, Runtime] = {
    "node": Runtime.NODE,
    "nodejs": Runtime.NODE,
    "bun": Runtime.BUN,
    "python": Runtime.PYTHON,
    "py": Runtime.PYTHON,
    "go": Runtime.GO,
    "golang": Runtime.GO,
    "rust": Runtime.RUST,
    "static": Runtime.STATIC,
    "php": Runtime.PHP,
}


def normalize_runtime(raw_value: str | Runtime) -> Runtime:
    """Normalize runtime labels into canonical enum values."""
    if isinstance(raw_value, Runtime):
        return raw_value
    normalized = RUNTIME_ALIASES.get(raw_value.strip().lower())
    if normalized is None:
        raise ValueError(f"Unsupported runtime: {raw_value}")
    return normalized
