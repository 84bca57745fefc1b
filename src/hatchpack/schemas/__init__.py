"""Schema contract exports."""

from hatchpack.schemas.artifact_models import (
    ArchiveEntry,
    ArtifactMetadata,
    ArtifactStats,
    ValidationResult,
)
from hatchpack.schemas.enums import EntryKind, RejectionReason, Runtime

__all__ = [
    "ArchiveEntry",
    "ArtifactMetadata",
    "ArtifactStats",
    "EntryKind",
    "RejectionReason",
    "Runtime",
    "ValidationResult",
]
