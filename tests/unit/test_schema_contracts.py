"""Schema contract validation tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hatchpack.schemas.artifact_models import (
    ArchiveEntry,
    ArtifactMetadata,
    ValidationResult,
)
from hatchpack.schemas.enums import EntryKind, RejectionReason, Runtime


def test_metadata_normalizes_runtime_aliases() -> None:
    """Runtime labels are normalized to canonical values."""
    metadata = ArtifactMetadata(runtime="NodeJS", start_command="node server.js")
    assert metadata.runtime == Runtime.NODE


def test_static_runtime_needs_no_start_command() -> None:
    """Static artifacts are served without a start command."""
    assert ArtifactMetadata(runtime="static").start_command is None


def test_non_static_runtime_requires_start_command() -> None:
    """Process runtimes must declare how to start."""
    with pytest.raises(ValidationError, match="start_command is required"):
        ArtifactMetadata(runtime="python")


def test_undeployable_runtime_is_rejected() -> None:
    """Template-only runtimes cannot be uploaded."""
    with pytest.raises(ValidationError, match="unknown runtime"):
        ArtifactMetadata(runtime="rust", start_command="./app")
    with pytest.raises(ValidationError):
        ArtifactMetadata(runtime="cobol", start_command="run")


def test_validation_result_requires_consistent_fields() -> None:
    """Accepted results carry a path; rejections carry a reason."""
    with pytest.raises(ValidationError):
        ValidationResult(path="x", accepted=True)
    with pytest.raises(ValidationError):
        ValidationResult(path="x", accepted=False)
    result = ValidationResult(
        path="../x", accepted=False, reason=RejectionReason.PATH_TRAVERSAL
    )
    assert result.reason == RejectionReason.PATH_TRAVERSAL


def test_archive_entry_is_immutable() -> None:
    """Entries are frozen records."""
    entry = ArchiveEntry(name="a.txt", kind=EntryKind.FILE, mode=0o644, size=3)
    with pytest.raises(ValidationError):
        entry.size = 4  # type: ignore[misc]
