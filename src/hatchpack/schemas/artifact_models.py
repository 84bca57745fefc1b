"""Artifact-stage schema contracts."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from hatchpack.schemas.base import FrozenSchemaModel, StrictSchemaModel
from hatchpack.schemas.enums import (
    DEPLOYABLE_RUNTIMES,
    EntryKind,
    RejectionReason,
    Runtime,
    normalize_runtime,
)


class ArchiveEntry(FrozenSchemaModel):
    """One filesystem object as written into the archive stream."""

    name: str = Field(min_length=1)
    kind: EntryKind
    mode: int = Field(ge=0)
    size: int = Field(default=0, ge=0)
    linkname: str | None = None


class ArtifactStats(StrictSchemaModel):
    """Counters collected while walking the build root."""

    files: int = 0
    directories: int = 0
    symlinks: int = 0
    other: int = 0
    excluded: int = 0
    skipped_symlinks: int = 0
    uncompressed_bytes: int = 0


class ValidationResult(FrozenSchemaModel):
    """Non-raising outcome of a path validation."""

    path: str
    accepted: bool
    resolved_path: str | None = None
    reason: RejectionReason | None = None
    message: str | None = None

    @model_validator(mode="after")
    def validate_outcome(self) -> "ValidationResult":
        if self.accepted and self.resolved_path is None:
            raise ValueError("accepted results must carry resolved_path")
        if not self.accepted and self.reason is None:
            raise ValueError("rejected results must carry a reason")
        return self


class ArtifactMetadata(StrictSchemaModel):
    """Metadata attached to an artifact by the upload collaborator."""

    runtime: Runtime
    start_command: str | None = None
    build_command: str | None = None
    output_dir: str | None = None

    @field_validator("runtime", mode="before")
    @classmethod
    def normalize(cls, value: str | Runtime) -> Runtime:
        return normalize_runtime(value)

    @model_validator(mode="after")
    def validate_deploy_requirements(self) -> "ArtifactMetadata":
        if self.runtime not in DEPLOYABLE_RUNTIMES:
            valid = ", ".join(sorted(r.value for r in DEPLOYABLE_RUNTIMES))
            raise ValueError(f"unknown runtime {self.runtime.value!r} (valid: {valid})")
        if self.runtime != Runtime.STATIC and not self.start_command:
            raise ValueError(
                f"start_command is required for runtime {self.runtime.value!r}"
            )
        return self
