"""Pydantic models for central YAML configuration."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator

from hatchpack.constants import IGNORE_FILENAME, SCHEMA_VERSION
from hatchpack.schemas.base import StrictSchemaModel


class PackagingConfig(StrictSchemaModel):
    """Artifact packaging controls."""

    ignore_filename: str = Field(default=IGNORE_FILENAME, min_length=1)
    compression_level: int = Field(default=9, ge=1, le=9)
    output_path: str = Field(default="artifact.tar.gz", min_length=1)

    @field_validator("ignore_filename")
    @classmethod
    def validate_ignore_filename(cls, value: str) -> str:
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError("ignore_filename must be a bare file name")
        return value


class LoggingConfig(StrictSchemaModel):
    """Log verbosity for the packager."""

    level: str = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        normalized = str(value).strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unsupported log level: {value}")
        return normalized


class AppConfig(StrictSchemaModel):
    """Central application configuration."""

    schema_version: str = Field(default=SCHEMA_VERSION, min_length=1)
    packaging: PackagingConfig = Field(default_factory=PackagingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
