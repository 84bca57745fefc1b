"""Security exports."""

from hatchpack.security.path_validator import (
    RESTRICTED_DIRECTORIES,
    PathValidator,
    validate_path,
)
from hatchpack.security.redaction import redact_mapping, redact_text

__all__ = [
    "PathValidator",
    "RESTRICTED_DIRECTORIES",
    "redact_mapping",
    "redact_text",
    "validate_path",
]
