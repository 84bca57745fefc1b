"""Redaction utilities for secrets that may leak into messages."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"
_PREFIXED_PATTERNS = [
    re.compile(r"(?i)\b(authorization\s*:\s*bearer\s+)[A-Za-z0-9._:-]+"),
    re.compile(
        r"(?i)\b((?:[A-Z0-9_]*_)?(?:secret|token|password|api[-_]?key)[A-Z0-9_]*\s*[=:]\s*)"
        r"[\"']?[^\s\"']+[\"']?"
    ),
]
_BARE_PATTERNS = [
    re.compile(r"\bhatch_[A-Za-z0-9]{16,}\b"),
    re.compile(r"\bsk-[A-Za-z0-9:_-]{16,}\b"),
]


def redact_text(value: str) -> str:
    """Redact secrets from a text value."""
    redacted = value
    for pattern in _PREFIXED_PATTERNS:
        redacted = pattern.sub(r"\1" + REDACTED, redacted)
    for pattern in _BARE_PATTERNS:
        redacted = pattern.sub(REDACTED, redacted)
    return redacted


def redact_mapping(value: Any) -> Any:
    """Recursively redact strings in nested dictionaries/lists."""
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return {k: redact_mapping(v) for k, v in value.items()}
    if isinstance(value, list):
        return [redact_mapping(item) for item in value]
    return value
