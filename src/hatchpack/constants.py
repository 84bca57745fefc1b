"""Package-wide constants."""

from __future__ import annotations

PACKAGE_VERSION = "0.3.0"
SCHEMA_VERSION = "1.0.0"

IGNORE_FILENAME = ".hatchignore"
DEPLOY_CONFIG_FILENAME = ".hatch.toml"

# Enforced on the compressed stream, not on input bytes.
MAX_ARTIFACT_BYTES = 500 * 1024 * 1024
