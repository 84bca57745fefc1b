"""Settings overrides read from a local ``.env`` file.

The working directory is usually the project being packaged, and its
``.env`` holds that project's secrets. Only ``HATCHPACK_*`` keys are
copied into the process environment; everything else in the file is
left untouched.
"""

from __future__ import annotations

import logging
import os

from dotenv import dotenv_values, find_dotenv

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "HATCHPACK_"
_DISABLE_DOTENV_VALUES = {"1", "true", "yes", "on"}


def load_runtime_env(*, filename: str = ".env") -> list[str]:
    """Apply ``HATCHPACK_*`` settings from .env without overriding the process env.

    Returns the names of the keys that were applied.
    """
    disabled = os.getenv(f"{ENV_PREFIX}DISABLE_DOTENV", "").strip().lower()
    if disabled in _DISABLE_DOTENV_VALUES:
        return []

    dotenv_path = find_dotenv(filename=filename, usecwd=True)
    if not dotenv_path:
        return []

    applied = []
    for key, value in dotenv_values(dotenv_path).items():
        if not key.startswith(ENV_PREFIX) or value is None or key in os.environ:
            continue
        os.environ[key] = value
        applied.append(key)
    if applied:
        LOGGER.debug("Applied %s from %s", ", ".join(applied), dotenv_path)
    return applied
