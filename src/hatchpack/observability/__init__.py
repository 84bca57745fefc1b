"""Observability exports."""

from hatchpack.observability.logging import PACKAGE_LOGGER, configure_logging

__all__ = ["PACKAGE_LOGGER", "configure_logging"]
