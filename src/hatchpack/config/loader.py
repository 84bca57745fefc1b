"""Configuration loading and override resolution."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from hatchpack.config.models import AppConfig

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")

_ENV_OVERRIDES = {
    "HATCHPACK_IGNORE_FILENAME": ("packaging", "ignore_filename"),
    "HATCHPACK_COMPRESSION_LEVEL": ("packaging", "compression_level"),
    "HATCHPACK_OUTPUT_PATH": ("packaging", "output_path"),
    "HATCHPACK_LOG_LEVEL": ("logging", "level"),
}


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Configuration file must deserialize to a mapping")
    return data


def apply_overrides(
    raw_config: dict[str, Any],
    env: Mapping[str, str],
    cli_overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Apply precedence: CLI > env > YAML defaults."""
    merged = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in raw_config.items()
    }
    for env_name, (section, field) in _ENV_OVERRIDES.items():
        if env.get(env_name):
            merged.setdefault(section, {})
            merged[section][field] = env[env_name]

    if cli_overrides:
        if cli_overrides.get("output_path"):
            merged.setdefault("packaging", {})
            merged["packaging"]["output_path"] = str(cli_overrides["output_path"])
        if cli_overrides.get("log_level"):
            merged.setdefault("logging", {})
            merged["logging"]["level"] = cli_overrides["log_level"]
    return merged


def load_app_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Load and validate central application config.

    An explicitly passed path must exist; a missing default settings file
    falls back to model defaults.
    """
    active_env = os.environ if env is None else env
    if config_path is None and not DEFAULT_CONFIG_PATH.exists():
        raw: dict[str, Any] = {}
    else:
        raw = _load_yaml(config_path or DEFAULT_CONFIG_PATH)
    merged = apply_overrides(raw, active_env, cli_overrides)
    return AppConfig.model_validate(merged)
