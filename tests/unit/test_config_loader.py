"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from hatchpack.config.loader import load_app_config


def _write_config(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "settings.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_cli_overrides_env_and_yaml_defaults(tmp_path: Path) -> None:
    """CLI override should have highest precedence."""
    config_path = _write_config(
        tmp_path,
        """
schema_version: "1.0.0"
packaging:
  output_path: "from-yaml.tar.gz"
  compression_level: 6
logging:
  level: "warning"
""".strip(),
    )

    config = load_app_config(
        config_path,
        env={
            "HATCHPACK_OUTPUT_PATH": "from-env.tar.gz",
            "HATCHPACK_LOG_LEVEL": "debug",
        },
        cli_overrides={"output_path": "from-cli.tar.gz"},
    )

    assert config.packaging.output_path == "from-cli.tar.gz"
    assert config.packaging.compression_level == 6
    assert config.logging.level == "DEBUG"


def test_env_overrides_yaml(tmp_path: Path) -> None:
    """Environment values replace YAML values."""
    config_path = _write_config(tmp_path, "packaging:\n  compression_level: 6\n")
    config = load_app_config(
        config_path,
        env={"HATCHPACK_COMPRESSION_LEVEL": "1", "HATCHPACK_IGNORE_FILENAME": ".deployignore"},
    )
    assert config.packaging.compression_level == 1
    assert config.packaging.ignore_filename == ".deployignore"


def test_missing_default_config_uses_model_defaults(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    """Without a settings file the defaults apply."""
    monkeypatch.chdir(tmp_path)
    config = load_app_config(env={})
    assert config.packaging.ignore_filename == ".hatchignore"
    assert config.packaging.compression_level == 9
    assert config.logging.level == "INFO"


def test_missing_explicit_config_is_rejected(tmp_path: Path) -> None:
    """An explicitly requested file must exist."""
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path / "absent.yaml", env={})


@pytest.mark.parametrize(
    "content",
    [
        "packaging:\n  compression_level: 12\n",
        "packaging:\n  ignore_filename: ../.hatchignore\n",
        "logging:\n  level: chatty\n",
        "unknown_section: {}\n",
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, content: str) -> None:
    """Out-of-range and unknown settings fail validation."""
    with pytest.raises(ValueError):
        load_app_config(_write_config(tmp_path, content), env={})


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    """Top-level YAML must be a mapping."""
    with pytest.raises(ValueError, match="mapping"):
        load_app_config(_write_config(tmp_path, "- a\n- b\n"), env={})
