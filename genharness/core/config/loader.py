"""
Harness configuration loader — reads genharness.yml into a model.

The file is optional. It carries host-supplied analyzer options (exposed
to the generator as-is, without the ``build_property.`` prefix) and
extra additional-text paths.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from genharness.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config filename
HARNESS_CONFIG_FILE = "genharness.yml"


class HarnessConfig(BaseModel):
    """Settings read from genharness.yml."""

    options: dict[str, str] = Field(default_factory=dict)
    additional_texts: list[Path] = Field(default_factory=list)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return ``genharness.yml`` in ``start_dir`` (default: cwd), if present."""
    candidate = (start_dir or Path.cwd()) / HARNESS_CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(path: Path | None = None) -> HarnessConfig:
    """Load and validate the harness configuration.

    Args:
        path: Explicit config path. If None, looks for genharness.yml in
              the current directory and falls back to defaults.

    Returns:
        Validated HarnessConfig. Relative additional-text paths are
        resolved against the config file's directory.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()
    if path is None:
        return HarnessConfig()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return HarnessConfig()

    logger.debug("Loading harness config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # YAML scalars (true, 3) are accepted as option values and kept as text
    options = data.get("options")
    if isinstance(options, dict):
        data["options"] = {str(k): _scalar_text(v) for k, v in options.items()}

    try:
        config = HarnessConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid harness configuration in {path}: {e}") from e

    base = path.parent.resolve()
    config.additional_texts = [
        p if p.is_absolute() else base / p for p in config.additional_texts
    ]

    logger.info(
        "Loaded harness config with %d option(s), %d additional text(s)",
        len(config.options),
        len(config.additional_texts),
    )
    return config


def _scalar_text(value: object) -> object:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value
