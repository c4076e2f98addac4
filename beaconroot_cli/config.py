"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
A config file (JSON or YAML) is optional; BEACONROOT_* environment
variables override whatever the file sets.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config.runtime import RuntimeConfig


DEFAULT_CONFIG_NAME = "beaconroot.json"


def default_config_paths() -> list[Path]:
    """Config locations searched when no --config is given, in order."""
    return [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.cwd() / f".{DEFAULT_CONFIG_NAME}",
        Path.home() / ".config" / "beaconroot" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Explicit config file; it must exist when given

    Raises:
        FileNotFoundError: If config_path is given but missing
    """
    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        config = RuntimeConfig()
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Template configuration file with every setting at its default."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
