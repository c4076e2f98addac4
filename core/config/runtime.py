"""
Runtime Configuration

Central configuration for the catalog, placeholder generation, the
execution-layer RPC endpoint and the commitment store.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.schemas.catalog import (
    DEFAULT_FILLER,
    DEFAULT_TOKEN_WIDTH,
    SIMPLIFIED_BEACON_BLOCK_FIELDS,
    FieldCatalog,
)

load_dotenv()


ENV_PREFIX = "BEACONROOT_"


@dataclass
class CatalogConfig:
    """Field catalog settings; validated when the catalog is built."""
    fields: list[str] = field(default_factory=lambda: list(SIMPLIFIED_BEACON_BLOCK_FIELDS))
    token_width: int = DEFAULT_TOKEN_WIDTH
    filler: str = DEFAULT_FILLER


@dataclass
class PlaceholderConfig:
    """Placeholder generation for fields with no source value."""
    num_bytes: int = 10
    seed: Optional[int] = None


@dataclass
class RpcConfig:
    """Execution-layer JSON-RPC endpoint."""
    url: Optional[str] = None
    timeout: float = 30.0
    block: str = "latest"


@dataclass
class StoreConfig:
    """Commitment store persistence."""
    path: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    placeholder: PlaceholderConfig = field(default_factory=PlaceholderConfig)
    rpc: RpcConfig = field(default_factory=RpcConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BEACONROOT_RPC_URL: execution-layer JSON-RPC URL
        - BEACONROOT_RPC_TIMEOUT: RPC timeout in seconds
        - BEACONROOT_STORE_PATH: commitment store JSON file
        - BEACONROOT_LOG_LEVEL: log level
        - BEACONROOT_LOG_FILE: log file
        - BEACONROOT_PLACEHOLDER_SEED: seed for deterministic placeholders
        - BEACONROOT_TOKEN_WIDTH: token width in characters
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}RPC_URL"):
            overrides.setdefault("rpc", {})["url"] = os.getenv(f"{ENV_PREFIX}RPC_URL")
        if os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT"):
            overrides.setdefault("rpc", {})["timeout"] = float(
                os.getenv(f"{ENV_PREFIX}RPC_TIMEOUT", "30")
            )

        if os.getenv(f"{ENV_PREFIX}STORE_PATH"):
            overrides.setdefault("store", {})["path"] = os.getenv(f"{ENV_PREFIX}STORE_PATH")

        if os.getenv(f"{ENV_PREFIX}PLACEHOLDER_SEED"):
            overrides.setdefault("placeholder", {})["seed"] = int(
                os.getenv(f"{ENV_PREFIX}PLACEHOLDER_SEED", "0")
            )

        if os.getenv(f"{ENV_PREFIX}TOKEN_WIDTH"):
            overrides.setdefault("catalog", {})["token_width"] = int(
                os.getenv(f"{ENV_PREFIX}TOKEN_WIDTH", str(DEFAULT_TOKEN_WIDTH))
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from YAML or JSON depending on the file extension."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        catalog_data = data.get("catalog", {})
        placeholder_data = data.get("placeholder", {})
        rpc_data = data.get("rpc", {})
        store_data = data.get("store", {})

        catalog = CatalogConfig(**catalog_data) if catalog_data else CatalogConfig()
        placeholder = (
            PlaceholderConfig(**placeholder_data) if placeholder_data else PlaceholderConfig()
        )
        rpc = RpcConfig(**rpc_data) if rpc_data else RpcConfig()
        store = StoreConfig(**store_data) if store_data else StoreConfig()

        return cls(
            catalog=catalog,
            placeholder=placeholder,
            rpc=rpc,
            store=store,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        Allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section in ("catalog", "placeholder", "rpc", "store"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def build_catalog(self) -> FieldCatalog:
        """
        Build the validated field catalog.

        Raises:
            CatalogConfigurationException: If the configured catalog is unusable
        """
        return FieldCatalog(
            field_names=tuple(self.catalog.fields),
            token_width=self.catalog.token_width,
            filler=self.catalog.filler,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "catalog": {
                "fields": list(self.catalog.fields),
                "token_width": self.catalog.token_width,
                "filler": self.catalog.filler,
            },
            "placeholder": {
                "num_bytes": self.placeholder.num_bytes,
                "seed": self.placeholder.seed,
            },
            "rpc": {
                "url": self.rpc.url,
                "timeout": self.rpc.timeout,
                "block": self.rpc.block,
            },
            "store": {
                "path": self.store.path,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
