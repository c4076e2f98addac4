"""
Runtime Configuration Module

Provides configuration loading and management for beaconroot.
"""

from .runtime import (
    CatalogConfig,
    PlaceholderConfig,
    RpcConfig,
    RuntimeConfig,
    StoreConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "CatalogConfig",
    "PlaceholderConfig",
    "RpcConfig",
    "RuntimeConfig",
    "StoreConfig",
    "get_default_config",
    "set_default_config",
]
