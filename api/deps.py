"""
API Dependencies

Shared runtime objects for the route handlers: configuration, the field
catalog and the process-wide commitment store.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from beaconroot_cli.config import default_config_paths
from core.config.runtime import RuntimeConfig
from core.leaves.placeholders import PlaceholderProvider, make_placeholder_provider
from core.schemas.catalog import FieldCatalog
from orchestrator.commitment_store import CommitmentStore

logger = logging.getLogger(__name__)


_config: Optional[RuntimeConfig] = None
_catalog: Optional[FieldCatalog] = None
_store: Optional[CommitmentStore] = None
_lock = threading.Lock()


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from the first config file found, then overlay env vars.

    A config file that fails to parse is logged and skipped.
    """
    config: RuntimeConfig | None = None

    for path in default_config_paths():
        if path.exists():
            try:
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_runtime_config() -> RuntimeConfig:
    """Process-wide config, loaded once on first use."""
    global _config
    with _lock:
        if _config is None:
            _config = load_runtime_config()
        return _config


def get_catalog() -> FieldCatalog:
    """Process-wide catalog; the same object the store verifies against."""
    global _catalog
    config = get_runtime_config()
    with _lock:
        if _catalog is None:
            _catalog = config.build_catalog()
        return _catalog


def get_placeholder_provider(seed: int | None = None) -> PlaceholderProvider:
    """Seeded provider when the request or config gives a seed, random otherwise."""
    config = get_runtime_config()
    if seed is None:
        seed = config.placeholder.seed
    return make_placeholder_provider(seed, config.placeholder.num_bytes)


def get_store() -> CommitmentStore:
    """Process-wide commitment store, created on first use from config."""
    global _store
    config = get_runtime_config()
    catalog = get_catalog()
    with _lock:
        if _store is None:
            path = Path(config.store.path) if config.store.path else None
            _store = CommitmentStore(path=path, catalog=catalog)
            logger.info(f"Commitment store ready (path={path}, commitments={len(_store)})")
        return _store


def set_store(store: Optional[CommitmentStore]) -> None:
    """Replace the process-wide store; None resets it to lazy creation."""
    global _store
    with _lock:
        _store = store


def reset_runtime() -> None:
    """Drop cached config, catalog and store; the next request reloads them."""
    global _config, _catalog, _store
    with _lock:
        _config = None
        _catalog = None
        _store = None
