"""
Placeholder Providers
Synthetic tokens for catalog fields whose true value is unavailable
off-chain (consensus-layer data).

Providers are injected into the leaf deriver so tests can swap the random
provider for a seeded one. Placeholder tokens are hex digests truncated to
the token width. A proof for a placeholder field proves the committed
placeholder token, nothing about the real consensus-layer value.
"""
from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

from core.crypto.hashing import random_token, sha256_hex


# Number of random bytes hashed per placeholder
PLACEHOLDER_NUM_BYTES = 10


@runtime_checkable
class PlaceholderProvider(Protocol):
    """Produces a synthetic token for a field."""

    def __call__(self, field_name: str, width: int) -> str:
        ...


class RandomPlaceholderProvider:
    """
    Non-deterministic provider backed by os.urandom.

    Each call hashes num_bytes fresh random bytes.
    """

    def __init__(self, num_bytes: int = PLACEHOLDER_NUM_BYTES) -> None:
        if num_bytes < 1:
            raise ValueError(f"num_bytes must be positive, got {num_bytes}")
        self.num_bytes = num_bytes

    def __call__(self, field_name: str, width: int) -> str:
        return random_token(width, self.num_bytes)


class SeededPlaceholderProvider:
    """
    Deterministic provider for tests and reproducible demos.

    Two providers built with the same seed yield the same sequence of tokens.
    """

    def __init__(self, seed: int, num_bytes: int = PLACEHOLDER_NUM_BYTES) -> None:
        if num_bytes < 1:
            raise ValueError(f"num_bytes must be positive, got {num_bytes}")
        self.seed = seed
        self.num_bytes = num_bytes
        self._rng = random.Random(seed)

    def __call__(self, field_name: str, width: int) -> str:
        data = bytes(self._rng.randrange(256) for _ in range(self.num_bytes))
        return sha256_hex(data)[:width]


def make_placeholder_provider(
    seed: int | None = None,
    num_bytes: int = PLACEHOLDER_NUM_BYTES,
) -> PlaceholderProvider:
    """Seeded provider when a seed is given, random otherwise."""
    if seed is None:
        return RandomPlaceholderProvider(num_bytes)
    return SeededPlaceholderProvider(seed, num_bytes)


__all__ = [
    "PLACEHOLDER_NUM_BYTES",
    "PlaceholderProvider",
    "RandomPlaceholderProvider",
    "SeededPlaceholderProvider",
    "make_placeholder_provider",
]
