"""
Test fixtures package for beaconroot tests.

Usage:
    from tests.fixtures import make_record, make_publisher

    def test_something():
        record = make_record(overrides={"Coinbase": "0xabc"})
"""

from .common import (
    FIXED_TIMESTAMP,
    make_publisher,
    make_record,
    make_small_catalog,
    make_values,
)

__all__ = [
    "FIXED_TIMESTAMP",
    "make_values",
    "make_record",
    "make_small_catalog",
    "make_publisher",
]
