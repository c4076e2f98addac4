"""
BeaconRoot CLI

Command-line interface for building, proving and verifying field
commitments.

Usage:
    python -m beaconroot_cli catalog
    python -m beaconroot_cli root --record record.json
    python -m beaconroot_cli proof Coinbase --record record.json --out proof.json
    python -m beaconroot_cli verify proof.json
    python -m beaconroot_cli demo
"""

__version__ = "0.1.0"
