"""
CLI command modules.
"""

from beaconroot_cli.commands import commitments, merkle

__all__ = ["commitments", "merkle"]
