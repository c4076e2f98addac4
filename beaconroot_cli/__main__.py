"""
Module execution entry point.

Allows running with: python -m beaconroot_cli
"""

import sys
from beaconroot_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
