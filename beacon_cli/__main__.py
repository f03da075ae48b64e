"""
Module execution entry point.

Allows running with: python -m beacon_cli
"""

import sys
from beacon_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
