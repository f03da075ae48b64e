"""
Beacon Proof CLI

Command-line interface for header field proofs.

Usage:
    python -m beacon_cli run --slot 123456
    python -m beacon_cli prove --header header.json --field state_root --timestamp 1700000000
    python -m beacon_cli check bundle.json
"""

__version__ = "0.1.0"
