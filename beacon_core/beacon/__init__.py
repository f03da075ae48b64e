"""
Beacon node REST API access.
"""

from .client import BeaconClient, Direction

__all__ = [
    "BeaconClient",
    "Direction",
]
