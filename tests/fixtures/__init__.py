"""
Test fixtures package for beacon header proof tests.

This package provides factory functions for creating test objects.
Organized into layers:
- common.py: header records and chunk helpers
- api_fixtures.py: canned Beacon API / JSON-RPC responses and fake transports

Usage:
    from fixtures import make_header_data, make_beacon_api

    def test_something():
        header = make_header_data(slot="123456")
"""

from .common import (
    make_chunk,
    make_beacon_header,
    make_header_data,
    make_bundle,
)

from .api_fixtures import (
    make_json_response,
    make_header_payload,
    make_block_payload,
    FakeBeaconHttp,
    make_rpc_response,
)

__all__ = [
    # Common
    "make_chunk",
    "make_beacon_header",
    "make_header_data",
    "make_bundle",
    # API
    "make_json_response",
    "make_header_payload",
    "make_block_payload",
    "FakeBeaconHttp",
    "make_rpc_response",
]
