"""
CLI Prove Command

Build a proof bundle offline from a header JSON file. The file holds the
header fields as the Beacon API returns them, either bare or wrapped in
the API's data.header.message envelope.

Usage:
    beacon-proof prove --header header.json --field state_root --timestamp 1700000000 [--out bundle.json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from typing import Any

from beacon_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    read_json,
    write_json,
)
from beacon_core.proof.header_proof import generate_header_proof
from beacon_core.schemas.header import HeaderData


def header_from_json(data: Any) -> HeaderData:
    """Accept a bare header dict or a Beacon API headers response."""
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        message = data["data"].get("header", {}).get("message", {})
        return HeaderData(block_root=data["data"].get("root") or "", **message)
    if not isinstance(data, dict):
        raise ValueError("header file must contain a JSON object")
    return HeaderData(**data)


def prove_cmd(args: Namespace) -> int:
    """Execute the prove command."""
    try:
        header = header_from_json(read_json(args.header))
    except (OSError, ValueError) as e:
        print(f"Error reading header: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    bundle = generate_header_proof(header, args.field, args.timestamp)
    wire = bundle.to_wire()

    if args.out:
        write_json(args.out, wire)
        print(f"Wrote proof bundle to {args.out}")
    else:
        print(json.dumps(wire, indent=2))

    return EXIT_SUCCESS
