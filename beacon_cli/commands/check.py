"""
CLI Check Command

Verify a proof bundle JSON file offline against a trusted root (or the
bundle's own root), and optionally through the on-chain verifier.

Usage:
    beacon-proof check bundle.json [--root 0x...] [--onchain] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Any

from beacon_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    read_json,
    status_mark,
)
from beacon_core.chain.rpc import JsonRpcClient
from beacon_core.chain.verifier import OnChainVerifier
from beacon_core.crypto.hashing import to_hex
from beacon_core.proof.header_proof import verify_bundle
from beacon_core.schemas.bundle import ProofBundle, decode_wire_chunk

logger = logging.getLogger(__name__)


def check_cmd(args: Namespace) -> int:
    """Execute the check command."""
    try:
        data = read_json(args.bundle_path)
    except (OSError, ValueError) as e:
        print(f"Error reading bundle: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not isinstance(data, dict):
        print("Error: bundle file must contain a JSON object", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    bundle = ProofBundle.from_wire(data)
    trusted_root = decode_wire_chunk(args.root, "root") if args.root else None

    summary: dict[str, Any] = {
        "field": bundle.field_name,
        "field_index": bundle.field_index,
        "root": to_hex(trusted_root if trusted_root is not None else bundle.beacon_block_root),
        "root_source": "argument" if trusted_root is not None else "bundle",
        "local_ok": verify_bundle(bundle, trusted_root),
    }

    if args.onchain:
        config = args.runtime_config
        logger.info(f"Verifying on-chain via {config.eth_endpoint}")
        verifier = OnChainVerifier(
            JsonRpcClient(config.eth_endpoint, timeout=config.beacon_api.timeout),
            config.verification.verifier_address,
        )
        summary["onchain_ok"] = verifier.verify(bundle)

    ok = summary["local_ok"] and summary.get("onchain_ok", True)

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"field: {summary['field']} (index {summary['field_index']})")
        print(f"root: {summary['root']} ({summary['root_source']})")
        print(f"local: {status_mark(summary['local_ok'])}")
        if "onchain_ok" in summary:
            print(f"onchain: {status_mark(summary['onchain_ok'])}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
