"""
CLI Run Command

Fetch a header, build proofs for the configured fields and verify them
against the oracle root and the on-chain verifier.

Usage:
    beacon-proof run [--slot N] [--beacon URL] [--eth URL] [--local-only] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from typing import Any

from beacon_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    status_mark,
)
from beacon_core.config.runtime import RuntimeConfig
from beacon_core.crypto.hashing import to_hex
from beacon_core.pipeline import RunResult, VerificationPipeline

logger = logging.getLogger(__name__)


def apply_cli_overrides(config: RuntimeConfig, args: Namespace) -> RuntimeConfig:
    """Overlay command-line flags on the loaded configuration."""
    overrides: dict[str, Any] = {}
    if args.beacon:
        overrides.setdefault("beacon_api", {})["endpoints"] = [args.beacon]
    if args.retries:
        overrides.setdefault("beacon_api", {})["retry_attempts"] = args.retries
    if args.eth:
        overrides.setdefault("ethereum_node", {})["endpoint"] = args.eth
    if args.verifier:
        overrides.setdefault("verification", {})["verifier_address"] = args.verifier
    if args.fields:
        overrides.setdefault("verification", {})["fields_to_verify"] = list(args.fields)
    if args.slot:
        overrides["slot"] = args.slot
    if not overrides:
        return config
    return config.with_overrides(overrides)


def print_result_human(result: RunResult) -> None:
    """Print a run result in human-readable format."""
    print(f"slot: {result.header.slot}")
    print(f"next_slot: {result.next_header.slot}")
    print(f"beacon_timestamp: {result.next_header.timestamp}")
    print(f"oracle_root: {to_hex(result.oracle_root) if result.oracle_root else '(unavailable)'}")
    if result.root_matches_node is not None:
        print(f"root_matches_node: {str(result.root_matches_node).lower()}")

    print("\nfields:")
    for f in result.fields:
        print(
            f"  {status_mark(f.passed)} {f.field_name}"
            f"  local={status_mark(f.local_ok)} onchain={status_mark(f.onchain_ok)}"
        )
        for err in f.errors:
            print(f"      error [{err.code}]: {err.message}")

    if result.divergences:
        print(f"\ndivergences: {', '.join(result.divergences)}")
    if result.errors:
        print(f"\nerrors ({len(result.errors)}):")
        for err in result.errors:
            print(f"  ✗ {err.stage or 'run'} [{err.code}]: {err.message}")

    print(f"\nall_passed: {str(result.all_passed).lower()}")


def run_cmd(args: Namespace) -> int:
    """
    Execute the run command.

    Returns:
        EXIT_SUCCESS when every field passed, EXIT_VERIFICATION_FAILED otherwise
    """
    config = apply_cli_overrides(args.runtime_config, args)
    logger.info(f"Using Beacon API at {config.beacon_endpoint}")
    pipeline = VerificationPipeline.from_config(config, local_only=args.local_only)

    result = pipeline.run(slot=config.slot)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result_human(result)

    return EXIT_SUCCESS if result.all_passed else EXIT_VERIFICATION_FAILED
