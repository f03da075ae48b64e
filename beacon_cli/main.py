"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m beacon_cli run [--slot N] [--beacon URL] [--eth URL] [--local-only] [--json]
    python -m beacon_cli prove --header header.json --field state_root --timestamp T [--out FILE]
    python -m beacon_cli check bundle.json [--root 0x...] [--onchain]
    python -m beacon_cli config --init

Environment Variables:
    BEACON_PROOF_BEACON_ENDPOINT    Beacon API endpoint
    BEACON_PROOF_ETH_ENDPOINT       Execution JSON-RPC endpoint
    BEACON_PROOF_VERIFIER_ADDRESS   BeaconHeaderVerifier contract address
    BEACON_PROOF_RETRIES            Slot search attempts
    BEACON_PROOF_FIELDS             Comma-separated fields to verify
    BEACON_PROOF_LOG_LEVEL          Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from beacon_cli import __version__
from beacon_cli.commands import check, prove, run
from beacon_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from beacon_core.config.runtime import get_default_config_template, load_config
from beacon_core.schemas.errors import BeaconProofException
from beacon_core.schemas.header import HEADER_FIELDS


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="beacon-proof",
        description="Generate and verify Merkle proofs for beacon block header fields.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- run command ---
    run_parser = subparsers.add_parser(
        "run",
        help="Fetch a header, prove its fields and verify them",
        description="Fetch a beacon header, build a proof per field, and verify locally and on-chain.",
    )
    run_parser.add_argument("--slot", type=str, default=None, help="Slot to verify (default: slot before head)")
    run_parser.add_argument("--beacon", type=str, default=None, help="Beacon API endpoint")
    run_parser.add_argument("--eth", type=str, default=None, help="Execution JSON-RPC endpoint")
    run_parser.add_argument("--verifier", type=str, default=None, help="Verifier contract address")
    run_parser.add_argument("--retries", type=int, default=None, help="Slot search attempts")
    run_parser.add_argument(
        "--fields",
        nargs="+",
        choices=list(HEADER_FIELDS),
        default=None,
        help="Fields to verify (default: all)",
    )
    run_parser.add_argument(
        "--local-only",
        action="store_true",
        default=False,
        help="Skip the on-chain verifier, check against the oracle root only",
    )
    run_parser.add_argument("--json", action="store_true", default=False, help="Output machine-readable JSON")
    run_parser.add_argument("--debug", action="store_true", default=False, help="Show tracebacks")
    run_parser.set_defaults(func=run.run_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Build a proof bundle from a header JSON file",
        description="Build a proof bundle offline from header fields as returned by the Beacon API.",
    )
    prove_parser.add_argument("--header", type=str, required=True, help="Header JSON file")
    prove_parser.add_argument("--field", type=str, required=True, help="Field to prove")
    prove_parser.add_argument("--timestamp", type=int, required=True, help="Oracle timestamp (next filled slot)")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Write the bundle to this file")
    prove_parser.add_argument("--debug", action="store_true", default=False, help="Show tracebacks")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- check command ---
    check_parser = subparsers.add_parser(
        "check",
        help="Verify a proof bundle JSON file",
        description="Verify a bundle against a trusted root (default: its own root) or on-chain.",
    )
    check_parser.add_argument("bundle_path", type=str, help="Bundle JSON file")
    check_parser.add_argument("--root", type=str, default=None, help="Trusted header root (0x hex)")
    check_parser.add_argument(
        "--onchain",
        action="store_true",
        default=False,
        help="Also verify through the verifier contract",
    )
    check_parser.add_argument("--json", action="store_true", default=False, help="Output machine-readable JSON")
    check_parser.add_argument("--debug", action="store_true", default=False, help="Show tracebacks")
    check_parser.set_defaults(func=check.check_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument("--init", action="store_true", default=False, help="Create a template configuration file")
    config_parser.add_argument("--show", action="store_true", default=False, help="Show current configuration")
    config_parser.add_argument(
        "--path",
        type=str,
        default="beacon-proof.yaml",
        help="Path for config file (default: beacon-proof.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (BEACON_PROOF_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: beacon-proof config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, BeaconProofException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=config.log_file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except BeaconProofException as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
