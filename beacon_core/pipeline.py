"""
Verification Pipeline

End-to-end run: pick a header, find the next filled slot (whose timestamp
keys the oracle), build a ProofBundle per configured field and check each
bundle locally against the oracle root and remotely through the verifier
contract.

Both checks run the same replay rule; a field where they disagree is
reported as a divergence.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from beacon_core.beacon.client import BeaconClient, Direction
from beacon_core.chain.rpc import JsonRpcClient
from beacon_core.chain.verifier import BeaconRootsOracle, OnChainVerifier
from beacon_core.config.runtime import RuntimeConfig
from beacon_core.crypto.hashing import from_hex, to_hex
from beacon_core.proof.header_proof import generate_header_proof, verify_bundle
from beacon_core.schemas.bundle import ProofBundle
from beacon_core.schemas.errors import (
    BeaconProofError,
    BeaconProofException,
    RpcException,
    TimestampUnavailableException,
)
from beacon_core.schemas.header import SECONDS_PER_SLOT, HeaderData

logger = logging.getLogger(__name__)


@dataclass
class FieldResult:
    """Outcome of proving and verifying one header field."""
    field_name: str
    bundle: Optional[ProofBundle] = None
    local_ok: Optional[bool] = None
    onchain_ok: Optional[bool] = None
    errors: list[BeaconProofError] = field(default_factory=list)

    @property
    def diverged(self) -> bool:
        """Local and on-chain checks both ran and disagree."""
        return (
            self.local_ok is not None
            and self.onchain_ok is not None
            and self.local_ok != self.onchain_ok
        )

    @property
    def passed(self) -> bool:
        """At least one check ran and every check that ran succeeded."""
        checks = [c for c in (self.local_ok, self.onchain_ok) if c is not None]
        return bool(checks) and all(checks) and not self.errors

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "field": self.field_name,
            "passed": self.passed,
            "local_ok": self.local_ok,
            "onchain_ok": self.onchain_ok,
        }
        if self.bundle is not None:
            d["bundle"] = self.bundle.to_wire()
        if self.errors:
            d["errors"] = [e.model_dump() for e in self.errors]
        return d


@dataclass
class RunResult:
    """Outcome of a full verification run."""
    header: HeaderData
    next_header: HeaderData
    oracle_root: Optional[bytes] = None
    root_matches_node: Optional[bool] = None
    fields: list[FieldResult] = field(default_factory=list)
    errors: list[BeaconProofError] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return bool(self.fields) and all(f.passed for f in self.fields) and not self.errors

    @property
    def divergences(self) -> list[str]:
        return [f.field_name for f in self.fields if f.diverged]

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot": self.header.slot,
            "next_slot": self.next_header.slot,
            "beacon_timestamp": self.next_header.timestamp,
            "oracle_root": to_hex(self.oracle_root) if self.oracle_root else None,
            "root_matches_node": self.root_matches_node,
            "all_passed": self.all_passed,
            "divergences": self.divergences,
            "fields": [f.to_dict() for f in self.fields],
            "errors": [e.model_dump() for e in self.errors],
        }


class VerificationPipeline:
    """
    Orchestrates header fetching, proof generation and verification.

    Usage:
        pipeline = VerificationPipeline.from_config(config)
        result = pipeline.run()
    """

    def __init__(
        self,
        beacon: BeaconClient,
        *,
        fields: list[str],
        retry_attempts: int = 5,
        verifier: Optional[OnChainVerifier] = None,
        oracle: Optional[BeaconRootsOracle] = None,
    ) -> None:
        self.beacon = beacon
        self.fields = list(fields)
        self.retry_attempts = retry_attempts
        self.verifier = verifier
        self.oracle = oracle

    @classmethod
    def from_config(cls, config: RuntimeConfig, *, local_only: bool = False) -> "VerificationPipeline":
        """Wire the network adapters described by config."""
        beacon = BeaconClient(config.beacon_endpoint, timeout=config.beacon_api.timeout)
        rpc = JsonRpcClient(config.eth_endpoint, timeout=config.beacon_api.timeout)

        verifier = None
        if not local_only and cls.check_chain(rpc, config.ethereum_node.chain_id):
            verifier = OnChainVerifier(rpc, config.verification.verifier_address)

        return cls(
            beacon,
            fields=config.verification.fields_to_verify,
            retry_attempts=config.beacon_api.retry_attempts,
            verifier=verifier,
            oracle=BeaconRootsOracle(rpc, config.verification.oracle_address),
        )

    @staticmethod
    def check_chain(rpc: JsonRpcClient, expected_chain_id: int) -> bool:
        """
        Query the execution node's chain id.

        Returns:
            False when the node cannot be reached, in which case on-chain
            verification is skipped
        """
        try:
            chain_id = rpc.chain_id()
        except RpcException as e:
            logger.warning(f"Failed to get chain ID: {e}")
            logger.warning("Continuing with local verification only")
            return False

        logger.info(f"Connected to Ethereum node. Chain ID: {chain_id}")
        if chain_id != expected_chain_id:
            logger.warning(f"Node chain ID {chain_id} differs from configured chain ID {expected_chain_id}")
        return True

    def select_headers(self, slot: Optional[str] = None) -> tuple[HeaderData, HeaderData]:
        """
        Return (header to verify, next filled slot header).

        With a slot, that slot is verified and the search goes forward;
        without one, the head is the next filled slot and the search goes
        back for the header to verify.
        """
        if slot is not None:
            logger.info(f"Using specified slot {slot} for verification...")
            header = self.beacon.find_header(HeaderData(slot=slot), Direction.REQUESTED, self.retry_attempts)
            next_header = self.beacon.find_header(header, Direction.NEXT, self.retry_attempts)
        else:
            next_header = self.beacon.fetch_latest_header()
            logger.info("No specific slot provided. Attempting to fetch a previous header for verification...")
            header = self.beacon.find_header(next_header, Direction.PREVIOUS, self.retry_attempts)
        return header, next_header

    def run(self, slot: Optional[str] = None) -> RunResult:
        """
        Execute a full verification run.

        Raises:
            BeaconProofException: when no header pair can be selected or the
                next slot carries no timestamp
        """
        header, next_header = self.select_headers(slot)
        self._log_headers(header, next_header)

        if next_header.timestamp is None:
            raise TimestampUnavailableException(
                "next filled slot has no timestamp to key the oracle",
                slot=next_header.slot,
            )
        timestamp = next_header.timestamp

        result = RunResult(header=header, next_header=next_header)

        if self.oracle is not None:
            try:
                result.oracle_root = self.oracle.get_root(timestamp)
            except BeaconProofException as e:
                logger.warning(f"Oracle lookup failed: {e}")
                result.errors.append(e.to_error_model(stage="oracle"))

        for field_name in self.fields:
            result.fields.append(self.verify_field(header, field_name, timestamp, result.oracle_root))

        if result.fields and result.fields[0].bundle is not None and header.block_root:
            try:
                node_root = from_hex(header.block_root, require_prefix=False)
            except ValueError:
                node_root = None
            result.root_matches_node = node_root == result.fields[0].bundle.beacon_block_root
            if not result.root_matches_node:
                logger.warning("Computed header root differs from the root reported by the node")

        self._log_summary(result)
        return result

    def verify_field(
        self,
        header: HeaderData,
        field_name: str,
        timestamp: int,
        oracle_root: Optional[bytes],
    ) -> FieldResult:
        """Prove one field and run whichever checks are available."""
        logger.info(f"=== Generating proof for {field_name} ===")
        outcome = FieldResult(field_name=field_name)

        try:
            outcome.bundle = generate_header_proof(header, field_name, timestamp)
        except BeaconProofException as e:
            logger.error(f"Error generating proof for {field_name}: {e}")
            outcome.errors.append(e.to_error_model(stage="proof"))
            return outcome

        logger.info(f"Proof generated with {outcome.bundle.proof_length} elements")

        if oracle_root is not None:
            outcome.local_ok = verify_bundle(outcome.bundle, oracle_root)
            logger.info(f"Local verification against oracle root: {outcome.local_ok}")

        if self.verifier is not None:
            logger.info("Performing onchain verification...")
            try:
                outcome.onchain_ok = self.verifier.verify(outcome.bundle)
            except BeaconProofException as e:
                logger.error(f"Error performing onchain verification: {e}")
                outcome.errors.append(e.to_error_model(stage="onchain"))

        if outcome.diverged:
            logger.error(
                f"Local and on-chain verification disagree for {field_name}: "
                f"local={outcome.local_ok} onchain={outcome.onchain_ok}"
            )

        return outcome

    @staticmethod
    def _log_headers(header: HeaderData, next_header: HeaderData) -> None:
        logger.info("Beacon Block Header (to verify):")
        for name in ("slot", "proposer_index", "parent_root", "state_root", "body_root"):
            logger.info(f"  {name}: {getattr(header, name)}")

        if header.timestamp is not None and next_header.timestamp is not None:
            diff = next_header.timestamp - header.timestamp
            logger.info(f"Next filled slot timestamp: {next_header.timestamp}")
            logger.info(f"Time difference between blocks: {diff} seconds ({diff / SECONDS_PER_SLOT:.2f} slots)")

    @staticmethod
    def _log_summary(result: RunResult) -> None:
        if not result.fields:
            logger.info("No verification results to display.")
            return
        for f in result.fields:
            logger.info(f"{f.field_name}: {'Passed' if f.passed else 'Failed'}")
        if result.all_passed:
            logger.info("All verifications passed successfully!")
        else:
            logger.warning("Some verifications failed. Check the results above.")
