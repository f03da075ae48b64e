"""
On-chain Verification Adapters

- OnChainVerifier: calls verifyHeaderField on the BeaconHeaderVerifier
  contract with a ProofBundle
- BeaconRootsOracle: reads the trusted header root for a timestamp from
  the EIP-4788 beacon roots contract
"""

from __future__ import annotations

import logging

from eth_utils import is_address, to_checksum_address

from beacon_core.chain.abi import decode_bool_result, encode_verify_header_field_call
from beacon_core.chain.rpc import JsonRpcClient
from beacon_core.crypto.hashing import to_hex, truncate_hex
from beacon_core.schemas.bundle import ProofBundle
from beacon_core.schemas.errors import (
    ConfigurationException,
    OracleUnavailableException,
    RpcException,
)
from beacon_core.schemas.header import BYTES_PER_CHUNK

logger = logging.getLogger(__name__)

# EIP-4788 beacon roots contract, same address on every chain.
BEACON_ROOTS_ADDRESS = "0x000F3df6D732807Ef1319fB7B8bB8522d0Beac02"

_ZERO_ROOT = bytes(BYTES_PER_CHUNK)


def _checksum(address: str) -> str:
    if not isinstance(address, str) or not is_address(address.lower()):
        raise ConfigurationException(f"invalid contract address: {address!r}")
    return to_checksum_address(address)


class OnChainVerifier:
    """
    Remote verification through the BeaconHeaderVerifier contract.

    Usage:
        verifier = OnChainVerifier(JsonRpcClient(eth_endpoint), verifier_address)
        ok = verifier.verify(bundle)
    """

    def __init__(self, rpc: JsonRpcClient, address: str) -> None:
        self.rpc = rpc
        self.address = _checksum(address)

    def verify(self, bundle: ProofBundle) -> bool:
        """
        Ask the contract whether bundle proves its field.

        Returns:
            The contract's boolean answer

        Raises:
            RpcException: call failed or returned an undecodable value
        """
        logger.info(
            f"Verifying field index {bundle.field_index} with value "
            f"{truncate_hex(to_hex(bundle.field_value), 10)}..."
        )
        logger.info(f"Using timestamp: {bundle.beacon_timestamp}")
        logger.info(f"Merkle proof length: {bundle.proof_length}")

        calldata = encode_verify_header_field_call(bundle)
        result = decode_bool_result(self.rpc.eth_call(self.address, calldata))

        if result:
            logger.info("On-chain verification successful")
        else:
            logger.warning("On-chain verification failed: proof is invalid")
        return result


class BeaconRootsOracle:
    """
    Timestamp -> header root lookup against the EIP-4788 contract.

    The contract takes the 32-byte big-endian timestamp as raw calldata and
    reverts when no root is stored for it.
    """

    def __init__(self, rpc: JsonRpcClient, address: str = BEACON_ROOTS_ADDRESS) -> None:
        self.rpc = rpc
        self.address = _checksum(address)

    def get_root(self, timestamp: int) -> bytes:
        """
        Return the trusted root recorded for timestamp.

        Raises:
            OracleUnavailableException: the oracle reverted, returned nothing,
                or returned the zero root
            RpcException: transport failures, passed through unchanged
        """
        calldata = timestamp.to_bytes(32, "big")
        try:
            result = self.rpc.eth_call(self.address, calldata)
        except RpcException as e:
            if e.rpc_code is None:
                raise
            raise OracleUnavailableException(
                f"no beacon root recorded for timestamp {timestamp}: {e.message}",
                timestamp=timestamp,
            ) from e

        if len(result) != BYTES_PER_CHUNK or result == _ZERO_ROOT:
            raise OracleUnavailableException(
                f"no beacon root recorded for timestamp {timestamp}",
                timestamp=timestamp,
                details={"returned": to_hex(result)},
            )

        logger.info(f"Oracle root for timestamp {timestamp}: {truncate_hex(to_hex(result))}")
        return result
