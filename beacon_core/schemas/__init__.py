"""
Schemas: header records, proof bundles and the error taxonomy.
"""

from .errors import (
    ErrorCodes,
    BeaconProofError,
    BeaconProofException,
    MalformedFieldException,
    ChunkLengthMismatchException,
    IndexOutOfRangeException,
    UnknownFieldException,
    OracleUnavailableException,
    TimestampUnavailableException,
    HeaderNotFoundException,
    BeaconApiException,
    RpcException,
    ConfigurationException,
)
from .header import (
    BYTES_PER_CHUNK,
    SECONDS_PER_SLOT,
    UINT64_MAX,
    HEADER_FIELDS,
    FIELD_INDICES,
    NUMERIC_FIELDS,
    ROOT_FIELDS,
    HeaderData,
    BeaconHeader,
)
from .bundle import ProofBundle, decode_wire_chunk

__all__ = [
    # Errors
    "ErrorCodes",
    "BeaconProofError",
    "BeaconProofException",
    "MalformedFieldException",
    "ChunkLengthMismatchException",
    "IndexOutOfRangeException",
    "UnknownFieldException",
    "OracleUnavailableException",
    "TimestampUnavailableException",
    "HeaderNotFoundException",
    "BeaconApiException",
    "RpcException",
    "ConfigurationException",
    # Header
    "BYTES_PER_CHUNK",
    "SECONDS_PER_SLOT",
    "UINT64_MAX",
    "HEADER_FIELDS",
    "FIELD_INDICES",
    "NUMERIC_FIELDS",
    "ROOT_FIELDS",
    "HeaderData",
    "BeaconHeader",
    # Bundle
    "ProofBundle",
    "decode_wire_chunk",
]
