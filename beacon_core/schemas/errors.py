"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for header proof generation and verification.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

A failed proof is never an error: verification returns False. Exceptions
are reserved for malformed requests and unavailable collaborators.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input decoding
    MALFORMED_FIELD = "MALFORMED_FIELD"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"

    # Merkle engine
    CHUNK_LENGTH_MISMATCH = "CHUNK_LENGTH_MISMATCH"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Collaborators
    ORACLE_UNAVAILABLE = "ORACLE_UNAVAILABLE"
    TIMESTAMP_UNAVAILABLE = "TIMESTAMP_UNAVAILABLE"
    HEADER_NOT_FOUND = "HEADER_NOT_FOUND"
    BEACON_API_ERROR = "BEACON_API_ERROR"
    RPC_ERROR = "RPC_ERROR"

    # Setup
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class BeaconProofError(BaseModel):
    """
    Error model for structured reporting. Verification results carry these
    so the CLI JSON summary exposes code and retryable per error.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_FIELD],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )
    stage: str | None = Field(
        default=None,
        description="Verification stage that failed (oracle, proof, onchain)",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BeaconProofException(Exception):
    """
    Base exception for all header proof errors.

    Carries structured error information and can be converted to a
    BeaconProofError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "BEACON_PROOF_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self, stage: str | None = None) -> BeaconProofError:
        """Convert this exception to a BeaconProofError model."""
        return BeaconProofError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
            stage=stage,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedFieldException(BeaconProofException):
    """Raised when a header field cannot be decoded (bad hex, decimal or length)."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field"] = field_name
        if value is not None:
            full_details["value"] = value
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_FIELD,
            details=full_details,
            retryable=False,
        )
        self.field_name = field_name


class ChunkLengthMismatchException(BeaconProofException):
    """Raised when a chunk is not exactly 32 bytes."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        if length is not None:
            full_details["length"] = length
        super().__init__(
            message=message,
            code=ErrorCodes.CHUNK_LENGTH_MISMATCH,
            details=full_details,
            retryable=False,
        )


class IndexOutOfRangeException(BeaconProofException):
    """Raised when a proof is requested or checked for an index outside the tree."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class UnknownFieldException(BeaconProofException):
    """Raised when a field name is not one of the canonical header fields."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name is not None:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.UNKNOWN_FIELD,
            details=full_details,
            retryable=False,
        )


class OracleUnavailableException(BeaconProofException):
    """Raised when the roots oracle has no root recorded for a timestamp."""

    def __init__(
        self,
        message: str,
        timestamp: int | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        full_details = details or {}
        if timestamp is not None:
            full_details["timestamp"] = timestamp
        super().__init__(
            message=message,
            code=ErrorCodes.ORACLE_UNAVAILABLE,
            details=full_details,
            retryable=retryable,
        )


class TimestampUnavailableException(BeaconProofException):
    """Raised when a block has no execution timestamp to key the oracle with."""

    def __init__(
        self,
        message: str,
        slot: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if slot is not None:
            full_details["slot"] = slot
        super().__init__(
            message=message,
            code=ErrorCodes.TIMESTAMP_UNAVAILABLE,
            details=full_details,
            retryable=True,
        )


class HeaderNotFoundException(BeaconProofException):
    """Raised when the slot search exhausts its attempts."""

    def __init__(
        self,
        message: str,
        slot: int | None = None,
        attempts: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if slot is not None:
            full_details["slot"] = slot
        if attempts is not None:
            full_details["attempts"] = attempts
        super().__init__(
            message=message,
            code=ErrorCodes.HEADER_NOT_FOUND,
            details=full_details,
            retryable=True,
        )


class BeaconApiException(BeaconProofException):
    """Raised when the Beacon node REST API fails or returns garbage."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        full_details = details or {}
        if url:
            full_details["url"] = url
        if status_code is not None:
            full_details["status_code"] = status_code
        super().__init__(
            message=message,
            code=ErrorCodes.BEACON_API_ERROR,
            details=full_details,
            retryable=retryable,
        )
        self.status_code = status_code


class RpcException(BeaconProofException):
    """Raised when an execution-layer JSON-RPC call fails."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        rpc_code: int | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        full_details = details or {}
        if method:
            full_details["method"] = method
        if rpc_code is not None:
            full_details["rpc_code"] = rpc_code
        super().__init__(
            message=message,
            code=ErrorCodes.RPC_ERROR,
            details=full_details,
            retryable=retryable,
        )
        self.rpc_code = rpc_code


class ConfigurationException(BeaconProofException):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
            retryable=False,
        )
