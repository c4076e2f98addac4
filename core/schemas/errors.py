"""
Schemas
File: errors.py

Purpose: Standard error taxonomy across beaconroot.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Catalog & Record Errors
    CATALOG_CONFIGURATION_ERROR = "CATALOG_CONFIGURATION_ERROR"
    MISSING_FIELD = "MISSING_FIELD"
    FIELD_NOT_FOUND = "FIELD_NOT_FOUND"
    EMPTY_FIELD_VALUE = "EMPTY_FIELD_VALUE"

    # Source Errors
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"

    # Commitment Errors
    TIMESTAMP_NOT_INCREASING = "TIMESTAMP_NOT_INCREASING"
    COMMITMENT_NOT_FOUND = "COMMITMENT_NOT_FOUND"

# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class BeaconRootError(BaseModel):
    """
    Serializable form of a BeaconRootException.

    The API renders it inside the ErrorResponse envelope.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.FIELD_NOT_FOUND],
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

# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BeaconRootException(Exception):
    """
    Base exception for all beaconroot errors.

    Carries a stable code, structured details and a retryable flag.
    """

    def __init__(
        self,
        message: str,
        code: str = "BEACONROOT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> BeaconRootError:
        """Convert this exception to a BeaconRootError model."""
        return BeaconRootError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

class CanonicalizationException(BeaconRootException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )

class SchemaValidationException(BeaconRootException):
    """Exception raised when a value does not match its schema."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )

class CatalogConfigurationException(BeaconRootException):
    """
    Raised when a field catalog cannot support a tree.

    Fatal at startup: the catalog size must be a power of two and
    names must be distinct. The catalog is never truncated or padded.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CATALOG_CONFIGURATION_ERROR,
            details=details,
        )

class MissingFieldException(BeaconRootException):
    """Raised when a record lacks a value for a catalog field."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field_name"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.MISSING_FIELD,
            details=full_details,
        )
        self.field_name = field_name

class FieldNotFoundException(BeaconRootException):
    """Raised when a field name is not part of the catalog."""

    def __init__(
        self,
        field_name: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["field_name"] = field_name
        super().__init__(
            message=f"Field {field_name!r} is not in the catalog",
            code=ErrorCodes.FIELD_NOT_FOUND,
            details=full_details,
        )
        self.field_name = field_name

class EmptyFieldValueException(BeaconRootException):
    """Raised when a source supplies an empty value for a field."""

    def __init__(
        self,
        field_name: str,
    ) -> None:
        super().__init__(
            message=f"Source value for field {field_name!r} is empty",
            code=ErrorCodes.EMPTY_FIELD_VALUE,
            details={"field_name": field_name},
        )
        self.field_name = field_name

class TimestampOrderException(BeaconRootException):
    """Raised when a commitment timestamp does not advance."""

    def __init__(
        self,
        timestamp: int,
        latest: int,
    ) -> None:
        super().__init__(
            message=(
                f"Commitment timestamp {timestamp} must be greater than "
                f"the latest committed timestamp {latest}"
            ),
            code=ErrorCodes.TIMESTAMP_NOT_INCREASING,
            details={"timestamp": timestamp, "latest": latest},
        )

class RpcException(BeaconRootException):
    """Raised when the execution-layer RPC endpoint fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SOURCE_UNAVAILABLE,
            details=details,
            retryable=True,
        )

__all__ = [
    "ErrorCodes",
    "BeaconRootError",
    "BeaconRootException",
    "CanonicalizationException",
    "SchemaValidationException",
    "CatalogConfigurationException",
    "MissingFieldException",
    "FieldNotFoundException",
    "EmptyFieldValueException",
    "TimestampOrderException",
    "RpcException",
]
