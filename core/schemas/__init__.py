"""
Schemas

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    BeaconRootError,
    BeaconRootException,
    CanonicalizationException,
    CatalogConfigurationException,
    EmptyFieldValueException,
    ErrorCodes,
    FieldNotFoundException,
    MissingFieldException,
    RpcException,
    SchemaValidationException,
    TimestampOrderException,
)

# Catalog, record and proof
from .catalog import (
    DEFAULT_CATALOG,
    DEFAULT_FILLER,
    DEFAULT_TOKEN_WIDTH,
    SIMPLIFIED_BEACON_BLOCK_FIELDS,
    FieldCatalog,
    is_power_of_two,
)
from .record import Record
from .proof import FieldProof

# Verification results
from .verification import (
    CheckResult,
    VerificationResult,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "BeaconRootError",
    "BeaconRootException",
    "CanonicalizationException",
    "CatalogConfigurationException",
    "EmptyFieldValueException",
    "ErrorCodes",
    "FieldNotFoundException",
    "MissingFieldException",
    "RpcException",
    "SchemaValidationException",
    "TimestampOrderException",
    # Catalog / record / proof
    "DEFAULT_CATALOG",
    "DEFAULT_FILLER",
    "DEFAULT_TOKEN_WIDTH",
    "SIMPLIFIED_BEACON_BLOCK_FIELDS",
    "FieldCatalog",
    "is_power_of_two",
    "Record",
    "FieldProof",
    # Verification
    "CheckResult",
    "VerificationResult",
]
