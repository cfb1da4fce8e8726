# src/keyprint/contracts/__init__.py
"""Shared contracts for cross-boundary data types.

All dataclasses, enums, and exceptions that cross module boundaries are
defined here.

Import pattern:
    from keyprint.contracts import Fingerprint, PublicKey, MalformedKeyError
"""

from keyprint.contracts.enums import (
    DigestAlgorithm,
    KeyAlgorithm,
    KeyForm,
)
from keyprint.contracts.errors import (
    FingerprintFormatError,
    KeyprintError,
    MalformedKeyError,
    UnsupportedAlgorithmError,
    UnsupportedDigestError,
)
from keyprint.contracts.keys import (
    CanonicalEncoding,
    Fingerprint,
    KeyContainer,
    PublicKey,
)

__all__ = [
    "CanonicalEncoding",
    "DigestAlgorithm",
    "Fingerprint",
    "FingerprintFormatError",
    "KeyAlgorithm",
    "KeyContainer",
    "KeyForm",
    "KeyprintError",
    "MalformedKeyError",
    "PublicKey",
    "UnsupportedAlgorithmError",
    "UnsupportedDigestError",
]
