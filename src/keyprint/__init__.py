# src/keyprint/__init__.py
"""keyprint: canonical fingerprints for RSA identity keys.

Typical use:
    from keyprint import fingerprint_key, verify

    mine = fingerprint_key(private_pem)         # from the key pair
    theirs = fingerprint_key(peer_public_pem)   # from a public key alone
    verify(theirs, "sha1:f90cf2ab...")           # text read out by the peer
"""

__version__ = "0.1.0"

# isort: skip_file
from keyprint.contracts import (
    CanonicalEncoding,
    DigestAlgorithm,
    Fingerprint,
    FingerprintFormatError,
    KeyAlgorithm,
    KeyprintError,
    MalformedKeyError,
    PublicKey,
    UnsupportedAlgorithmError,
    UnsupportedDigestError,
)
from keyprint.core import encode_canonical
from keyprint.core.security import (
    DEFAULT_DIGEST,
    DigestRegistry,
    derive_public_key,
    fingerprint,
    fingerprint_key,
    parse_fingerprint,
    verify,
)
from keyprint.engine import FingerprintEngine

__all__ = [
    "DEFAULT_DIGEST",
    "CanonicalEncoding",
    "DigestAlgorithm",
    "DigestRegistry",
    "Fingerprint",
    "FingerprintEngine",
    "FingerprintFormatError",
    "KeyAlgorithm",
    "KeyprintError",
    "MalformedKeyError",
    "PublicKey",
    "UnsupportedAlgorithmError",
    "UnsupportedDigestError",
    "__version__",
    "derive_public_key",
    "encode_canonical",
    "fingerprint",
    "fingerprint_key",
    "parse_fingerprint",
    "verify",
]
