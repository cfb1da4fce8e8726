# src/keyprint/core/security/__init__.py
"""Key parsing, digests, and fingerprint computation."""

from keyprint.core.security.digest import (
    BUILTIN_DIGESTS,
    DigestRegistry,
    DigestSpec,
    resolve_digest,
)
from keyprint.core.security.fingerprint import (
    DEFAULT_DIGEST,
    fingerprint,
    fingerprint_key,
    parse_fingerprint,
    verify,
)
from keyprint.core.security.keys import KeySource, derive_public_key

__all__ = [
    "BUILTIN_DIGESTS",
    "DEFAULT_DIGEST",
    "DigestRegistry",
    "DigestSpec",
    "KeySource",
    "derive_public_key",
    "fingerprint",
    "fingerprint_key",
    "parse_fingerprint",
    "resolve_digest",
    "verify",
]
