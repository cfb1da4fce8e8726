# src/keyprint/core/security/fingerprint.py
"""Public key fingerprinting.

A fingerprint is a digest of the canonical DER encoding of a public key.
Two peers compare fingerprints out of band (read aloud, second channel) to
establish trust in each other's key.

Textual format, version 1:
    <algorithm>:<hex digest>            e.g. sha1:f90cf2ab95283174e4a4...

The algorithm tag says which digest produced the fingerprint, so peers on
different defaults never compare a SHA-1 value against a SHA-256 one.
Untagged text is read with a caller-supplied default (legacy: sha1).

Usage:
    from keyprint.core.security import fingerprint_key, verify

    fp = fingerprint_key(pem_text)
    print(fp.display())          # f9:0c:f2:ab:...
    verify(fp, claimed_text)     # constant-time
"""

from __future__ import annotations

import hmac
import re

from keyprint.contracts import CanonicalEncoding, DigestAlgorithm, Fingerprint, FingerprintFormatError
from keyprint.core.canonical import encode_canonical
from keyprint.core.security.digest import DigestRegistry, is_valid_digest_name, resolve_digest
from keyprint.core.security.keys import KeySource, derive_public_key

# Legacy protocol default; stronger digests are selected by tag
DEFAULT_DIGEST = DigestAlgorithm.SHA1

_TAGGED = re.compile(r"^([A-Za-z0-9_-]+):(.*)$", re.DOTALL)
_SEPARATORS = re.compile(r"[\s:.\-]")
_HEX = re.compile(r"^[0-9a-fA-F]+$")


def fingerprint(
    encoding: CanonicalEncoding,
    algorithm: DigestAlgorithm | str = DEFAULT_DIGEST,
    *,
    registry: DigestRegistry | None = None,
) -> Fingerprint:
    """Digest a canonical encoding.

    Args:
        encoding: Canonical encoding of a public key
        algorithm: Digest algorithm enum or name
        registry: Registry to resolve the algorithm in; built-ins when None

    Returns:
        Fingerprint tagged with the algorithm name

    Raises:
        TypeError: If encoding is not a CanonicalEncoding
        UnsupportedDigestError: If the algorithm is unknown

    Example:
        >>> fp = fingerprint(encode_canonical(public_key))
        >>> len(fp.digest)
        20
    """
    if not isinstance(encoding, CanonicalEncoding):
        raise TypeError(f"fingerprint() expects a CanonicalEncoding, got {type(encoding).__name__}")

    spec = resolve_digest(algorithm, registry)
    return Fingerprint(algorithm=spec.name, digest=spec.compute(encoding.der))


def fingerprint_key(
    source: KeySource,
    algorithm: DigestAlgorithm | str = DEFAULT_DIGEST,
    *,
    password: bytes | str | None = None,
    registry: DigestRegistry | None = None,
) -> Fingerprint:
    """Fingerprint any supported key source.

    Key pairs and standalone public keys go through the same
    derive -> encode -> digest path and therefore agree.
    """
    # Resolve first so an unknown digest fails before any key is parsed
    resolve_digest(algorithm, registry)
    public_key = derive_public_key(source, password=password)
    return fingerprint(encode_canonical(public_key), algorithm, registry=registry)


def parse_fingerprint(
    text: str,
    *,
    default_algorithm: DigestAlgorithm | str = DEFAULT_DIGEST,
    registry: DigestRegistry | None = None,
) -> Fingerprint:
    """Parse a fingerprint from any of its textual forms.

    Accepts tagged (``sha256:ab12...``) and untagged text, in either case,
    with ``:``, ``.``, ``-`` or whitespace between groups.

    Args:
        text: Fingerprint text
        default_algorithm: Algorithm assumed for untagged text
        registry: Registry to resolve tags in; built-ins when None

    Returns:
        Parsed Fingerprint

    Raises:
        FingerprintFormatError: If the text is not hex or its length does
            not match the algorithm's digest size
        UnsupportedDigestError: If the tag names an unknown algorithm
    """
    if not isinstance(text, str):
        raise FingerprintFormatError(f"Fingerprint must be text, got {type(text).__name__}")

    stripped = text.strip()
    tag: str | None = None
    body = stripped
    match = _TAGGED.match(stripped)
    if match is not None and is_valid_digest_name(match.group(1).lower()):
        tag, body = match.group(1), match.group(2)

    spec = resolve_digest(tag if tag is not None else default_algorithm, registry)

    hex_text = _SEPARATORS.sub("", body)
    if not hex_text or not _HEX.match(hex_text) or len(hex_text) % 2:
        raise FingerprintFormatError(f"Fingerprint is not a hex digest: {text!r}")

    digest = bytes.fromhex(hex_text)
    if len(digest) != spec.digest_size:
        raise FingerprintFormatError(
            f"{spec.name} fingerprint must be {spec.digest_size} bytes, got {len(digest)}"
        )
    return Fingerprint(algorithm=spec.name, digest=digest)


def verify(
    local: Fingerprint,
    claimed: Fingerprint | str,
    *,
    registry: DigestRegistry | None = None,
) -> bool:
    """Compare a locally computed fingerprint with a claimed one.

    Both the algorithm tag and the digest bytes are compared with
    hmac.compare_digest and the results combined without branching.
    Fingerprints from different digest algorithms never match.

    Args:
        local: Fingerprint computed from the key in hand
        claimed: Fingerprint received from the peer, as a value or text.
            Untagged text is read with local's algorithm.
        registry: Registry to resolve tags in claimed text

    Returns:
        True if both fingerprints name the same algorithm and digest

    Raises:
        FingerprintFormatError: If claimed text cannot be parsed
        UnsupportedDigestError: If claimed text is tagged with an unknown algorithm
    """
    if isinstance(claimed, str):
        claimed = parse_fingerprint(claimed, default_algorithm=local.algorithm, registry=registry)

    same_algorithm = hmac.compare_digest(local.algorithm.encode("utf-8"), claimed.algorithm.encode("utf-8"))
    same_digest = hmac.compare_digest(local.digest, claimed.digest)
    return same_algorithm & same_digest
