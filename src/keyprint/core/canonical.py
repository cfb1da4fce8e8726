# src/keyprint/core/canonical.py
"""
Canonical public key encoding for deterministic fingerprinting.

The canonical form of an RSA public key is the DER encoding of its
SubjectPublicKeyInfo: rsaEncryption OID, NULL parameters, and a BIT STRING
wrapping the PKCS#1 RSAPublicKey (modulus, exponent). DER is a
distinguished encoding, so a given (modulus, exponent) has exactly one
byte representation. It is the same byte string OpenSSL emits for
``openssl pkey -pubout -outform DER``.

IMPORTANT: The encoding is rebuilt from the integers alone. Whatever
container the key arrived in (PEM line width, PKCS#1 vs SPKI label,
OpenSSH comment, private vs public) never reaches this module.
"""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from keyprint.contracts import CanonicalEncoding, MalformedKeyError, PublicKey

# Version string for the canonical encoding; part of the fingerprint format contract
CANONICAL_VERSION = "der-spki-v1"


def encode_canonical(key: PublicKey) -> CanonicalEncoding:
    """Produce the DER SubjectPublicKeyInfo encoding of a public key.

    Args:
        key: Public key to encode

    Returns:
        CanonicalEncoding holding the DER bytes

    Raises:
        TypeError: If key is not a PublicKey
        MalformedKeyError: If the RSA numbers are rejected by the backend
    """
    if not isinstance(key, PublicKey):
        raise TypeError(f"encode_canonical() expects a PublicKey, got {type(key).__name__}")

    der = _public_key_object(key).public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return CanonicalEncoding(der=der)


def canonical_pem(key: PublicKey) -> str:
    """Export a public key as a ``PUBLIC KEY`` PEM block of its canonical encoding.

    This is the form to hand to a peer when only the public half should
    leave the process.
    """
    if not isinstance(key, PublicKey):
        raise TypeError(f"canonical_pem() expects a PublicKey, got {type(key).__name__}")

    pem = _public_key_object(key).public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return pem.decode("ascii")


def _public_key_object(key: PublicKey) -> rsa.RSAPublicKey:
    try:
        return rsa.RSAPublicNumbers(e=key.exponent, n=key.modulus).public_key()
    except ValueError as e:
        raise MalformedKeyError(f"Invalid RSA public numbers: {e}") from e
