# src/keyprint/contracts/enums.py
"""Status codes, algorithm names, and container kinds used across module boundaries.

All enums use (str, Enum) so that values can be written straight into
fingerprint tags and settings files without conversion.
"""

from enum import Enum


class KeyAlgorithm(str, Enum):
    """Public key algorithm family.

    Only RSA is supported. Any other family is rejected with
    UnsupportedAlgorithmError rather than fingerprinted.
    """

    RSA = "rsa"


class DigestAlgorithm(str, Enum):
    """Built-in digest algorithms for fingerprinting.

    Values are the tags written in front of a fingerprint's hex form
    (``sha1:...``). SHA1 is the legacy protocol default; stronger digests
    are selected by name.
    """

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_256 = "sha3-256"
    SHA3_512 = "sha3-512"
    BLAKE2B = "blake2b"


class KeyForm(str, Enum):
    """Container form detected in key material.

    Values:
        SPKI: ``PUBLIC KEY`` PEM block (SubjectPublicKeyInfo)
        PKCS1_PUBLIC: ``RSA PUBLIC KEY`` PEM block
        PKCS8_PRIVATE: ``PRIVATE KEY`` PEM block
        PKCS1_PRIVATE: ``RSA PRIVATE KEY`` PEM block
        ENCRYPTED_PRIVATE: ``ENCRYPTED PRIVATE KEY`` PEM block
        LEGACY_ENCRYPTED_PRIVATE: ``RSA PRIVATE KEY`` with Proc-Type/DEK-Info headers
        OPENSSH_PRIVATE: ``OPENSSH PRIVATE KEY`` PEM block
        OPENSSH_PUBLIC: single ``ssh-rsa AAAA... comment`` line
        DER: bare DER of unknown kind, tried as public then private
    """

    SPKI = "spki"
    PKCS1_PUBLIC = "pkcs1_public"
    PKCS8_PRIVATE = "pkcs8_private"
    PKCS1_PRIVATE = "pkcs1_private"
    ENCRYPTED_PRIVATE = "encrypted_private"
    LEGACY_ENCRYPTED_PRIVATE = "legacy_encrypted_private"
    OPENSSH_PRIVATE = "openssh_private"
    OPENSSH_PUBLIC = "openssh_public"
    DER = "der"

    @property
    def is_private(self) -> bool:
        """Whether this form carries private key material."""
        return self in _PRIVATE_FORMS


_PRIVATE_FORMS = frozenset(
    {
        KeyForm.PKCS8_PRIVATE,
        KeyForm.PKCS1_PRIVATE,
        KeyForm.ENCRYPTED_PRIVATE,
        KeyForm.LEGACY_ENCRYPTED_PRIVATE,
        KeyForm.OPENSSH_PRIVATE,
    }
)
