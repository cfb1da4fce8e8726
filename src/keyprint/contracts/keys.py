# src/keyprint/contracts/keys.py
"""Key and fingerprint value types.

These are the values that flow through the fingerprint pipeline:

    PublicKey --(encode_canonical)--> CanonicalEncoding --(fingerprint)--> Fingerprint

All three are frozen. None of them carries private key material or
container metadata (PEM labels, line wrapping, SSH comments).
"""

from dataclasses import dataclass

from keyprint.contracts.enums import DigestAlgorithm, KeyAlgorithm, KeyForm
from keyprint.contracts.errors import MalformedKeyError


@dataclass(frozen=True)
class PublicKey:
    """An RSA public key reduced to its mathematical content.

    Invariants (checked at construction):
    - modulus is odd and >= 3
    - exponent is odd and 3 <= exponent < modulus
    """

    modulus: int
    exponent: int
    algorithm: KeyAlgorithm = KeyAlgorithm.RSA

    def __post_init__(self) -> None:
        if type(self.modulus) is not int or type(self.exponent) is not int:
            raise MalformedKeyError("RSA modulus and exponent must be integers")
        if self.modulus < 3 or self.modulus % 2 == 0:
            raise MalformedKeyError("RSA modulus must be an odd integer >= 3")
        if not 3 <= self.exponent < self.modulus:
            raise MalformedKeyError("RSA public exponent must be >= 3 and < modulus")
        if self.exponent % 2 == 0:
            raise MalformedKeyError("RSA public exponent must be odd")

    @property
    def key_size(self) -> int:
        """Size of the modulus in bits."""
        return self.modulus.bit_length()

    def __repr__(self) -> str:
        return f"PublicKey(algorithm={self.algorithm.value!r}, key_size={self.key_size}, exponent={self.exponent})"


@dataclass(frozen=True)
class CanonicalEncoding:
    """DER SubjectPublicKeyInfo bytes of a public key.

    This is the exact byte string that gets digested. Peers running a
    different implementation must reproduce it byte for byte.
    """

    der: bytes

    def __bytes__(self) -> bytes:
        return self.der

    def __len__(self) -> int:
        return len(self.der)


@dataclass(frozen=True)
class Fingerprint:
    """Digest of a canonical encoding, tagged with the digest algorithm name.

    Textual forms (stable, version 1):
    - ``hex``: lowercase hex, no separators
    - ``display()``: hex grouped per ``group`` bytes, joined by ``separator``
    - ``tagged`` / ``str()``: ``"<algorithm>:<hex>"``

    Use ``keyprint.verify`` to compare fingerprints; ``==`` is not
    constant-time.
    """

    algorithm: DigestAlgorithm | str
    digest: bytes

    def __post_init__(self) -> None:
        # Store the plain tag so str(), tagged and == never see the enum
        if isinstance(self.algorithm, DigestAlgorithm):
            object.__setattr__(self, "algorithm", self.algorithm.value)
        if not self.digest:
            raise ValueError("Fingerprint digest must not be empty")

    @property
    def hex(self) -> str:
        return self.digest.hex()

    @property
    def tagged(self) -> str:
        return f"{self.algorithm}:{self.hex}"

    def display(self, separator: str = ":", group: int = 1, uppercase: bool = False) -> str:
        """Render the digest for human comparison.

        Args:
            separator: String placed between groups
            group: Number of digest bytes per group
            uppercase: Use uppercase hex digits

        Returns:
            Grouped hex string, e.g. ``f9:0c:f2:ab:...`` for the defaults
        """
        if group < 1:
            raise ValueError(f"group must be >= 1, got {group}")
        text = self.hex.upper() if uppercase else self.hex
        width = group * 2
        return separator.join(text[i : i + width] for i in range(0, len(text), width))

    def __str__(self) -> str:
        return self.tagged


@dataclass(frozen=True)
class KeyContainer:
    """Key material with its textual container stripped.

    ``data`` is the PEM block alone for the PEM forms, the key line for
    OPENSSH_PUBLIC, and the input bytes for DER. It is a bytearray so that
    private material can be zeroed once loaded.
    """

    form: KeyForm
    data: bytearray

    def wipe(self) -> None:
        """Overwrite the held bytes with zeros."""
        self.data[:] = bytes(len(self.data))

    def __repr__(self) -> str:
        return f"KeyContainer(form={self.form.value!r}, length={len(self.data)})"
