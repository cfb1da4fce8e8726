# src/keyprint/contracts/errors.py
"""Error taxonomy for key parsing and fingerprinting.

Every error is terminal for the call that raised it: no partial result is
returned and no other algorithm is tried in its place. Errors raised by the
cryptography package are translated into these types at the point where key
material enters the library.
"""


class KeyprintError(Exception):
    """Base class for all keyprint errors."""


class MalformedKeyError(KeyprintError, ValueError):
    """Key container or DER structure is invalid.

    Also raised for structurally invalid RSA numbers and for encrypted
    private keys when the password is missing or wrong.
    """


class UnsupportedAlgorithmError(KeyprintError):
    """Key parsed correctly but is not an RSA key."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unsupported key algorithm: {algorithm}. Only RSA keys can be fingerprinted.")


class UnsupportedDigestError(KeyprintError):
    """Requested digest algorithm is not implemented."""

    def __init__(self, algorithm: str, available: list[str] | None = None) -> None:
        self.algorithm = algorithm
        self.available = available or []
        message = f"Unsupported digest algorithm: {algorithm!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class FingerprintFormatError(KeyprintError, ValueError):
    """Textual fingerprint cannot be parsed."""
