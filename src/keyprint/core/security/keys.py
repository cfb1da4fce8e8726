# src/keyprint/core/security/keys.py
"""Key source normalisation.

Every way of handing a key to keyprint (an in-memory key pair, a standalone
public key, PEM/DER/OpenSSH bytes) ends in the same place: a PublicKey
holding only the modulus and exponent. Fingerprints are computed from that
value alone, so the private-key path and the public-only path cannot
disagree.

Private key material is loaded inside a try/finally that zeroes the
container copy and drops the private key object on every exit path,
including errors. decode_container zeroes its own working copy the same way.
"""

from __future__ import annotations

from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa, x448, x25519

from keyprint.contracts import KeyContainer, KeyForm, MalformedKeyError, PublicKey, UnsupportedAlgorithmError
from keyprint.core.container import decode_container

KeySource = Union[
    PublicKey,
    rsa.RSAPrivateKey,
    rsa.RSAPublicKey,
    bytes,
    bytearray,
    memoryview,
    str,
]

_FOREIGN_KEY_TYPES: tuple[tuple[tuple[type, ...], str], ...] = (
    ((ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey), "ec"),
    ((ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey), "ed25519"),
    ((ed448.Ed448PrivateKey, ed448.Ed448PublicKey), "ed448"),
    ((dsa.DSAPrivateKey, dsa.DSAPublicKey), "dsa"),
    ((x25519.X25519PrivateKey, x25519.X25519PublicKey), "x25519"),
    ((x448.X448PrivateKey, x448.X448PublicKey), "x448"),
)


def derive_public_key(source: KeySource, *, password: bytes | str | None = None) -> PublicKey:
    """Reduce any supported key source to its public key.

    Args:
        source: A PublicKey, a cryptography RSA key object (private or
            public), or bytes/str holding PEM, DER, or an OpenSSH public key
            line
        password: Password for encrypted private key containers

    Returns:
        PublicKey with the source's modulus and exponent

    Raises:
        MalformedKeyError: If the source cannot be parsed as a key, the
            password is missing or wrong, or the RSA numbers are invalid
        UnsupportedAlgorithmError: If the key is not an RSA key

    Example:
        >>> pair = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        >>> derive_public_key(pair) == derive_public_key(pair.public_key())
        True
    """
    if isinstance(source, PublicKey):
        return source

    if isinstance(source, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return _public_key_from_object(source)

    if isinstance(source, (bytes, bytearray, memoryview, str)):
        return _public_key_from_material(source, _normalize_password(password))

    algorithm = _foreign_algorithm_name(source)
    if algorithm is not None:
        raise UnsupportedAlgorithmError(algorithm)

    raise MalformedKeyError(f"Cannot derive a public key from {type(source).__name__}")


def _public_key_from_material(material: bytes | bytearray | memoryview | str, password: bytes | None) -> PublicKey:
    container = decode_container(material)
    loaded: object = None
    try:
        loaded = _load_container(container, password)
        return _public_key_from_object(loaded)
    finally:
        container.wipe()
        del loaded


def _load_container(container: KeyContainer, password: bytes | None) -> object:
    """Run the cryptography loader that matches the container form."""
    data = container.data
    form = container.form
    try:
        match form:
            case KeyForm.SPKI | KeyForm.PKCS1_PUBLIC:
                return serialization.load_pem_public_key(data)
            case (
                KeyForm.PKCS8_PRIVATE
                | KeyForm.PKCS1_PRIVATE
                | KeyForm.ENCRYPTED_PRIVATE
                | KeyForm.LEGACY_ENCRYPTED_PRIVATE
            ):
                return serialization.load_pem_private_key(data, password=password)
            case KeyForm.OPENSSH_PRIVATE:
                return serialization.load_ssh_private_key(data, password=password)
            case KeyForm.OPENSSH_PUBLIC:
                return serialization.load_ssh_public_key(bytes(data))
            case KeyForm.DER:
                return _load_bare_der(data, password)
    except UnsupportedAlgorithm as e:
        raise UnsupportedAlgorithmError(_ssh_key_type(data) if form is KeyForm.OPENSSH_PUBLIC else "unknown") from e
    except (ValueError, TypeError) as e:
        raise MalformedKeyError(f"Cannot parse {form.value} key: {e}") from e

    raise MalformedKeyError(f"Unhandled key form: {form.value}")


def _load_bare_der(data: bytearray, password: bytes | None) -> object:
    # Public first: a public SPKI never parses as a private key, and the
    # private attempt is the one that needs the password.
    try:
        return serialization.load_der_public_key(data)
    except ValueError:
        pass
    return serialization.load_der_private_key(data, password=password)


def _public_key_from_object(key: object) -> PublicKey:
    if isinstance(key, rsa.RSAPrivateKey):
        key = key.public_key()
    if not isinstance(key, rsa.RSAPublicKey):
        raise UnsupportedAlgorithmError(_foreign_algorithm_name(key) or type(key).__name__)

    numbers = key.public_numbers()
    return PublicKey(modulus=numbers.n, exponent=numbers.e)


def _foreign_algorithm_name(key: object) -> str | None:
    for types, name in _FOREIGN_KEY_TYPES:
        if isinstance(key, types):
            return name
    return None


def _ssh_key_type(line: bytearray) -> str:
    parts = bytes(line).split(None, 1)
    return parts[0].decode("ascii", errors="replace") if parts else "unknown"


def _normalize_password(password: bytes | str | None) -> bytes | None:
    if password is None or isinstance(password, bytes):
        return password
    if isinstance(password, str):
        return password.encode("utf-8")
    raise MalformedKeyError(f"Password must be bytes or str, got {type(password).__name__}")
