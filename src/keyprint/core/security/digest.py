# src/keyprint/core/security/digest.py
"""Digest algorithms available for fingerprinting.

Built-in digests live in a read-only table. Callers who need another
digest create their own DigestRegistry and pass it explicitly; there is no
process-wide mutable registry.

Usage:
    from keyprint.core.security import DigestRegistry

    registry = DigestRegistry()
    registry.register("blake2s", hashlib.blake2s)
    fp = fingerprint(encoding, "blake2s", registry=registry)
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from keyprint.contracts import DigestAlgorithm, UnsupportedDigestError
from keyprint.core.logging import get_logger

logger = get_logger(__name__)

# Tag names must not look like hex, or "ab:cd:..." would parse as a tag.
_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
_HEX_ONLY = re.compile(r"^[0-9a-f]+$")

_ALIASES = {
    "sha-1": "sha1",
    "sha-256": "sha256",
    "sha-384": "sha384",
    "sha-512": "sha512",
    "sha3_256": "sha3-256",
    "sha3_512": "sha3-512",
}


class HashObject(Protocol):
    """The part of hashlib's hash object interface used here."""

    def update(self, data: bytes, /) -> None: ...

    def digest(self) -> bytes: ...


@dataclass(frozen=True)
class DigestSpec:
    """A named digest constructor and its output size in bytes."""

    name: str
    factory: Callable[[], HashObject]
    digest_size: int

    def compute(self, data: bytes) -> bytes:
        h = self.factory()
        h.update(data)
        return h.digest()


def _builtin(algorithm: DigestAlgorithm, factory: Callable[[], Any]) -> DigestSpec:
    return DigestSpec(name=algorithm.value, factory=factory, digest_size=factory().digest_size)


BUILTIN_DIGESTS: Mapping[str, DigestSpec] = MappingProxyType(
    {
        spec.name: spec
        for spec in (
            _builtin(DigestAlgorithm.SHA1, hashlib.sha1),
            _builtin(DigestAlgorithm.SHA256, hashlib.sha256),
            _builtin(DigestAlgorithm.SHA384, hashlib.sha384),
            _builtin(DigestAlgorithm.SHA512, hashlib.sha512),
            _builtin(DigestAlgorithm.SHA3_256, hashlib.sha3_256),
            _builtin(DigestAlgorithm.SHA3_512, hashlib.sha3_512),
            _builtin(DigestAlgorithm.BLAKE2B, hashlib.blake2b),
        )
    }
)


def normalize_digest_name(algorithm: DigestAlgorithm | str) -> str:
    """Map an algorithm enum or user-supplied name to its canonical tag.

    Raises:
        UnsupportedDigestError: If algorithm is neither an enum nor a string
    """
    if isinstance(algorithm, DigestAlgorithm):
        return algorithm.value
    if not isinstance(algorithm, str):
        raise UnsupportedDigestError(repr(algorithm))
    name = algorithm.strip().lower()
    return _ALIASES.get(name, name)


def is_valid_digest_name(name: str) -> bool:
    """Whether name can be used as a fingerprint tag."""
    return bool(_NAME_PATTERN.match(name)) and not _HEX_ONLY.match(name)


class DigestRegistry:
    """Set of digest algorithms a fingerprint engine may use.

    Starts from the built-in table (unless include_builtins is False).
    Registering a name that already exists requires replace=True.
    """

    def __init__(self, *, include_builtins: bool = True) -> None:
        self._specs: dict[str, DigestSpec] = dict(BUILTIN_DIGESTS) if include_builtins else {}

    def register(self, name: str, factory: Callable[[], HashObject], *, replace: bool = False) -> DigestSpec:
        """Add a digest algorithm.

        Args:
            name: Tag written in front of fingerprints produced with it
            factory: Zero-argument constructor of a hashlib-style hash object
            replace: Allow overriding an existing name

        Returns:
            The registered DigestSpec

        Raises:
            ValueError: If the name is not a valid tag, already registered
                without replace=True, or the factory produces an empty digest
        """
        normalized = normalize_digest_name(name)
        if not is_valid_digest_name(normalized):
            raise ValueError(
                f"Invalid digest name {name!r}: use lowercase letters, digits, '-' or '_', "
                "and at least one non-hex character"
            )
        if normalized in self._specs and not replace:
            raise ValueError(f"Digest {normalized!r} is already registered")

        digest_size = len(factory().digest())
        if digest_size == 0:
            raise ValueError(f"Digest {normalized!r} produces an empty digest")

        spec = DigestSpec(name=normalized, factory=factory, digest_size=digest_size)
        self._specs[normalized] = spec
        logger.debug("digest registered", digest=normalized, digest_size=digest_size, replaced=replace)
        return spec

    def get(self, algorithm: DigestAlgorithm | str) -> DigestSpec:
        """Look up a digest by enum or name.

        Raises:
            UnsupportedDigestError: If the algorithm is not registered
        """
        name = normalize_digest_name(algorithm)
        try:
            return self._specs[name]
        except KeyError:
            raise UnsupportedDigestError(name, available=self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._specs)

    def __contains__(self, algorithm: object) -> bool:
        if not isinstance(algorithm, str):
            return False
        return normalize_digest_name(algorithm) in self._specs

    def __iter__(self) -> Iterator[DigestSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


def resolve_digest(algorithm: DigestAlgorithm | str, registry: DigestRegistry | None = None) -> DigestSpec:
    """Find a digest in registry, or in the built-in table when registry is None.

    Raises:
        UnsupportedDigestError: If the algorithm is unknown
    """
    if registry is not None:
        return registry.get(algorithm)

    name = normalize_digest_name(algorithm)
    try:
        return BUILTIN_DIGESTS[name]
    except KeyError:
        raise UnsupportedDigestError(name, available=sorted(BUILTIN_DIGESTS)) from None
