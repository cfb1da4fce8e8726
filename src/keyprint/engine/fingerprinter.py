# src/keyprint/engine/fingerprinter.py
"""FingerprintEngine: fingerprint operations bound to settings and a digest registry.

The engine holds configuration only. Every method is a pure function of
its arguments plus that configuration, so one engine can be shared across
threads.

Example:
    settings = load_settings(Path("settings.yaml"))
    engine = FingerprintEngine.from_settings(settings)

    fp = engine.fingerprint_key(private_pem)
    print(engine.render(fp))
    engine.verify(fp, text_read_out_by_peer)
"""

from __future__ import annotations

from keyprint.contracts import CanonicalEncoding, DigestAlgorithm, Fingerprint, PublicKey
from keyprint.core.canonical import encode_canonical
from keyprint.core.config import FingerprintSettings, KeyprintSettings
from keyprint.core.logging import configure_logging, get_logger
from keyprint.core.security.digest import DigestRegistry
from keyprint.core.security.fingerprint import fingerprint, parse_fingerprint, verify
from keyprint.core.security.keys import KeySource, derive_public_key

logger = get_logger(__name__)


class FingerprintEngine:
    """Computes, renders, and verifies public key fingerprints.

    Args:
        settings: Digest and display settings; defaults when None
        registry: Digest registry; a registry of the built-ins when None

    Raises:
        UnsupportedDigestError: If the configured digest is not in registry
    """

    def __init__(
        self,
        settings: FingerprintSettings | None = None,
        registry: DigestRegistry | None = None,
    ) -> None:
        self._settings = settings if settings is not None else FingerprintSettings()
        self._registry = registry if registry is not None else DigestRegistry()
        # Fail at construction, not on first use
        self._default_digest = self._registry.get(self._settings.digest).name
        logger.debug(
            "fingerprint engine configured",
            digest=self._default_digest,
            separator=self._settings.separator,
            group_size=self._settings.group_size,
            digests=self._registry.names(),
        )

    @classmethod
    def from_settings(cls, settings: KeyprintSettings, registry: DigestRegistry | None = None) -> FingerprintEngine:
        """Build an engine from top-level settings, applying their logging section."""
        configure_logging(settings.logging.level, json_output=settings.logging.json_output)
        return cls(settings.fingerprint, registry)

    @property
    def settings(self) -> FingerprintSettings:
        return self._settings

    @property
    def registry(self) -> DigestRegistry:
        return self._registry

    @property
    def default_digest(self) -> str:
        return self._default_digest

    def derive_public_key(self, source: KeySource, *, password: bytes | str | None = None) -> PublicKey:
        return derive_public_key(source, password=password)

    def encode_canonical(self, key: PublicKey) -> CanonicalEncoding:
        return encode_canonical(key)

    def fingerprint(
        self,
        encoding: CanonicalEncoding,
        algorithm: DigestAlgorithm | str | None = None,
    ) -> Fingerprint:
        """Digest a canonical encoding with algorithm, or the configured default."""
        return fingerprint(encoding, algorithm or self._default_digest, registry=self._registry)

    def fingerprint_key(
        self,
        source: KeySource,
        algorithm: DigestAlgorithm | str | None = None,
        *,
        password: bytes | str | None = None,
    ) -> Fingerprint:
        """Derive, encode, and digest a key source in one call."""
        # Resolve first so an unknown digest fails before any key is parsed
        spec = self._registry.get(algorithm or self._default_digest)
        public_key = derive_public_key(source, password=password)
        return fingerprint(encode_canonical(public_key), spec.name, registry=self._registry)

    def parse(self, text: str) -> Fingerprint:
        """Parse fingerprint text; untagged text uses the configured digest."""
        return parse_fingerprint(text, default_algorithm=self._default_digest, registry=self._registry)

    def verify(self, local: Fingerprint, claimed: Fingerprint | str) -> bool:
        return verify(local, claimed, registry=self._registry)

    def render(self, fp: Fingerprint, *, tagged: bool = False) -> str:
        """Render a fingerprint using the configured display settings.

        Args:
            fp: Fingerprint to render
            tagged: Prefix the algorithm tag (``sha1:``) for unambiguous exchange

        Returns:
            Display string
        """
        text = fp.display(
            separator=self._settings.separator,
            group=self._settings.group_size,
            uppercase=self._settings.uppercase,
        )
        return f"{fp.algorithm}:{text}" if tagged else text
