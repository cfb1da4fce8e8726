# tests/core/security/test_fingerprint.py
"""Tests for public key fingerprinting."""

import hashlib

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from keyprint.contracts import (
    CanonicalEncoding,
    DigestAlgorithm,
    Fingerprint,
    FingerprintFormatError,
    MalformedKeyError,
    PublicKey,
    UnsupportedDigestError,
)
from keyprint.core.canonical import encode_canonical
from keyprint.core.security.digest import DigestRegistry
from keyprint.core.security.fingerprint import (
    DEFAULT_DIGEST,
    fingerprint,
    fingerprint_key,
    parse_fingerprint,
    verify,
)


class TestFingerprint:
    """fingerprint() digests a canonical encoding."""

    def test_default_is_sha1(self, kat) -> None:
        fp = fingerprint(CanonicalEncoding(der=kat.read("kat_spki.der")))

        assert DEFAULT_DIGEST is DigestAlgorithm.SHA1
        assert fp.algorithm == "sha1"
        assert len(fp.digest) == 20

    def test_is_plain_digest_of_der(self) -> None:
        encoding = CanonicalEncoding(der=b"\x30\x00")
        assert fingerprint(encoding, "sha256").digest == hashlib.sha256(b"\x30\x00").digest()

    def test_algorithm_by_enum_or_name(self, kat) -> None:
        encoding = CanonicalEncoding(der=kat.read("kat_spki.der"))
        assert fingerprint(encoding, DigestAlgorithm.SHA256) == fingerprint(encoding, "SHA-256")

    def test_unknown_digest_rejected(self) -> None:
        with pytest.raises(UnsupportedDigestError):
            fingerprint(CanonicalEncoding(der=b"\x30\x00"), "md5")

    def test_custom_registry(self) -> None:
        registry = DigestRegistry()
        registry.register("blake2s", hashlib.blake2s)

        fp = fingerprint(CanonicalEncoding(der=b"\x30\x00"), "blake2s", registry=registry)

        assert fp.algorithm == "blake2s"
        assert fp.digest == hashlib.blake2s(b"\x30\x00").digest()

    def test_rejects_raw_bytes(self) -> None:
        with pytest.raises(TypeError, match="CanonicalEncoding"):
            fingerprint(b"\x30\x00")  # type: ignore[arg-type]


class TestKnownAnswer:
    """Pinned fingerprints guard against encoding drift."""

    @pytest.mark.parametrize(
        "name",
        [
            "kat_spki.pem",
            "kat_spki.der",
            "kat_pkcs1_public.pem",
            "kat_pkcs8.pem",
            "kat_pkcs1.pem",
            "kat_openssh.pub",
            "kat_openssh_private.pem",
        ],
    )
    def test_sha1_from_every_container(self, kat, name: str) -> None:
        assert fingerprint_key(kat.read(name)).tagged == f"sha1:{kat.sha1}"

    def test_sha256(self, kat) -> None:
        assert fingerprint_key(kat.read("kat_spki.pem"), "sha256").hex == kat.sha256

    def test_from_numbers(self, kat) -> None:
        key = PublicKey(modulus=kat.modulus, exponent=kat.exponent)
        assert fingerprint(encode_canonical(key)).hex == kat.sha1

    def test_display_form(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"))
        assert fp.display() == ":".join(kat.sha1[i : i + 2] for i in range(0, 40, 2))
        assert fp.display().startswith("f9:0c:f2:ab:95:28")

    def test_encrypted_container(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_pkcs8_encrypted.pem"), password=kat.password)
        assert fp.hex == kat.sha1


class TestFingerprintKey:
    def test_pair_and_public_paths_agree(self, rsa_key_pair: rsa.RSAPrivateKey) -> None:
        public_pem = rsa_key_pair.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        assert fingerprint_key(rsa_key_pair) == fingerprint_key(public_pem)

    def test_independent_pairs_differ(
        self,
        rsa_key_pair: rsa.RSAPrivateKey,
        other_rsa_key_pair: rsa.RSAPrivateKey,
    ) -> None:
        assert fingerprint_key(rsa_key_pair) != fingerprint_key(other_rsa_key_pair)

    def test_unknown_digest_fails_before_parsing(self) -> None:
        # Garbage key material: the digest error must win
        with pytest.raises(UnsupportedDigestError):
            fingerprint_key(b"not a key", "md5")

    def test_malformed_key(self) -> None:
        with pytest.raises(MalformedKeyError):
            fingerprint_key(b"not a key")


class TestParseFingerprint:
    """All documented textual forms parse to the same value."""

    @pytest.mark.parametrize(
        "text",
        [
            "sha1:f90cf2ab95283174e4a4d0151de45cdf327b600e",
            "SHA1:F90CF2AB95283174E4A4D0151DE45CDF327B600E",
            "f90cf2ab95283174e4a4d0151de45cdf327b600e",
            "f9:0c:f2:ab:95:28:31:74:e4:a4:d0:15:1d:e4:5c:df:32:7b:60:0e",
            "F90C F2AB 9528 3174 E4A4 D015 1DE4 5CDF 327B 600E",
            "sha1:f9:0c:f2:ab:95:28:31:74:e4:a4:d0:15:1d:e4:5c:df:32:7b:60:0e",
            "  sha-1:f90cf2ab-95283174-e4a4d015-1de45cdf-327b600e\n",
        ],
    )
    def test_accepted_forms(self, kat, text: str) -> None:
        fp = parse_fingerprint(text)
        assert fp == Fingerprint(algorithm="sha1", digest=bytes.fromhex(kat.sha1))

    def test_tag_selects_algorithm(self, kat) -> None:
        fp = parse_fingerprint(f"sha256:{kat.sha256}")
        assert fp.algorithm == "sha256"

    def test_default_algorithm_for_untagged(self, kat) -> None:
        fp = parse_fingerprint(kat.sha256, default_algorithm="sha256")
        assert fp.algorithm == "sha256"

    def test_untagged_length_must_match_default(self, kat) -> None:
        with pytest.raises(FingerprintFormatError, match="20 bytes"):
            parse_fingerprint(kat.sha256)

    def test_tagged_length_must_match(self, kat) -> None:
        with pytest.raises(FingerprintFormatError, match="32 bytes"):
            parse_fingerprint(f"sha256:{kat.sha1}")

    @pytest.mark.parametrize("text", ["", "   ", "sha1:", "xyz", "f90", "sha1:f90cf2ab9528317g"])
    def test_not_hex(self, text: str) -> None:
        with pytest.raises(FingerprintFormatError):
            parse_fingerprint(text)

    def test_unknown_tag(self, kat) -> None:
        with pytest.raises(UnsupportedDigestError):
            parse_fingerprint(f"md5:{kat.sha1}")

    def test_non_string(self) -> None:
        with pytest.raises(FingerprintFormatError):
            parse_fingerprint(b"f90c")  # type: ignore[arg-type]

    def test_display_output_parses_back(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"), "sha512")
        assert parse_fingerprint(fp.display(separator=" ", group=4, uppercase=True), default_algorithm="sha512") == fp


class TestVerify:
    """verify() compares algorithm and digest in constant time."""

    def test_same_fingerprint(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"))
        assert verify(fp, Fingerprint(algorithm="sha1", digest=bytes.fromhex(kat.sha1)))

    def test_different_digest(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"))
        tampered = bytearray(fp.digest)
        tampered[-1] ^= 0x01
        assert not verify(fp, Fingerprint(algorithm="sha1", digest=bytes(tampered)))

    def test_different_algorithm_same_bytes(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"), "sha256")
        relabelled = Fingerprint(algorithm="sha3-256", digest=fp.digest)
        assert not verify(fp, relabelled)

    def test_claimed_text_any_form(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"))
        assert verify(fp, kat.sha1.upper())
        assert verify(fp, f"SHA1:{fp.display()}")

    def test_untagged_text_uses_local_algorithm(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"), "sha256")
        assert verify(fp, kat.sha256)

    def test_claimed_text_with_other_tag(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"), "sha256")
        assert not verify(fp, f"sha3-256:{kat.sha256}")

    def test_unparseable_claim(self, kat) -> None:
        fp = fingerprint_key(kat.read("kat_spki.pem"))
        with pytest.raises(FingerprintFormatError):
            verify(fp, "not a fingerprint")

    def test_uses_compare_digest(self, kat, monkeypatch: pytest.MonkeyPatch) -> None:
        import hmac

        calls = []
        real = hmac.compare_digest

        def spy(a, b):
            calls.append((a, b))
            return real(a, b)

        monkeypatch.setattr(hmac, "compare_digest", spy)
        fp = fingerprint_key(kat.read("kat_spki.pem"))
        verify(fp, fp)

        assert (fp.digest, fp.digest) in calls
