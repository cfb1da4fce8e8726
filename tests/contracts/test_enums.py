# tests/contracts/test_enums.py
"""Tests for contract enums."""

from keyprint.contracts import DigestAlgorithm, KeyAlgorithm, KeyForm


class TestDigestAlgorithm:
    def test_values_are_fingerprint_tags(self) -> None:
        assert DigestAlgorithm.SHA1.value == "sha1"
        assert DigestAlgorithm.SHA3_256.value == "sha3-256"

    def test_is_str_enum(self) -> None:
        assert DigestAlgorithm.SHA256 == "sha256"


class TestKeyAlgorithm:
    def test_only_rsa(self) -> None:
        assert [a.value for a in KeyAlgorithm] == ["rsa"]


class TestKeyForm:
    def test_private_forms(self) -> None:
        private = {form for form in KeyForm if form.is_private}
        assert private == {
            KeyForm.PKCS8_PRIVATE,
            KeyForm.PKCS1_PRIVATE,
            KeyForm.ENCRYPTED_PRIVATE,
            KeyForm.LEGACY_ENCRYPTED_PRIVATE,
            KeyForm.OPENSSH_PRIVATE,
        }

    def test_public_forms_are_not_private(self) -> None:
        assert not KeyForm.SPKI.is_private
        assert not KeyForm.OPENSSH_PUBLIC.is_private
        assert not KeyForm.DER.is_private
