# tests/conftest.py
"""Shared test fixtures and helpers.

Key fixtures:
- ``kat_*`` fixtures: one fixed RSA-2048 key in every container keyprint
  reads, loaded from tests/fixtures/keys/. Pinned fingerprints were computed
  with ``openssl pkey -pubout -outform DER | sha1sum`` (and ``sha256sum``).
- ``rsa_key_pair`` / ``other_rsa_key_pair``: freshly generated RSA-2048
  pairs, one per test session.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from dataclasses import dataclass
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))

# =============================================================================
# Known-answer key
# =============================================================================

KEYS_DIR = Path(__file__).parent / "fixtures" / "keys"

KAT_SHA1 = "f90cf2ab95283174e4a4d0151de45cdf327b600e"
KAT_SHA256 = "a3518778584fa9d87e93a44a92cc27dcf38cd6fcaaab5b11b58d0d03e1f70845"
KAT_MODULUS = int(
    "9DFA77B7058FFAF53A264406FEAD6859CD8DC644D589B5A0B14C00058FC7AC9BEECBB496F57A5051B836EAA868D139F8"
    "D6318BA03B5974A80F363CA4F5264AD00B2E775D1FE91B16AFD4CEB40AD54C9BE1EF7FC8FC70AEF473467E32E6845759"
    "B83EFE2E623FB90B86F9754848DDF143D2C06109D496D4C6113A206320A816DC77C707E51A65FA221C22C99FA2F8B02D"
    "00E57C18295FBA08FB321177FC81BB8DC37825B354BAA04A3584646D5887623DE59F77A936031E431C5C4627E35BAE2B"
    "CE418D1B4880D8F06504EC1D390BDF30090D568A16066DFCAF099CE24B6B7B0BAA4D7140BF8193015DD62F218212AE18"
    "784D8357D142B30E3E4F2239BD2EFF9F",
    16,
)
KAT_EXPONENT = 65537
KAT_PASSWORD = b"correct-horse"


@dataclass(frozen=True)
class KnownAnswerKey:
    """The fixed RSA-2048 test key and its pinned fingerprints."""

    modulus: int = KAT_MODULUS
    exponent: int = KAT_EXPONENT
    sha1: str = KAT_SHA1
    sha256: str = KAT_SHA256
    password: bytes = KAT_PASSWORD

    def read(self, name: str) -> bytes:
        """Read a fixture key file as bytes."""
        return (KEYS_DIR / name).read_bytes()


@pytest.fixture(scope="session")
def kat() -> KnownAnswerKey:
    return KnownAnswerKey()


# =============================================================================
# Generated keys
# =============================================================================


@pytest.fixture(scope="session")
def rsa_key_pair() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_key_pair() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)
