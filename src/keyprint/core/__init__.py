# src/keyprint/core/__init__.py
"""Core infrastructure: Canonical encoding, Security, Configuration, Logging."""

# isort: skip_file
# Import order is load-bearing: logging first, security modules import it.

from keyprint.core.logging import (
    configure_logging,
    get_logger,
)
from keyprint.core.container import decode_container
from keyprint.core.canonical import (
    CANONICAL_VERSION,
    canonical_pem,
    encode_canonical,
)
from keyprint.core.config import (
    FingerprintSettings,
    KeyprintSettings,
    LoggingSettings,
    load_settings,
    resolve_config,
)

__all__ = [
    "CANONICAL_VERSION",
    "FingerprintSettings",
    "KeyprintSettings",
    "LoggingSettings",
    "canonical_pem",
    "configure_logging",
    "decode_container",
    "encode_canonical",
    "get_logger",
    "load_settings",
    "resolve_config",
]
