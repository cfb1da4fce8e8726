# src/keyprint/engine/__init__.py
"""Fingerprint engine: settings-bound facade over the core operations."""

from keyprint.engine.fingerprinter import FingerprintEngine

__all__ = [
    "FingerprintEngine",
]
