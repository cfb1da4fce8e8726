# src/keyprint/core/container.py
"""Container detection for key material.

Finds the first PEM block in the input (ignoring any text around it),
recognises OpenSSH public key lines, and treats anything else as bare DER.
The detected form tells core.security.keys which cryptography loader to
run; decoding the PEM body is left to that loader.

Text input is read as UTF-8, so comments and notes in any script are
accepted. Only the key itself has to be ASCII.

The working copy of the input is zeroed before decode_container returns,
on success and on error. The returned KeyContainer holds its own copy,
which the caller wipes.
"""

from __future__ import annotations

import re

from keyprint.contracts import KeyContainer, KeyForm, MalformedKeyError, UnsupportedAlgorithmError

_PEM_BEGIN = b"-----BEGIN "
_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----.*?-----END \1-----",
    re.DOTALL,
)
_SSH_LINE = re.compile(rb"\A\s*((?:ssh-|ecdsa-sha2-|sk-ssh-|sk-ecdsa-)[^\r\n]*)")
_LEGACY_HEADER = b"Proc-Type:"

_LABEL_FORMS: dict[bytes, KeyForm] = {
    b"PUBLIC KEY": KeyForm.SPKI,
    b"RSA PUBLIC KEY": KeyForm.PKCS1_PUBLIC,
    b"PRIVATE KEY": KeyForm.PKCS8_PRIVATE,
    b"RSA PRIVATE KEY": KeyForm.PKCS1_PRIVATE,
    b"ENCRYPTED PRIVATE KEY": KeyForm.ENCRYPTED_PRIVATE,
    b"OPENSSH PRIVATE KEY": KeyForm.OPENSSH_PRIVATE,
}

# Labels that name a key family outright; rejected before any loader runs.
_FOREIGN_LABELS: dict[bytes, str] = {
    b"EC PRIVATE KEY": "ec",
    b"EC PUBLIC KEY": "ec",
    b"DSA PRIVATE KEY": "dsa",
    b"DSA PUBLIC KEY": "dsa",
}


def decode_container(data: bytes | bytearray | memoryview | str) -> KeyContainer:
    """Detect the container form of key material.

    Args:
        data: Text holding a PEM block (the first block is used), an
            OpenSSH public key line, or bare DER bytes

    Returns:
        KeyContainer with the detected form. PEM forms hold the PEM block
        alone, OPENSSH_PUBLIC holds the key line, DER holds the input bytes.

    Raises:
        MalformedKeyError: If the input is empty, a PEM block is
            unterminated, or its label is not a key label
        UnsupportedAlgorithmError: If the PEM label names a non-RSA family
    """
    raw = _working_copy(data)
    try:
        return _detect(raw)
    finally:
        raw[:] = bytes(len(raw))


def _working_copy(data: bytes | bytearray | memoryview | str) -> bytearray:
    if isinstance(data, str):
        return bytearray(data, "utf-8")
    return bytearray(data)


def _detect(raw: bytearray) -> KeyContainer:
    if not raw or raw.isspace():
        raise MalformedKeyError("Key material is empty")

    if raw.find(_PEM_BEGIN) != -1:
        return _detect_pem(raw)

    ssh = _SSH_LINE.match(raw)
    if ssh is not None:
        # Only the first line: authorized_keys style files may hold several keys
        start, end = ssh.span(1)
        return KeyContainer(form=KeyForm.OPENSSH_PUBLIC, data=bytearray(memoryview(raw)[start:end]).rstrip())

    return KeyContainer(form=KeyForm.DER, data=bytearray(raw))


def _detect_pem(raw: bytearray) -> KeyContainer:
    block = _PEM_BLOCK.search(raw)
    if block is None:
        raise MalformedKeyError("PEM block has no matching END line")

    label = block.group(1)
    if label in _FOREIGN_LABELS:
        raise UnsupportedAlgorithmError(_FOREIGN_LABELS[label])

    form = _LABEL_FORMS.get(label)
    if form is None:
        raise MalformedKeyError(f"Unsupported PEM label: {label.decode('ascii')!r}")

    start, end = block.span()
    if form is KeyForm.PKCS1_PRIVATE and raw.find(_LEGACY_HEADER, start, end) != -1:
        form = KeyForm.LEGACY_ENCRYPTED_PRIVATE

    return KeyContainer(form=form, data=bytearray(memoryview(raw)[start:end]))
