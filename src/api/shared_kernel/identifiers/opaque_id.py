"""Opaque identifier generation and textual encoding.

Identifiers are short byte strings compared only for equality. Freshly
generated identifiers are 29 bytes from the operating system CSPRNG
(232 bits of entropy); identities handed in by the host may be shorter.

The textual form prefixes the raw bytes with their CRC32 (big endian),
base32-encodes the result, lower-cases it, drops the padding and groups it
in runs of five characters separated by dashes, e.g.::

    "2vxsx-fae"

This is part of the Shared Kernel - changes here affect every stored key.
"""

from __future__ import annotations

import base64
import binascii
import secrets
import zlib

OPAQUE_ID_LENGTH = 29
MAX_OPAQUE_ID_LENGTH = 29

_CHECKSUM_LENGTH = 4
_GROUP_SIZE = 5


def random_opaque_id() -> bytes:
    """Draw a fresh identifier from the CSPRNG.

    Uniqueness is probabilistic; callers that insert under the returned key
    must still check the target collection for an existing entry.
    """
    return secrets.token_bytes(OPAQUE_ID_LENGTH)


def encode_opaque_id(raw: bytes) -> str:
    """Render raw identifier bytes in their checksummed textual form.

    Args:
        raw: Identifier bytes (at most MAX_OPAQUE_ID_LENGTH)

    Returns:
        Lower-case, dash-grouped base32 text

    Raises:
        ValueError: If raw is longer than MAX_OPAQUE_ID_LENGTH
    """
    if len(raw) > MAX_OPAQUE_ID_LENGTH:
        raise ValueError(
            f"Identifier is {len(raw)} bytes, at most {MAX_OPAQUE_ID_LENGTH} allowed"
        )

    checksum = zlib.crc32(raw).to_bytes(_CHECKSUM_LENGTH, "big")
    text = base64.b32encode(checksum + raw).decode("ascii").lower().rstrip("=")
    groups = [text[i : i + _GROUP_SIZE] for i in range(0, len(text), _GROUP_SIZE)]
    return "-".join(groups)


def decode_opaque_id(text: str) -> bytes:
    """Parse the textual form back into raw identifier bytes.

    Args:
        text: Text produced by encode_opaque_id (case-insensitive)

    Returns:
        The raw identifier bytes

    Raises:
        ValueError: If the text is malformed, the checksum does not match,
            or the text is not in canonical grouping
    """
    compact = text.replace("-", "").upper()
    padding = "=" * (-len(compact) % 8)

    try:
        decoded = base64.b32decode(compact + padding)
    except binascii.Error as e:
        raise ValueError(f"Invalid identifier text: {text!r}") from e

    if len(decoded) < _CHECKSUM_LENGTH:
        raise ValueError(f"Invalid identifier text: {text!r}")

    checksum, raw = decoded[:_CHECKSUM_LENGTH], decoded[_CHECKSUM_LENGTH:]
    if zlib.crc32(raw).to_bytes(_CHECKSUM_LENGTH, "big") != checksum:
        raise ValueError(f"Identifier checksum mismatch: {text!r}")

    if encode_opaque_id(raw) != text.lower():
        raise ValueError(f"Identifier text is not in canonical form: {text!r}")

    return raw
