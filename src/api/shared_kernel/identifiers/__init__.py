"""Opaque identifier primitives.

Random fixed-size identifiers and their checksummed textual form, shared by
every aggregate that needs a primary key.
"""

from shared_kernel.identifiers.opaque_id import (
    MAX_OPAQUE_ID_LENGTH,
    OPAQUE_ID_LENGTH,
    decode_opaque_id,
    encode_opaque_id,
    random_opaque_id,
)

__all__ = [
    "MAX_OPAQUE_ID_LENGTH",
    "OPAQUE_ID_LENGTH",
    "decode_opaque_id",
    "encode_opaque_id",
    "random_opaque_id",
]
