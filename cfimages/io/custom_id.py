"""
Custom image identifiers.

Cloudflare Images rejects raw UUIDs as custom ids, so UUIDs are stored in a
compact Base64 form with ``+`` and ``/`` swapped for ``_`` and ``~``.
"""

from __future__ import annotations

import base64
import binascii
import re

from cfimages.io.network_exceptions import (
    BoundarySlashError,
    EmptyIdError,
    FormatError,
    LengthError,
    UuidCollisionError,
)

CUSTOM_ID_MAX_LENGTH = 1024
UUID_BYTES = 16

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)
_ENCODE_TABLE = str.maketrans({"+": "_", "/": "~"})
_DECODE_TABLE = str.maketrans({"_": "+", "~": "/"})


def encode_uuid(uuid: str) -> str:
    """
    Encode a canonical UUID string into a URL-safe compact id.

    :param uuid: UUID in 8-4-4-4-12 form, any version.
    :type uuid: str
    :return: 24-character id without ``+`` or ``/``.
    :rtype: :class:`str`
    :raises FormatError: if ``uuid`` is not in the 8-4-4-4-12 hex layout.

    The bytes do not keep letter case, so :func:`decode_uuid` gives back the
    input only for lowercase canonical UUIDs (as produced by :mod:`uuid`).
    :Usage example:

     .. code-block:: python

        from cfimages.io.custom_id import encode_uuid

        encode_uuid("0f8fad5b-d9cb-469f-a165-70867728950e")
    """
    if not _UUID_PATTERN.fullmatch(uuid):
        raise FormatError(f"Invalid UUID {uuid!r}: expected 8-4-4-4-12 hex layout")
    hex_digits = uuid.replace("-", "")
    try:
        raw = bytes.fromhex(hex_digits)
    except ValueError as exc:
        raise FormatError(f"Invalid UUID {uuid!r}: {exc}") from exc
    if len(raw) != UUID_BYTES:
        raise FormatError(f"Invalid UUID {uuid!r}: expected {UUID_BYTES} bytes, got {len(raw)}")
    return base64.b64encode(raw).decode("ascii").translate(_ENCODE_TABLE)


def decode_uuid(encoded: str) -> str:
    """Inverse of :func:`encode_uuid`, returns the lowercase canonical UUID."""
    try:
        raw = base64.b64decode(encoded.translate(_DECODE_TABLE), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise FormatError(f"Invalid encoded UUID {encoded!r}: {exc}") from exc
    if len(raw) != UUID_BYTES:
        raise FormatError(
            f"Invalid encoded UUID {encoded!r}: expected {UUID_BYTES} bytes, got {len(raw)}"
        )
    hex_digits = raw.hex()
    return "-".join(
        (hex_digits[:8], hex_digits[8:12], hex_digits[12:16], hex_digits[16:20], hex_digits[20:])
    )


def is_valid_custom_id(custom_id: str) -> bool:
    """
    Validate a custom image id against the service constraints.

    Never returns ``False``: an invalid id raises a :class:`CustomIdError` subclass.
    """
    if not custom_id:
        raise EmptyIdError("Custom ID cannot be an empty string.")
    if custom_id.startswith("/") or custom_id.endswith("/"):
        raise BoundarySlashError("Custom ID cannot start or end with a slash.")
    if _UUID_PATTERN.fullmatch(custom_id):
        raise UuidCollisionError("Custom ID cannot be a full UUIDv4.")
    if len(custom_id) > CUSTOM_ID_MAX_LENGTH:
        raise LengthError(
            f"Custom ID exceeds the maximum allowed length of {CUSTOM_ID_MAX_LENGTH} characters."
        )
    return True
