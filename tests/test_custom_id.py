"""
Tests for custom id validation and the UUID codec.
"""

import uuid

import pytest

from cfimages.io.custom_id import decode_uuid, encode_uuid, is_valid_custom_id
from cfimages.io.network_exceptions import (
    BoundarySlashError,
    CustomIdError,
    EmptyIdError,
    FormatError,
    LengthError,
    UuidCollisionError,
)


def test_empty_custom_id():
    with pytest.raises(EmptyIdError, match="cannot be an empty string"):
        is_valid_custom_id("")


@pytest.mark.parametrize("custom_id", ["/invalidId", "invalidId/"])
def test_custom_id_with_boundary_slash(custom_id):
    with pytest.raises(BoundarySlashError, match="cannot start or end with a slash"):
        is_valid_custom_id(custom_id)


def test_custom_id_inner_slash_is_allowed():
    assert is_valid_custom_id("folder/image") is True


@pytest.mark.parametrize("raw", [str(uuid.uuid4()), str(uuid.uuid4()).upper()])
def test_custom_id_full_uuid(raw):
    with pytest.raises(UuidCollisionError, match="full UUIDv4"):
        is_valid_custom_id(raw)


def test_custom_id_too_long():
    with pytest.raises(LengthError, match="1024"):
        is_valid_custom_id("a" * 1025)
    assert is_valid_custom_id("a" * 1024) is True


def test_custom_id_errors_are_value_errors():
    with pytest.raises(ValueError):
        is_valid_custom_id("")
    assert issubclass(UuidCollisionError, CustomIdError)


def test_valid_custom_id():
    assert is_valid_custom_id("validCustomId123") is True


def test_encoded_uuid_is_valid_custom_id():
    assert is_valid_custom_id(encode_uuid(str(uuid.uuid4()))) is True


@pytest.mark.parametrize("factory", [uuid.uuid1, uuid.uuid4])
def test_encode_decode_uuid(factory):
    raw = str(factory())
    encoded = encode_uuid(raw)
    assert decode_uuid(encoded) == raw


def test_encode_output_alphabet():
    # 0xfb 0xff produce '+' and '/' in standard base64
    raw = "fbfffbff-fbff-fbff-fbff-fbfffbfffbff"
    encoded = encode_uuid(raw)
    assert "+" not in encoded and "/" not in encoded
    assert set(encoded) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_~=")
    assert "_" in encoded and "~" in encoded
    assert decode_uuid(encoded) == raw


def test_encode_known_value():
    assert encode_uuid("00000000-0000-0000-0000-000000000000") == "AAAAAAAAAAAAAAAAAAAAAA=="


@pytest.mark.parametrize(
    "raw",
    [
        "not-a-uuid",
        "0f8fad5b-d9cb-469f-a165",
        "zz" * 16,
        "00112233445566778899aabbccddeeff",
        "00 11 22 33 44 55 66 77 88 99 aa bb cc dd ee ff",
        "0011-22334455-6677-8899-aabbccddeeff",
        "0f8fad5b-d9cb-469f-a165-70867728950e\n",
    ],
)
def test_encode_malformed_uuid(raw):
    with pytest.raises(FormatError):
        encode_uuid(raw)


def test_uppercase_uuid_decodes_to_lowercase():
    raw = str(uuid.uuid4())
    assert decode_uuid(encode_uuid(raw.upper())) == raw


def test_decode_malformed_input():
    with pytest.raises(FormatError):
        decode_uuid("AAAA")
    with pytest.raises(FormatError):
        decode_uuid("!!not base64!!")


if __name__ == "__main__":
    pytest.main()
