"""
Tests for response envelope models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from cfimages.domain.types import (
    DeleteImageResponse,
    GetUsageStatsResponse,
    ListImagesResponse,
    RefreshBatchTokenResponse,
    UploadImageResponse,
)
from cfimages.domain.types.batch_token import parse_timestamp
from tests.conftest import envelope, image_payload


def test_upload_response_parsing():
    res = UploadImageResponse.model_validate(envelope(image_payload(requireSignedURLs=True)))
    assert res.success is True
    assert res.result.id == "img-1"
    assert res.result.require_signed_urls is True
    assert res.result.meta == {"key1": "value1"}
    assert res.result.variants == ["https://imagedelivery.net/hash/img-1/public"]


def test_image_optional_fields():
    payload = image_payload()
    del payload["meta"]
    del payload["requireSignedURLs"]
    res = UploadImageResponse.model_validate(envelope(payload))
    assert res.result.meta is None
    assert res.result.require_signed_urls is None


def test_image_missing_required_field():
    payload = image_payload()
    del payload["variants"]
    with pytest.raises(ValidationError):
        UploadImageResponse.model_validate(envelope(payload))


def test_response_item_code_lower_bound():
    data = envelope({}, success=False, errors=[{"code": 999, "message": "bad"}])
    with pytest.raises(ValidationError):
        DeleteImageResponse.model_validate(data)
    data["errors"][0]["code"] = 1000
    assert DeleteImageResponse.model_validate(data).errors[0].code == 1000


def test_list_and_stats_parsing():
    res = ListImagesResponse.model_validate(envelope({"images": [image_payload("a"), image_payload("b")]}))
    assert [image.id for image in res.result.images] == ["a", "b"]
    stats = GetUsageStatsResponse.model_validate(envelope({"count": {"allowed": 100000, "current": 42}}))
    assert stats.result.count.allowed == 100000
    assert stats.result.count.current == 42


def test_envelope_requires_all_keys():
    with pytest.raises(ValidationError):
        DeleteImageResponse.model_validate({"result": {}, "success": True})


def test_batch_token_nanosecond_expiry():
    res = RefreshBatchTokenResponse.model_validate(
        envelope({"token": "abc", "expiresAt": "2023-08-09T15:33:56.273411222Z"})
    )
    assert res.result.token == "abc"
    assert res.result.expires_at == datetime(2023, 8, 9, 15, 33, 56, 273411, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2023-08-09T15:33:56Z", datetime(2023, 8, 9, 15, 33, 56, tzinfo=timezone.utc)),
        ("2023-08-09T15:33:56.5Z", datetime(2023, 8, 9, 15, 33, 56, 500000, tzinfo=timezone.utc)),
        ("2023-08-09T15:33:56.273411222+00:00", datetime(2023, 8, 9, 15, 33, 56, 273411, tzinfo=timezone.utc)),
        ("2023-08-09T15:33:56", datetime(2023, 8, 9, 15, 33, 56, tzinfo=timezone.utc)),
    ],
)
def test_parse_timestamp(value, expected):
    assert parse_timestamp(value) == expected


if __name__ == "__main__":
    pytest.main()
