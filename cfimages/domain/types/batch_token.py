import re
from datetime import datetime, timezone
from typing import Any

from pydantic import field_validator

from cfimages.domain.types.base import ApiResponse, BaseInfo

# 2023-08-09T15:33:56.273411222Z
_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping at most microsecond precision."""
    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BatchTokenInfo(BaseInfo):
    token: str
    expires_at: datetime

    @field_validator("expires_at", mode="before")
    def parse_expires_at(cls, value: Any) -> Any:
        """Accept nanosecond precision timestamps returned by the service"""
        if isinstance(value, str):
            return parse_timestamp(value)
        return value


RefreshBatchTokenResponse = ApiResponse[BatchTokenInfo]
