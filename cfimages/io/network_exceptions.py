"""
Error taxonomy raised by the Cloudflare Images client.

Remote failures derive from :class:`ApiRequestError` and are converted to an
absent result at the public boundary. Identifier and image validation
failures derive from :class:`ValueError` and always reach the caller.
"""

from __future__ import annotations

from typing import Optional


class CloudflareImagesError(Exception):
    """Base class for every error raised by the client."""


# --------------- Remote failures ---------------------------------------------
class ApiRequestError(CloudflareImagesError):
    """A request to the remote service did not produce a usable response."""


class TransportError(ApiRequestError):
    """Non-success HTTP status or network-level failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class SchemaError(ApiRequestError):
    """Response body does not match the declared envelope."""


class ApiFailureError(ApiRequestError):
    """Envelope parsed fine but reports ``success: false``."""


class TokenRefreshError(ApiRequestError):
    """Batch token could not be obtained."""


# --------------- Validation failures -----------------------------------------
class CustomIdError(CloudflareImagesError, ValueError):
    """Base class for custom identifier validation errors."""


class FormatError(CustomIdError):
    pass


class EmptyIdError(CustomIdError):
    pass


class BoundarySlashError(CustomIdError):
    pass


class UuidCollisionError(CustomIdError):
    pass


class LengthError(CustomIdError):
    pass


class InvalidImageError(CloudflareImagesError, ValueError):
    """Local image file rejected before upload."""
