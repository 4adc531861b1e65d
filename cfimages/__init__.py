"""
Public package interface for the Cloudflare Images client.

The module exposes the `Api` facade (also available as `CloudflareImages`),
the response models and the error types.
"""

from __future__ import annotations

from cfimages.api.api import Api, CloudflareImages
from cfimages.api.batch_token_api import BatchTokenState
from cfimages.domain.types import (
    ApiResponse,
    BatchTokenInfo,
    DeleteImageResponse,
    GetImageDetailsResponse,
    GetUsageStatsResponse,
    ImageInfo,
    ListImagesResponse,
    RefreshBatchTokenResponse,
    ResponseInfo,
    UpdateImageResponse,
    UploadImageResponse,
)
from cfimages.io.custom_id import decode_uuid, encode_uuid, is_valid_custom_id
from cfimages.io.network_exceptions import (
    ApiFailureError,
    ApiRequestError,
    BoundarySlashError,
    CloudflareImagesError,
    CustomIdError,
    EmptyIdError,
    FormatError,
    InvalidImageError,
    LengthError,
    SchemaError,
    TokenRefreshError,
    TransportError,
    UuidCollisionError,
)
