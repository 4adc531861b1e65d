from cfimages.domain.types.base import ApiResponse, ResponseInfo
from cfimages.domain.types.batch_token import BatchTokenInfo, RefreshBatchTokenResponse
from cfimages.domain.types.image import (
    DeleteImageResponse,
    GetImageDetailsResponse,
    ImageInfo,
    ImageListInfo,
    ListImagesResponse,
    UpdateImageResponse,
    UploadImageResponse,
)
from cfimages.domain.types.stats import GetUsageStatsResponse, UsageCountInfo, UsageStatsInfo

"""
Response models of the Cloudflare Images API.
"""
