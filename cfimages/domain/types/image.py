from typing import Any, Dict, List, Optional

from pydantic import Field

from cfimages.domain.types.base import ApiResponse, BaseInfo


class ImageInfo(BaseInfo):
    id: str
    filename: str
    meta: Optional[Dict[str, Any]] = None
    uploaded: str
    require_signed_urls: Optional[bool] = Field(default=None, alias="requireSignedURLs")
    variants: List[str]


class ImageListInfo(BaseInfo):
    images: List[ImageInfo]


UploadImageResponse = ApiResponse[ImageInfo]
GetImageDetailsResponse = ApiResponse[ImageInfo]
UpdateImageResponse = ApiResponse[ImageInfo]
ListImagesResponse = ApiResponse[ImageListInfo]
DeleteImageResponse = ApiResponse[Dict[str, Any]]
