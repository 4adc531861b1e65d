from __future__ import annotations

import asyncio
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles

from cfimages.api.module_api import ModuleApi
from cfimages.domain.types.image import (
    DeleteImageResponse,
    GetImageDetailsResponse,
    ImageInfo,
    ListImagesResponse,
    UpdateImageResponse,
    UploadImageResponse,
)
from cfimages.domain.types.stats import GetUsageStatsResponse
from cfimages.io.custom_id import is_valid_custom_id
from cfimages.io.decorators import log_api_errors, sync_compatible
from cfimages.io.fs import validate_image_file
from cfimages.io.network_exceptions import ApiFailureError

PER_PAGE_MIN = 10
PER_PAGE_MAX = 10000

logger = logging.getLogger(__name__)


class ImageApi(ModuleApi):
    """
    Image endpoints. Upload, details, update and delete are batch-eligible:
    they go through the batch host while a batch token is held.
    """

    @staticmethod
    def _endpoint_prefix() -> str:
        return "images/v1"

    # --- Upload ---------------------------------------------------
    @sync_compatible
    async def upload_image(
        self,
        url: str,
        custom_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        require_signed_urls: bool = False,
    ) -> Optional[UploadImageResponse]:
        """
        Upload an image from a public URL.

        :param url: Source image URL, fetched by Cloudflare.
        :type url: str
        :param custom_id: Custom image id, validated before any request.
        :type custom_id: str, optional
        :param metadata: Free-form metadata stored with the image.
        :type metadata: dict, optional
        :param require_signed_urls: Serve the image through signed URLs only.
        :type require_signed_urls: bool
        :return: Upload response, or None if the request failed.
        :rtype: :class:`UploadImageResponse` or None
        :raises CustomIdError: if ``custom_id`` is not accepted by the service.
        :Usage example:

         .. code-block:: python

            import uuid
            import cfimages

            api = cfimages.Api.from_env()
            res = api.image.upload_image(
                "https://picsum.photos/id/237/1280/720",
                custom_id=api.encode_uuid(str(uuid.uuid4())),
                metadata={"key1": "value1"},
            )
            if res is not None:
                print(res.result.variants)
        """
        if custom_id is not None:
            is_valid_custom_id(custom_id)
        files = self._upload_form(custom_id, metadata, require_signed_urls, url=url)
        return await self._upload(files)

    @sync_compatible
    async def upload_image_with_file(
        self,
        file_path: Union[str, Path],
        custom_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        require_signed_urls: bool = False,
    ) -> Optional[UploadImageResponse]:
        """
        Upload a local image file. The file must be at most 10 MB and one of
        PNG, JPEG, GIF, WebP or SVG, otherwise :class:`InvalidImageError` is raised.
        """
        if custom_id is not None:
            is_valid_custom_id(custom_id)
        async with aiofiles.open(file_path, "rb") as f:
            content = await f.read()
        mime = validate_image_file(content, str(file_path))
        files = self._upload_form(custom_id, metadata, require_signed_urls)
        files["file"] = (Path(file_path).name, content, mime)
        return await self._upload(files)

    @sync_compatible
    async def upload_image_with_buffer(
        self,
        buffer: bytes,
        filename: str,
        custom_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        require_signed_urls: bool = False,
    ) -> Optional[UploadImageResponse]:
        """Upload image bytes already held in memory."""
        if custom_id is not None:
            is_valid_custom_id(custom_id)
        files = self._upload_form(custom_id, metadata, require_signed_urls)
        files["file"] = (filename, bytes(buffer), "image/*")
        return await self._upload(files)

    def _upload_form(
        self,
        custom_id: Optional[str],
        metadata: Optional[Dict[str, Any]],
        require_signed_urls: bool,
        url: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._form_fields(
            url=url,
            metadata=metadata or {},
            requireSignedURLs=require_signed_urls,
            id=custom_id,
        )

    @log_api_errors("Error uploading image")
    async def _upload(self, files: Dict[str, Any]) -> UploadImageResponse:
        return await self._batch_request(
            "POST", self._endpoint_prefix(), UploadImageResponse, files=files
        )

    # --- Retrieval ------------------------------------------------
    @sync_compatible
    async def list_images(
        self, page: int = 1, per_page: int = 1000
    ) -> Optional[ListImagesResponse]:
        """
        List one page of images. ``per_page`` must be within 10..10000,
        otherwise None is returned without contacting the service.
        """
        if per_page < PER_PAGE_MIN or per_page > PER_PAGE_MAX:
            logger.error(
                f"Error listing images: per_page must be between {PER_PAGE_MIN} and {PER_PAGE_MAX}."
            )
            return None
        return await self._list_images(page, per_page)

    @log_api_errors("Error listing images")
    async def _list_images(self, page: int, per_page: int) -> ListImagesResponse:
        params = {"page": page, "per_page": per_page}
        return await self._request(
            "GET", self._endpoint_prefix(), ListImagesResponse, params=params
        )

    @sync_compatible
    @log_api_errors("Error getting usage stats")
    async def get_usage_stats(self) -> Optional[GetUsageStatsResponse]:
        """Allowed and current image counts of the account."""
        return await self._request("GET", self._method("stats"), GetUsageStatsResponse)

    @sync_compatible
    @log_api_errors("Error getting full image list")
    async def get_full_list_images(self) -> Optional[List[ImageInfo]]:
        """
        Fetch every image of the account.

        The page count is derived from the usage stats, all pages are requested
        concurrently at the maximum page size and concatenated in page order.
        Any failed page fails the whole call; partial lists are never returned.
        """
        stats = await self.get_usage_stats()
        if stats is None:
            raise ApiFailureError("Failed to obtain usage statistics.")

        pages = math.ceil(stats.result.count.current / PER_PAGE_MAX)
        responses = await asyncio.gather(
            *(self.list_images(page, PER_PAGE_MAX) for page in range(1, pages + 1))
        )

        images: List[ImageInfo] = []
        for page, response in enumerate(responses, start=1):
            if response is None or not response.success:
                raise ApiFailureError(f"Failed to obtain image list (page {page}).")
            images.extend(response.result.images)
        return images

    @sync_compatible
    @log_api_errors("Error getting image details")
    async def get_image_details(self, id: str) -> Optional[GetImageDetailsResponse]:
        return await self._batch_request("GET", self._method(id), GetImageDetailsResponse)

    @sync_compatible
    @log_api_errors("Error getting base image")
    async def get_base_image(self, id: str) -> Optional[bytes]:
        """Original uploaded image bytes."""
        return await self._request("GET", self._method(id, "blob"))

    # --- Update ---------------------------------------------------
    @sync_compatible
    @log_api_errors("Error updating image")
    async def update_image(
        self,
        id: str,
        metadata: Optional[Dict[str, Any]] = None,
        require_signed_urls: bool = False,
    ) -> Optional[UpdateImageResponse]:
        files = self._form_fields(metadata=metadata or {}, requireSignedURLs=require_signed_urls)
        return await self._batch_request(
            "PATCH", self._method(id), UpdateImageResponse, files=files
        )

    # --- Deletion -------------------------------------------------
    @sync_compatible
    @log_api_errors("Error deleting image", default=False)
    async def delete_image(self, id: str) -> bool:
        """Delete an image, returns True if the service reports success."""
        response = await self._batch_request("DELETE", self._method(id), DeleteImageResponse)
        return response.success
