from pathlib import Path
from typing import Optional, Union

import httpx

from cfimages.api._api import _Api
from cfimages.api.batch_token_api import BatchTokenApi, BatchTokenState
from cfimages.api.image_api import ImageApi
from cfimages.io.credentials import CloudflareCredentials
from cfimages.io.custom_id import decode_uuid, encode_uuid, is_valid_custom_id
from cfimages.io.decorators import sync_compatible
from cfimages.io.env import load_env


class Api(_Api):

    def __init__(
        self,
        account_id: str,
        api_key: str,
        timeout: httpx._types.TimeoutTypes = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            account_id=account_id,
            api_key=api_key,
            timeout=timeout,
            transport=transport,
        )

        self.batch_token_api = BatchTokenApi(self)
        self.image = ImageApi(self)

    @property
    def batch_token(self) -> BatchTokenState:
        """Current batch token state of this client."""
        return self.batch_token_api.state

    @sync_compatible
    async def refresh_batch_token(self) -> bool:
        """
        Obtain a batch token. While it is valid, batch-eligible image calls go to
        the batch host. Returns False (and logs) if the token could not be obtained.
        """
        return await self.batch_token_api.refresh()

    @sync_compatible
    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.aclose()

    # --- Custom ids -----------------------------------------------
    encode_uuid = staticmethod(encode_uuid)
    decode_uuid = staticmethod(decode_uuid)
    is_valid_custom_id = staticmethod(is_valid_custom_id)

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None, **kwargs) -> "Api":
        """Create API client from environment variables."""
        load_env(env_file)
        credentials = CloudflareCredentials()
        config = credentials.to_config()
        return cls(
            account_id=config.account_id, api_key=config.api_key.get_secret_value(), **kwargs
        )


CloudflareImages = Api
