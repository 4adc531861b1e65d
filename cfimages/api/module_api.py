from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Type

from cfimages.api._api import ModelT

if TYPE_CHECKING:
    from cfimages.api.api import Api


class ModuleApi(ABC):
    """Base class for a group of endpoints sharing one path prefix."""

    def __init__(self, api: "Api"):
        self._api = api

    @staticmethod
    @abstractmethod
    def _endpoint_prefix() -> str:
        pass

    def _method(self, *parts: Any) -> str:
        return "/".join([self._endpoint_prefix(), *(str(p) for p in parts)])

    async def _request(
        self,
        method_type: str,
        method: str,
        response_class: Optional[Type[ModelT]] = None,
        **kwargs,
    ) -> Any:
        """Request on the standard host with the account API key."""
        url, credential = self._api.batch_token_api.route(method)
        return await self._api.execute(method_type, url, credential, response_class, **kwargs)

    async def _batch_request(
        self,
        method_type: str,
        method: str,
        response_class: Optional[Type[ModelT]] = None,
        **kwargs,
    ) -> Any:
        """
        Request routed through the batch host while a batch token is held.
        Token bookkeeping runs whether the request succeeds or not.
        """
        url, credential = self._api.batch_token_api.route(method, batch_eligible=True)
        try:
            return await self._api.execute(method_type, url, credential, response_class, **kwargs)
        finally:
            await self._api.batch_token_api.post_call_bookkeeping()

    @staticmethod
    def _form_fields(**fields: Any) -> Dict[str, Tuple[None, str]]:
        """
        Multipart text fields in the httpx ``files`` format. Dicts are sent as
        JSON, booleans as ``"true"``/``"false"``, None values are skipped.
        """
        form = {}
        for name, value in fields.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = str(value).lower()
            elif isinstance(value, dict):
                value = json.dumps(value)
            form[name] = (None, str(value))
        return form
