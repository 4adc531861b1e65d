# coding: utf-8
"""Connection to the Cloudflare Images API and the single-request dispatcher."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, SecretStr, ValidationError

from cfimages.io.credentials import ClientConfig
from cfimages.io.network_exceptions import SchemaError, TransportError

API_BASE_URL = "https://api.cloudflare.com/client/v4/accounts"
BATCH_BASE_URL = "https://batch.imagedelivery.net"

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class _Api:
    """
    Cloudflare Images API connection. Holds the immutable account configuration
    and the lazily created HTTP client every request goes through.
    """

    def __init__(
        self,
        account_id: str,
        api_key: str,
        timeout: httpx._types.TimeoutTypes = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # authorization
        self._config = ClientConfig(account_id=account_id, api_key=SecretStr(api_key))

        # logger
        self.logger = logger

        # httpx client
        self._timeout = timeout
        self._transport = transport
        self._async_httpx_client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_server_address(self) -> str:
        """
        Get standard per-account API address.

        :return: API server address.
        :rtype: :class:`str`
        :Usage example:

         .. code-block:: python

            import cfimages

            api = cfimages.Api(account_id='023e105f4ecef8ad9ca31a8372d0c353', api_key='Y3aP...')
            print(api.api_server_address)
            # Output:
            # 'https://api.cloudflare.com/client/v4/accounts/023e105f4ecef8ad9ca31a8372d0c353'
        """
        return f"{API_BASE_URL}/{self._config.account_id}"

    @property
    def batch_server_address(self) -> str:
        return BATCH_BASE_URL

    def _prepare_url(self, method: str, batch: bool = False) -> str:
        """
        Prepares the API endpoint URL on the standard or the batch host.
        """
        base = self.batch_server_address if batch else self.api_server_address
        return f"{base}/{method.lstrip('/')}"

    def _prepare_headers(self, credential: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {credential}"}

    async def execute(
        self,
        method_type: str,
        url: str,
        credential: str,
        response_class: Optional[Type[ModelT]] = None,
        **kwargs,
    ) -> Any:
        """
        Send one request and parse its envelope. No retries are made.

        :param method_type: HTTP method ('GET', 'POST', 'PATCH', 'DELETE').
        :type method_type: str
        :param url: Absolute request URL.
        :type url: str
        :param credential: Bearer credential for the ``Authorization`` header.
        :type credential: str
        :param response_class: Model the JSON body is validated against.
            If None, the raw body bytes are returned.
        :type response_class: type, optional
        :param kwargs: Extra arguments for :meth:`httpx.AsyncClient.request`
            (``params``, ``files``, ``data``).
        :return: Parsed response model or raw bytes.
        :raises TransportError: on network failure or non-success status.
        :raises SchemaError: if the body does not match ``response_class``.
        """
        self._set_async_client()
        logger.info(f"{method_type} {url}")

        try:
            response = await self._async_httpx_client.request(
                method_type,
                url,
                headers=self._prepare_headers(credential),
                timeout=self._timeout,
                **kwargs,
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}", url=url) from exc

        if not response.is_success:
            _Api._raise_for_status_httpx(response)

        if response_class is None:
            return response.content
        return _Api.parse_response(response, response_class)

    @staticmethod
    def parse_response(response: httpx.Response, response_class: Type[ModelT]) -> ModelT:
        """
        Validate a JSON response body against ``response_class``.

        :raises SchemaError: if the body is not JSON or has a different shape.
        """
        try:
            return response_class.model_validate(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SchemaError(f"Response body is not valid JSON: {exc}") from exc
        except ValidationError as exc:
            raise SchemaError(str(exc)) from exc

    @staticmethod
    def _raise_for_status_httpx(response: httpx.Response):
        """
        Raise error and show message with error code if given response is not successful.
        :param response: Response class object
        """
        reason = getattr(response, "reason_phrase", None) or "Can't get reason"

        def decode_response_content(response: httpx.Response):
            try:
                return response.content.decode("utf-8")
            except UnicodeDecodeError as e:
                return f"Can't decode response content: {e}"

        if 400 <= response.status_code < 500:
            kind = "Client Error"
        elif 500 <= response.status_code < 600:
            kind = "Server Error"
        else:
            kind = "Unexpected Status"

        raise TransportError(
            "%s %s: %s for url: %s (%s)"
            % (
                response.status_code,
                kind,
                reason,
                response.url,
                decode_response_content(response),
            ),
            status_code=response.status_code,
            url=str(response.url),
        )

    def _set_async_client(self):
        """
        Set async httpx client with HTTP/2 if it is not set yet.
        """
        if self._async_httpx_client is None:
            self._async_httpx_client = httpx.AsyncClient(http2=True, transport=self._transport)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._async_httpx_client is not None:
            await self._async_httpx_client.aclose()
            self._async_httpx_client = None
