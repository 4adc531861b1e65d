"""
Batch token lifecycle.

A batch token unlocks ``batch.imagedelivery.net`` for a bounded number of
requests or until it expires, whichever comes first. The token is held per
client instance::

    Empty --refresh()--> Active(count=0) --batch call--> Active(count+1)
    Active --(count >= 200 or now > expires_at)--> Empty
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Tuple

from cfimages.domain.types.batch_token import RefreshBatchTokenResponse
from cfimages.io.decorators import log_api_errors
from cfimages.io.network_exceptions import TokenRefreshError

if TYPE_CHECKING:
    from cfimages.api.api import Api

BATCH_TOKEN_ENDPOINT = "images/v1/batch_token"
BATCH_TOKEN_REQUEST_LIMIT = 200

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchTokenState:
    """Snapshot of the batch token held by a client."""

    token: Optional[str] = None
    expires_at: Optional[datetime] = None
    request_count: int = 0

    @property
    def is_active(self) -> bool:
        return self.token is not None

    def is_exhausted(self, now: datetime) -> bool:
        return self.request_count >= BATCH_TOKEN_REQUEST_LIMIT or now > self.expires_at


class BatchTokenApi:
    """Chooses host and credential for batch-eligible calls and retires spent tokens."""

    def __init__(self, api: "Api"):
        self._api = api
        self._state = BatchTokenState()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> BatchTokenState:
        return self._state

    # --- Routing --------------------------------------------------
    def select_endpoint(self, method: str, batch_eligible: bool = False) -> str:
        """Batch host if the call is eligible and a token is held, standard host otherwise."""
        return self._api._prepare_url(method, batch=batch_eligible and self._state.is_active)

    def select_credential(self, batch_eligible: bool = False) -> str:
        if batch_eligible and self._state.is_active:
            return self._state.token
        return self._api.config.api_key.get_secret_value()

    def route(self, method: str, batch_eligible: bool = False) -> Tuple[str, str]:
        """URL and credential taken from the same state snapshot."""
        state = self._state
        if batch_eligible and state.is_active:
            return self._api._prepare_url(method, batch=True), state.token
        return self._api._prepare_url(method), self._api.config.api_key.get_secret_value()

    # --- Lifecycle ------------------------------------------------
    @log_api_errors("Error obtaining batch token", default=False)
    async def refresh(self) -> bool:
        """
        Request a new batch token with the account API key.

        On success the new token replaces any held one and the request counter
        is reset. On failure the state is left untouched and False is returned.
        """
        url, credential = self.route(BATCH_TOKEN_ENDPOINT)
        response = await self._api.execute("GET", url, credential, RefreshBatchTokenResponse)
        if not response.success:
            raise TokenRefreshError("Failed to obtain batch token.")
        async with self._lock:
            self._state = BatchTokenState(
                token=response.result.token,
                expires_at=response.result.expires_at,
                request_count=0,
            )
        logger.debug(f"Batch token issued, expires at {response.result.expires_at.isoformat()}")
        return True

    async def post_call_bookkeeping(self) -> None:
        """Count one batch-eligible call and retire the token once it is spent."""
        async with self._lock:
            if not self._state.is_active:
                return
            state = BatchTokenState(
                token=self._state.token,
                expires_at=self._state.expires_at,
                request_count=self._state.request_count + 1,
            )
            if state.is_exhausted(datetime.now(timezone.utc)):
                logger.debug(f"Batch token retired after {state.request_count} requests")
                state = BatchTokenState()
            self._state = state
