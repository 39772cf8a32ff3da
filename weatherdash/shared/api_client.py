from __future__ import annotations

import asyncio
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from weatherdash.exceptions import UpstreamError
from weatherdash.shared.logging_mixin import LoggingMixin

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class ApiClient(LoggingMixin):
    """Thin JSON-over-HTTP helper shared by the upstream clients."""

    def __init__(self, session: aiohttp.ClientSession):
        self._session = session

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any],
        *,
        failure_message: str,
    ) -> Any:
        """
        GET a JSON document.

        Raises:
            UpstreamError: on network failure or a non-success status. The
                upstream "message" field is used when the body carries one.
        """
        self.logger.debug("GET %s", url)
        try:
            async with self._session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    message = await self._extract_error_message(response)
                    self.logger.error(
                        "Upstream %s returned %s: %s", url, response.status, message
                    )
                    raise UpstreamError(
                        message or failure_message, status=response.status
                    )
                try:
                    return await response.json()
                except ValueError as e:
                    self.logger.error("Undecodable body from %s: %s", url, e)
                    raise UpstreamError(failure_message, status=response.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Request to %s failed: %s", url, e)
            raise UpstreamError(failure_message) from e

    async def _get_model(
        self,
        model: type[PayloadT],
        url: str,
        params: dict[str, Any],
        *,
        failure_message: str,
    ) -> PayloadT:
        raw = await self._get_json(url, params, failure_message=failure_message)
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            self.logger.error("Unexpected %s payload from %s: %s", model.__name__, url, e)
            raise UpstreamError(failure_message) from e

    async def _extract_error_message(
        self, response: aiohttp.ClientResponse
    ) -> str | None:
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ClientError, ValueError):
            return None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return None
