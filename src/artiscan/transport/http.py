"""HTTP transport — multipart POST to the scanning service via httpx."""

from __future__ import annotations

import asyncio
import logging

import httpx

from artiscan.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from artiscan.errors import TransportError
from artiscan.transport.base import MultipartBody, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Sends scan uploads with a fresh ``httpx.AsyncClient`` per request."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def send(self, endpoint: str, body: MultipartBody) -> TransportResponse:
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        files = {body.field_name: (body.filename, body.content, body.content_type)}
        logger.debug("POST %s (%s, %d bytes)", url, body.filename, len(body.content))

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                # httpx times connect, write and read separately; bound the
                # exchange as a whole
                response = await asyncio.wait_for(
                    client.post(url, files=files), self._timeout
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise TransportError(
                f"Scan request timed out after {self._timeout:g}s"
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Scan request failed: {exc}") from exc

        logger.debug("Response %d from %s", response.status_code, url)

        try:
            payload = response.json()
        except ValueError as exc:
            if response.is_success:
                raise TransportError("Malformed response body from scan service") from exc
            # Error pages from proxies are often HTML; let the caller use
            # its generic message.
            payload = {}

        return TransportResponse(status=response.status_code, payload=payload)
