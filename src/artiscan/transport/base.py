"""Transport protocol — the single network exchange a scan needs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class MultipartBody:
    """One file part of a multipart/form-data request."""

    field_name: str
    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class TransportResponse:
    """Status code and decoded JSON body of a completed exchange."""

    status: int
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Protocol for sending a multipart upload to the scanning service."""

    async def send(self, endpoint: str, body: MultipartBody) -> TransportResponse:
        """POST ``body`` to ``endpoint``.

        Resolves exactly once. Raises TransportError if the exchange could
        not be completed or a success body could not be decoded.
        """
        ...
