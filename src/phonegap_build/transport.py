"""HTTP transport for sending built requests."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from .config import DEFAULT_TIMEOUT
from .request import RequestDescriptor

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"(auth_token=)[^&]+")


def redact(url: str) -> str:
    """Hide the auth token in a URL for logging."""
    return _TOKEN_RE.sub(r"\1***", url)


@dataclass(frozen=True)
class TransportResult:
    """What came back from one transport attempt.

    Either ``error`` is set (no HTTP exchange completed) or ``status_code``
    and ``body`` hold the response.
    """

    status_code: int | None = None
    body: bytes = b""
    error: str | None = None

    @classmethod
    def failed(cls, message: str) -> TransportResult:
        return cls(error=message)

    @classmethod
    def completed(cls, status_code: int, body: bytes = b"") -> TransportResult:
        return cls(status_code=status_code, body=body)

    @property
    def is_error(self) -> bool:
        return self.error is not None


class Transport(Protocol):
    """Anything that can send a ``RequestDescriptor`` exactly once."""

    def send(self, request: RequestDescriptor) -> TransportResult: ...

    def close(self) -> None: ...


class HttpxTransport:
    """Transport backed by a synchronous ``httpx.Client``."""

    def __init__(
        self,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        verify: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds, or an ``httpx.Timeout``.
            verify: Whether to verify TLS certificates.
            client: Existing client to send with. It is not closed by
                ``close()``.
        """
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.Client(
                timeout=timeout if isinstance(timeout, httpx.Timeout) else httpx.Timeout(timeout),
                verify=verify,
            )
            self._owns_client = True

    def build_httpx_request(self, request: RequestDescriptor) -> httpx.Request:
        """Encode a descriptor as an ``httpx.Request``.

        Every body part goes through ``files`` so the body is multipart
        even when no file is attached.
        """
        # httpx sets the multipart Content-Type itself, boundary included
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-type"}
        parts: list[tuple[str, Any]] = [
            (name, part.as_httpx()) for name, part in request.files.items()
        ]
        parts.extend(
            (name, (None, value.encode("utf-8"))) for name, value in request.fields.items()
        )

        if not parts:
            return self._client.build_request(request.method, request.url, headers=headers)
        return self._client.build_request(
            request.method, request.url, headers=headers, files=parts
        )

    def send(self, request: RequestDescriptor) -> TransportResult:
        auth = httpx.BasicAuth(*request.auth) if request.auth else None
        logger.debug("%s %s", request.method, redact(request.url))
        try:
            response = self._client.send(self.build_httpx_request(request), auth=auth)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = str(e) or type(e).__name__
            logger.warning(
                "%s %s failed: %s", request.method, redact(request.url), message
            )
            return TransportResult.failed(message)

        logger.debug("%s %s -> %d", request.method, redact(request.url), response.status_code)
        return TransportResult.completed(response.status_code, response.content)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
