"""
HTTP transport for watson-speech.

Thin wrapper over aiohttp used by both the IAM authenticator and the
service clients. A ClientSession is opened per request with a
per-request ClientTimeout; connection pooling is left to aiohttp.

Example:
    transport = HttpTransport(timeout=10.0)
    response = await transport.request("GET", url, headers=headers)
    voices = response.json()
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from watson_speech.errors import DeserializationError, TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """
    Fully read HTTP response.

    Attributes:
        status: HTTP status code
        body: Raw response body
        headers: Response headers (case preserved as received)
        url: Final request URL
    """
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            DeserializationError: If the body is empty or not valid JSON
        """
        if not self.body:
            raise DeserializationError(f"Empty response body from {self.url}")
        try:
            return json.loads(self.body)
        except (ValueError, UnicodeDecodeError) as e:
            raise DeserializationError(
                f"Invalid JSON in response from {self.url}: {e}", cause=e
            ) from e

    def error_message(self) -> str:
        """
        Extract the error text from an IBM error body.

        IBM services answer errors with {"error": ..., "code": ...} and IAM
        with {"errorMessage": ...}; anything else falls back to the raw text.
        """
        try:
            data = json.loads(self.body) if self.body else None
        except (ValueError, UnicodeDecodeError):
            data = None

        if isinstance(data, dict):
            for key in ("error", "errorMessage", "message", "description"):
                value = data.get(key)
                if isinstance(value, str) and value:
                    return value
        return self.text.strip() or f"HTTP {self.status}"


class HttpTransport:
    """
    Async HTTP request executor.

    Attributes:
        timeout: Total per-request timeout in seconds
        connect_timeout: Connection timeout in seconds (None for no limit)
    """

    DEFAULT_TIMEOUT = 30.0  # seconds

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: Optional[float] = None,
    ):
        self.timeout = timeout
        self.connect_timeout = connect_timeout

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        data: Any = None,
        json_body: Any = None,
    ) -> HttpResponse:
        """
        Send one request and read the whole response body.

        Non-2xx responses are returned, not raised; callers map them.

        Raises:
            TransportError: On connection failures and timeouts
        """
        timeout = aiohttp.ClientTimeout(
            total=self.timeout, connect=self.connect_timeout
        )

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method,
                    url,
                    headers=headers,
                    params=params,
                    data=data,
                    json=json_body,
                ) as response:
                    body = await response.read()
                    return HttpResponse(
                        status=response.status,
                        body=body,
                        headers=dict(response.headers),
                        url=str(response.url),
                    )
        except asyncio.TimeoutError as e:
            logger.warning(f"{method} {url} timed out after {self.timeout}s")
            raise TransportError(
                f"{method} {url} timed out after {self.timeout}s", cause=e
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}", cause=e) from e

    def __repr__(self) -> str:
        return f"HttpTransport(timeout={self.timeout})"
