"""
HTTP exchange for XMLMC calls and zone lookups.

Wraps a single httpx.Client and turns httpx failures into XmlmcError subclasses.
"""

import logging
import time
from typing import Optional

import httpx

from xmlmc.errors import NetworkError, RequestConstructionError

logger = logging.getLogger(__name__)


def _httpx_timeout(seconds: float) -> httpx.Timeout:
    # Zero or negative means wait forever
    if seconds > 0:
        return httpx.Timeout(seconds)
    return httpx.Timeout(None)


class HttpResult:
    """A fully read response."""

    __slots__ = ("status_code", "headers", "content", "encoding")

    def __init__(self, status_code: int, headers: httpx.Headers, content: bytes, encoding: Optional[str]):
        self.status_code = status_code
        self.headers = headers
        self.content = content
        self.encoding = encoding

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding or "utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"HttpResult(status_code={self.status_code}, bytes={len(self.content)})"


class HttpClient:
    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(transport=transport)
        # Accept is only sent when a caller asks for it
        self._client.headers.pop("Accept", None)

    def get(self, url: str, timeout: float) -> httpx.Response:
        try:
            return self._client.get(url, timeout=_httpx_timeout(timeout))
        except httpx.InvalidURL as e:
            raise RequestConstructionError(f"Invalid URL {url!r}: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"GET {url} failed: {e}") from e

    def post(self, url: str, content: bytes, headers: dict[str, str], timeout: float) -> HttpResult:
        """POST and read the whole body, bounding the complete exchange by `timeout` seconds.

        httpx applies its timeout per phase, so the body read is additionally
        checked against an overall deadline.
        """
        deadline = time.monotonic() + timeout if timeout > 0 else None
        try:
            request = self._client.build_request(
                "POST", url, content=content, headers=headers, timeout=_httpx_timeout(timeout),
            )
        except httpx.InvalidURL as e:
            raise RequestConstructionError(f"Unable to create http request: {e}") from e

        try:
            response = self._client.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise RequestConstructionError(f"Unable to create http request: {e}") from e
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request to {url} timed out after {timeout}s") from e
        except httpx.HTTPError as e:
            logger.debug("POST %s failed: %r", url, e)
            raise NetworkError(f"Request to {url} failed: {e}") from e

        def check_deadline() -> None:
            if deadline is not None and time.monotonic() > deadline:
                raise NetworkError(f"Request to {url} timed out after {timeout}s", response.status_code)

        chunks: list[bytes] = []
        try:
            check_deadline()
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                check_deadline()
            check_deadline()
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request to {url} timed out after {timeout}s", response.status_code) from e
        except httpx.HTTPError as e:
            raise NetworkError("Cant read the body of the response", response.status_code) from e
        finally:
            response.close()

        return HttpResult(response.status_code, response.headers, b"".join(chunks), response.charset_encoding)

    def close(self) -> None:
        self._client.close()
