import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import httpx
import structlog

from .errors import ProtocolError, TransportError

logger = structlog.get_logger(__name__)

MAX_REDIRECTS = 5


class HTTPFetcher:
    """Shared HTTP helper used for both search pages and image downloads.

    Owns a single httpx.Client. Transport failures become TransportError and
    any status other than 200 becomes ProtocolError; nothing is retried.
    """

    def __init__(self, timeout: Optional[float] = None, transport: httpx.BaseTransport = None):
        """Initialize the fetcher.

        Args:
            timeout: Seconds per request. None keeps httpx's default.
            transport: Optional transport override, used by tests.
        """
        client_kwargs = {
            'follow_redirects': True,
            'max_redirects': MAX_REDIRECTS,
        }
        if timeout is not None:
            client_kwargs['timeout'] = httpx.Timeout(timeout)
        if transport is not None:
            client_kwargs['transport'] = transport

        self._client = httpx.Client(**client_kwargs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self._client.close()

    def fetch(self, url: str, headers: Dict[str, str] = None) -> bytes:
        """GET a URL and return the whole body."""
        start_time = time.time()

        try:
            response = self._client.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"cannot send request: {e}", url=url) from e

        self._check_status(response, url)

        logger.debug("page_fetched", url=url, size=len(response.content),
                     seconds=round(time.time() - start_time, 3))
        return response.content

    @contextmanager
    def stream(self, url: str, headers: Dict[str, str] = None, chunk_size: int = 8192) -> Iterator[Iterator[bytes]]:
        """GET a URL and yield an iterator over its body chunks.

        The status is checked before anything is yielded. The response is
        closed when the block exits, however it exits.
        """
        try:
            with self._client.stream("GET", url, headers=headers) as response:
                self._check_status(response, url)
                yield self._iter_body(response, url, chunk_size)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"cannot send request: {e}", url=url) from e

    def _iter_body(self, response: httpx.Response, url: str, chunk_size: int) -> Iterator[bytes]:
        try:
            for chunk in response.iter_bytes(chunk_size=chunk_size):
                yield chunk
        except httpx.HTTPError as e:
            raise TransportError(f"cannot read response: {e}", url=url) from e

    def _check_status(self, response: httpx.Response, url: str):
        if response.status_code != httpx.codes.OK:
            raise ProtocolError(f"got non-200 response: {response.status_code}",
                                url=url, status_code=response.status_code)
