"""
Search pagination against the Pexels API.

The first page URL is built from the query; every later page URL is the
server's next_page cursor, used verbatim.
"""
import urllib.parse
from typing import Protocol

import structlog

from .errors import ConfigError
from .fetcher import HTTPFetcher
from .models import Page, decode_page

logger = structlog.get_logger(__name__)

FIRST_PAGE_URL = "https://api.pexels.com/v1/search?per_page=80&page=1"


def build_initial_request(query: str) -> str:
    """Return the first search page URL for a free-text query."""
    if not isinstance(query, str):
        raise ConfigError(f"query must be a string, got {type(query).__name__}")

    parsed = urllib.parse.urlsplit(FIRST_PAGE_URL)
    params = dict(urllib.parse.parse_qsl(parsed.query))
    params['query'] = query

    try:
        encoded = urllib.parse.urlencode(sorted(params.items()))
    except UnicodeEncodeError as e:
        raise ConfigError(f"cannot encode query {query!r}: {e}", url=FIRST_PAGE_URL) from e

    return urllib.parse.urlunsplit(parsed._replace(query=encoded))


def fetch_page(fetcher: HTTPFetcher, uri: str, api_key: str) -> Page:
    """Request one search page with the raw API key as Authorization."""
    body = fetcher.fetch(uri, headers={'Authorization': api_key})
    return decode_page(body, url=uri)


class PageSource(Protocol):
    """Anything that can turn a page URI into a Page."""

    def fetch_page(self, uri: str) -> Page:
        ...


class PexelsPageSource:
    """PageSource backed by the live search endpoint."""

    def __init__(self, fetcher: HTTPFetcher, api_key: str):
        self.fetcher = fetcher
        self.api_key = api_key

    def fetch_page(self, uri: str) -> Page:
        logger.info("page_requested", url=uri)
        return fetch_page(self.fetcher, uri, self.api_key)
