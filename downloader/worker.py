"""
Pagination-and-fetch loop: request a page, download every photo on it in
order, follow the cursor, stop when the cursor is empty.
"""
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Union

import structlog

from .fetcher import HTTPFetcher
from .models import Page
from .pager import PageSource
from .photos import process_photo

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RunState:
    """Progress of one run. Never persisted."""
    total_count: int = 0
    pages: int = 0


class Downloader:
    """Sequential downloader that follows server-supplied page cursors"""

    def __init__(self, source: PageSource, fetcher: HTTPFetcher, destination: Union[str, Path]):
        self.source = source
        self.fetcher = fetcher
        self.destination = Path(destination)

    def run(self, first_uri: str) -> RunState:
        """Walk every page starting at first_uri. Any error aborts the run."""
        state = RunState()
        next_page = first_uri

        while True:
            page = self.source.fetch_page(next_page)
            state = self.process_page(page, replace(state, pages=state.pages + 1))

            if not page.has_next:
                break
            next_page = page.next_page

        logger.info("download_complete", total_count=state.total_count, pages=state.pages)
        return state

    def process_page(self, page: Page, state: RunState) -> RunState:
        """Download every photo on the page and return the updated state"""
        state = replace(state, total_count=state.total_count + len(page.photos))

        for photo in page.photos:
            process_photo(self.fetcher, photo, self.destination)

        logger.info("page_processed", processed=state.total_count, page=page.page)
        return state
