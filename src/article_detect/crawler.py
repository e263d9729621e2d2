"""Paginated listing crawl: walk pageId=1..N collecting article identifiers.

The listing is a "latest news" feed with no known page count, so the crawl
decides when to stop from what it sees:
  (a) a page with no article links at all   -> the feed ran out
  (b) a page whose links were all seen      -> the feed is repeating
  (c) the page bound was reached
"""

from __future__ import annotations

import logging
import re
import sys
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from article_detect.codec import encode
from article_detect.config import Settings
from article_detect.models import CrawlEntry, CrawlResult, StopReason
from article_detect.renderer import PageRenderer

logger = logging.getLogger(__name__)

ARTICLE_HREF_RE = re.compile(r"/a/([a-zA-Z0-9]{6})/")

LINE = "=" * 60


def _out(msg: str = "") -> None:
    """Print a status message to stderr so it doesn't mix with the URL list."""
    print(msg, file=sys.stderr, flush=True)


def _elapsed(t: float) -> str:
    """Format elapsed seconds as human-readable string."""
    secs = time.time() - t
    if secs < 60:
        return f"{secs:.1f}s"
    return f"{secs / 60:.1f}m"


def extract_ids(hrefs: Iterable[str]) -> list[str]:
    """Return the unique article identifiers found in ``hrefs``, first-seen order."""
    found: dict[str, None] = {}
    for href in hrefs:
        match = ARTICLE_HREF_RE.search(href)
        if match:
            found.setdefault(match.group(1), None)
    return list(found)


@dataclass
class CrawlState:
    """Running dedup state for one crawl."""

    seen: set[str] = field(default_factory=set)
    entries: list[CrawlEntry] = field(default_factory=list)

    def add_page(self, ids: Iterable[str]) -> int:
        """Append unseen ids and return how many were new."""
        new_count = 0
        for identifier in ids:
            if identifier in self.seen:
                continue
            self.seen.add(identifier)
            self.entries.append(CrawlEntry(id=identifier, base10=encode(identifier)))
            new_count += 1
        return new_count


def crawl(max_pages: int, renderer: PageRenderer, settings: Settings) -> CrawlResult:
    """
    Crawl listing pages 1..max_pages through an already-open renderer.

    Raises:
        RenderError: If any listing page fails to load. The crawl is aborted.
    """
    state = CrawlState()
    stop_reason = StopReason.PAGE_LIMIT
    pages_crawled = 0
    crawl_start = time.time()

    _out(f"Crawling up to {max_pages} listing pages...")

    for page_id in range(1, max_pages + 1):
        url = settings.listing_url_template.format(page=page_id)
        logger.info("Visiting %s", url)

        handle = renderer.navigate(url, settle=settings.settle_delay)
        ids = extract_ids(renderer.hrefs(handle))
        pages_crawled = page_id

        if not ids:
            _out(f"  [{page_id}] no articles found, stopping")
            stop_reason = StopReason.EMPTY_PAGE
            break

        new_count = state.add_page(ids)
        _out(f"  [{page_id}] {new_count} new IDs ({len(state.entries)} total)")
        logger.debug("Page %d ids: %s", page_id, ", ".join(ids))

        if new_count == 0:
            _out(f"  [{page_id}] no new IDs, ending early")
            stop_reason = StopReason.NO_NEW_IDS
            break

    _out(LINE)
    _out(f"  Pages crawled:  {pages_crawled}")
    _out(f"  Articles found: {len(state.entries)}")
    _out(f"  Stopped:        {stop_reason.value}")
    _out(f"  Total time:     {_elapsed(crawl_start)}")
    _out(LINE)

    logger.info(
        "Crawl complete. Pages: %d, Ids: %d, Reason: %s",
        pages_crawled, len(state.entries), stop_reason.value,
    )

    return CrawlResult(
        entries=state.entries,
        pages_crawled=pages_crawled,
        stop_reason=stop_reason,
    )


def article_urls(result: CrawlResult, settings: Settings) -> list[str]:
    """Build the article URL for every discovered identifier."""
    return [settings.article_url_template.format(id=e.id) for e in result.entries]
