"""Shared fixtures for ArticleDetect tests."""

from __future__ import annotations

import pytest

from article_detect.config import Settings
from article_detect.renderer import ArticleBody, PageRenderer, RenderError

LISTING = "https://news.example/latest?pageId={page}"
ARTICLE = "https://news.example/latest/a/{id}"


@pytest.fixture()
def settings() -> Settings:
    """Settings pointing at a fake site with no settle delay."""
    return Settings(
        service_base_url="http://service.test",
        listing_url_template=LISTING,
        article_url_template=ARTICLE,
        max_pages=10,
        settle_delay=0.0,
        request_timeout=5.0,
    )


def article_href(identifier: str, slug: str = "story") -> str:
    return f"https://news.example/latest/a/{identifier}/{slug}"


class FakeRenderer(PageRenderer):
    """In-memory renderer: each URL maps to a list of hrefs and optional article bodies."""

    def __init__(
        self,
        pages: dict[str, list[str]] | None = None,
        articles: dict[str, dict[str, ArticleBody]] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.pages = pages or {}
        self.articles = articles or {}
        self.fail_on = fail_on or set()
        self.visited: list[str] = []
        self.opened = 0
        self.closed = 0

    def open(self) -> None:
        self.opened += 1

    def close(self) -> None:
        self.closed += 1

    def navigate(self, url: str, settle: float = 0.0):
        self.visited.append(url)
        if url in self.fail_on:
            raise RenderError(f"Failed to render {url}: timeout")
        return url

    def hrefs(self, handle) -> list[str]:
        return list(self.pages.get(handle, []))

    def extract_by_marker(self, handle, marker: str) -> ArticleBody | None:
        return self.articles.get(handle, {}).get(marker)


def listing_pages(*pages: list[str]) -> dict[str, list[str]]:
    """Build listing page hrefs keyed by listing URL; page numbers start at 1."""
    return {
        LISTING.format(page=i): [article_href(ident) for ident in ids]
        for i, ids in enumerate(pages, start=1)
    }
