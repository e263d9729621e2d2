"""Headless browser access behind a small rendering interface.

The crawler and the content extractor only need three things from a browser:
navigate to a URL, list the anchor targets on the loaded page, and pull the
heading/paragraph text out of one marked container. ``PageRenderer`` captures
that contract; ``PlaywrightRenderer`` implements it with headless Chromium.

Renderers are context managers. The session is opened on ``__enter__`` and
closed on ``__exit__``, including when the body raises.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from article_detect.config import Settings

logger = logging.getLogger(__name__)

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-features=FirstPartySets",
]


class RenderError(Exception):
    """Raised when a page fails to load within the navigation timeout."""


@dataclass
class ArticleBody:
    """Text pulled from an article container, in document order."""

    headings: list[str] = field(default_factory=list)
    paragraphs: list[str] = field(default_factory=list)


class PageRenderer(ABC):
    """Contract for a browser session that loads pages and exposes their DOM."""

    def open(self) -> None:
        """Acquire the underlying browser session."""

    def close(self) -> None:
        """Release the underlying browser session. Must be safe to call twice."""

    def __enter__(self) -> PageRenderer:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @abstractmethod
    def navigate(self, url: str, settle: float = 0.0) -> Any:
        """
        Load ``url`` and return a handle to the rendered document.

        Args:
            url: Page to load.
            settle: Extra seconds to wait after the network goes idle.

        Raises:
            RenderError: If navigation fails or times out.
        """
        ...

    @abstractmethod
    def hrefs(self, handle: Any) -> list[str]:
        """Return the resolved ``href`` of every anchor on the document."""
        ...

    @abstractmethod
    def extract_by_marker(self, handle: Any, marker: str) -> ArticleBody | None:
        """Return heading and paragraph text of ``article.<marker>``, or None if absent."""
        ...


class PlaywrightRenderer(PageRenderer):
    """Sync Playwright renderer driving a single Chromium page."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    def open(self) -> None:
        # Imported lazily so nothing but a real crawl needs a browser install.
        from playwright.sync_api import sync_playwright  # noqa: PLC0415

        self._playwright = sync_playwright().start()
        try:
            chromium = self._playwright.chromium
            if self.settings.browser_profile_dir:
                self._context = chromium.launch_persistent_context(
                    self.settings.browser_profile_dir,
                    headless=self.settings.headless,
                    args=BROWSER_ARGS,
                )
            else:
                self._browser = chromium.launch(
                    headless=self.settings.headless, args=BROWSER_ARGS
                )
                self._context = self._browser.new_context()
            self._page = self._context.new_page()
        except Exception:
            self.close()
            raise
        logger.debug("Browser session opened")

    def close(self) -> None:
        try:
            if self._context is not None:
                self._context.close()
            if self._browser is not None:
                self._browser.close()
        finally:
            if self._playwright is not None:
                self._playwright.stop()
            self._playwright = self._browser = self._context = self._page = None
            logger.debug("Browser session closed")

    def navigate(self, url: str, settle: float = 0.0) -> Any:
        from playwright.sync_api import Error as PlaywrightError  # noqa: PLC0415

        if self._page is None:
            raise RenderError("Renderer is not open")
        try:
            self._page.goto(
                url,
                wait_until="networkidle",
                timeout=int(self.settings.render_timeout * 1000),
            )
            if settle > 0:
                self._page.wait_for_timeout(int(settle * 1000))
        except PlaywrightError as exc:
            logger.error("Navigation failed for %s: %s", url, exc)
            raise RenderError(f"Failed to render {url}: {exc}") from exc
        return self._page

    def hrefs(self, handle: Any) -> list[str]:
        return handle.eval_on_selector_all("a[href]", "els => els.map(el => el.href)")

    def extract_by_marker(self, handle: Any, marker: str) -> ArticleBody | None:
        wrapper = handle.query_selector(f"article.{marker}")
        if wrapper is None:
            return None
        return ArticleBody(
            headings=[el.inner_text().strip() for el in wrapper.query_selector_all("h1")],
            paragraphs=[el.inner_text().strip() for el in wrapper.query_selector_all("p")],
        )
