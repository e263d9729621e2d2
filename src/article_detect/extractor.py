"""Article body extraction from a rendered article page."""

from __future__ import annotations

import logging
import re

from article_detect.renderer import PageRenderer

logger = logging.getLogger(__name__)

ARTICLE_PATH_MARKER = "/a/"
ARTICLE_ID_RE = re.compile(r"/a/([a-zA-Z0-9]{6})")

FAILURE_PREFIX = "❌"
EXTRACTION_FAILED = f"{FAILURE_PREFIX} Could not find article wrapper."


class InvalidArticleUrl(ValueError):
    """Raised when a URL carries no article identifier."""


def article_marker(url: str) -> str:
    """Return the CSS class that wraps the body of the article at ``url``."""
    match = ARTICLE_ID_RE.search(url)
    if not match:
        raise InvalidArticleUrl(f"Could not extract an article ID from {url}")
    return f"article-wrapper-{match.group(1)}"


def is_extraction_failure(text: str) -> bool:
    return text.startswith(FAILURE_PREFIX)


def extract_article(url: str, renderer: PageRenderer) -> str:
    """
    Load an article and return its headings, a blank line, then its paragraphs.

    A missing article container is not an error: the sentinel
    ``EXTRACTION_FAILED`` is returned instead so batch callers can skip it.

    Raises:
        InvalidArticleUrl: If ``url`` has no article identifier.
        RenderError: If the page fails to load.
    """
    marker = article_marker(url)
    handle = renderer.navigate(url)
    body = renderer.extract_by_marker(handle, marker)
    if body is None:
        logger.warning("No article.%s on %s", marker, url)
        return EXTRACTION_FAILED

    text = "\n".join([*body.headings, "", *body.paragraphs])
    logger.info("Extracted %d chars from %s", len(text), url)
    return text
