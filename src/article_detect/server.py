"""FastAPI application exposing discovery, content extraction and detection.

Routes
------
GET  /scrape?pages=N    Crawl the listing, return article URLs (text/plain)
GET  /scrape2?url=U     Extract one article body (text/plain)
POST /analyze           Score a raw text/plain body with the detector (JSON)
GET  /analyze           Usage note

Browser-backed routes are plain ``def`` handlers so FastAPI runs them in its
threadpool, where the sync Playwright API is allowed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from article_detect.config import Settings
from article_detect.crawler import article_urls, crawl
from article_detect.detector import AnalysisService, DetectorError, SubprocessDetector
from article_detect.extractor import (
    ARTICLE_PATH_MARKER,
    InvalidArticleUrl,
    article_marker,
    extract_article,
)
from article_detect.renderer import PageRenderer, PlaywrightRenderer, RenderError

logger = logging.getLogger(__name__)

RendererFactory = Callable[[Settings], PageRenderer]

_ANALYZE_USAGE = """\
<h2>This endpoint only supports POST requests.</h2>
<p>To use it, send a POST request with raw text in the body:</p>
<code>curl -X POST {base}analyze -H "Content-Type: text/plain" --data "your article here"</code>
"""


def create_app(
    settings: Settings | None = None,
    renderer_factory: RendererFactory | None = None,
    detector: AnalysisService | None = None,
) -> FastAPI:
    """Return a configured app. Collaborators default to Playwright and the detector command."""
    if settings is None:
        settings = Settings.from_env()
    make_renderer = renderer_factory or PlaywrightRenderer

    app = FastAPI(
        title="Article Detect",
        description="Discover news articles, extract their text and score it for AI generation.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.detector = detector

    def get_detector() -> AnalysisService:
        if app.state.detector is None:
            app.state.detector = SubprocessDetector(settings)
        return app.state.detector

    @app.get("/scrape", response_class=PlainTextResponse)
    def scrape(pages: int | None = None) -> PlainTextResponse:
        page_count = pages if pages and pages > 0 else settings.max_pages
        logger.info("Scraping up to %d pages", page_count)
        try:
            with make_renderer(settings) as renderer:
                result = crawl(page_count, renderer, settings)
        except RenderError as exc:
            logger.error("Scraping error: %s", exc)
            return PlainTextResponse("Scraping failed.", status_code=500)
        return PlainTextResponse("\n".join(article_urls(result, settings)))

    @app.get("/scrape2", response_class=PlainTextResponse)
    def scrape_article(url: str | None = None) -> PlainTextResponse:
        if not url or ARTICLE_PATH_MARKER not in url:
            return PlainTextResponse(
                "Please provide a valid article URL using ?url=...", status_code=400
            )
        try:
            article_marker(url)
        except InvalidArticleUrl:
            return PlainTextResponse(
                "Invalid URL format, couldn't extract article ID.", status_code=400
            )

        try:
            with make_renderer(settings) as renderer:
                content = extract_article(url, renderer)
        except RenderError as exc:
            logger.error("Article extraction error: %s", exc)
            return PlainTextResponse("Failed to extract article content.", status_code=500)
        return PlainTextResponse(content)

    @app.post("/analyze")
    async def analyze(request: Request):
        text = (await request.body()).decode("utf-8", errors="replace")
        logger.info("Analyze route hit. Length: %d", len(text))

        if len(text) < settings.min_content_chars:
            logger.warning("Text too short or missing")
            return PlainTextResponse("Text too short or missing.", status_code=400)

        try:
            result = await run_in_threadpool(get_detector().detect, text)
        except DetectorError as exc:
            logger.error("Detection error: %s", exc)
            return PlainTextResponse("AI detection failed.", status_code=500)
        logger.info("Detector returned: %s", result)
        return JSONResponse(result)

    @app.get("/analyze", response_class=HTMLResponse)
    def analyze_usage(request: Request) -> str:
        return _ANALYZE_USAGE.format(base=request.base_url)

    return app


# Module-level instance used by uvicorn:
#   uvicorn article_detect.server:app
app = create_app()
