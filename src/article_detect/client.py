"""HTTP client for the article service's discovery, content and analysis endpoints."""

from __future__ import annotations

import logging

import httpx

from article_detect.config import Settings
from article_detect.models import AnalysisResult, AnalysisStatus

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the article service cannot be reached or answers with an error."""


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ServiceClient:
    """Talks to a running article service. Each call opens its own connection."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.base_url = settings.service_base_url.rstrip("/")

    def _client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=self.settings.request_timeout)

    def discover(self, pages: int) -> list[str]:
        """
        Ask the service to crawl up to ``pages`` listing pages.

        Raises:
            TransportError: If the request fails.
        """
        try:
            with self._client() as client:
                response = client.get("/scrape", params={"pages": pages})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Discovery failed: %s", exc)
            raise TransportError(f"Discovery failed: {exc}") from exc
        return [line.strip() for line in response.text.splitlines() if line.strip()]

    def fetch_content(self, url: str) -> str | None:
        """Return the extracted article text for ``url``, or None if the call failed."""
        logger.info("Fetching article content for %s", url)
        try:
            with self._client() as client:
                response = client.get("/scrape2", params={"url": url})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error scraping %s: %s", url, exc)
            return None
        text = response.text
        logger.info("Fetched %d characters", len(text))
        return text

    def analyze(self, text: str) -> AnalysisResult | None:
        """
        Submit ``text`` to the detector endpoint.

        Returns None when the text is too short to send, the request fails,
        or the response is not a JSON object.
        """
        if not isinstance(text, str) or len(text.strip()) < self.settings.min_analysis_chars:
            logger.warning(
                "Skipping analysis: input too short (length = %s)",
                len(text) if isinstance(text, str) else "N/A",
            )
            return None

        logger.info("Analyzing content (%d chars)...", len(text))
        try:
            with self._client() as client:
                response = client.post(
                    "/analyze",
                    content=text.encode("utf-8"),
                    headers={"Content-Type": "text/plain; charset=utf-8"},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.error("Detector request failed: %s", exc)
            return None
        except ValueError as exc:
            logger.error("Detector returned invalid JSON: %s", exc)
            return None

        if not isinstance(payload, dict):
            logger.error("Detector returned %s, expected an object", type(payload).__name__)
            return None

        if payload.get("error"):
            logger.warning("Detector reported an error: %s", payload["error"])
            return AnalysisResult(
                status=AnalysisStatus.ERROR, error=str(payload["error"]), payload=payload
            )

        ai_generated = payload.get("ai_generated")
        if not isinstance(ai_generated, bool):
            ai_generated = None

        score = payload.get("score")
        if not _is_number(score):
            logger.warning("No score returned from detector")
            return AnalysisResult(
                status=AnalysisStatus.NO_SCORE, ai_generated=ai_generated, payload=payload
            )

        logger.info("Analysis complete: score = %s, AI = %s", score, ai_generated)
        return AnalysisResult(
            status=AnalysisStatus.SUCCESS,
            score=float(score),
            ai_generated=ai_generated,
            payload=payload,
        )
