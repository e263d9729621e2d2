"""Batch analysis: fetch, validate, analyze and record each candidate URL.

Per-item state machine (strictly sequential):
  Fetching -> Validating(content) -> Analyzing -> Validating(analysis) -> Accepted | Skipped

A skipped item never stops the run. Records are checkpointed to the result
file every ``checkpoint_interval`` processed items and after the last one.
Only an unreadable input file or a failed checkpoint write aborts a run.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

from article_detect.client import ServiceClient
from article_detect.config import Settings
from article_detect.extractor import ARTICLE_PATH_MARKER, is_extraction_failure
from article_detect.models import (
    AnalysisRecord,
    AnalysisStatus,
    ItemOutcome,
    ItemStatus,
    SkipReason,
)
from article_detect.store import ResultStore

logger = logging.getLogger(__name__)

LINE = "=" * 60


class BatchError(Exception):
    """Raised for failures that end the whole batch run."""


def _out(msg: str = "") -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _elapsed(t: float) -> str:
    secs = time.time() - t
    if secs < 60:
        return f"{secs:.1f}s"
    return f"{secs / 60:.1f}m"


def load_candidate_urls(path: Path) -> list[str]:
    """Read one URL per line, keeping trimmed non-empty lines that reference an article.

    Raises:
        BatchError: If the file cannot be read.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BatchError(f"Cannot read URL list {path}: {exc}") from exc

    urls = [
        line.strip()
        for line in content.split("\n")
        if line.strip() and ARTICLE_PATH_MARKER in line
    ]
    logger.info("Found %d valid article URLs in %s", len(urls), path)
    return urls


class BatchOrchestrator:
    """Runs candidate URLs through the article service one at a time."""

    def __init__(
        self,
        client: ServiceClient,
        store: ResultStore,
        settings: Settings,
        resume: bool = False,
    ) -> None:
        if settings.checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be at least 1")
        self.client = client
        self.store = store
        self.settings = settings
        self.resume = resume
        self.outcomes: list[ItemOutcome] = []

    def _skip(self, index: int, url: str, reason: SkipReason, detail: str = "") -> ItemOutcome:
        suffix = f" ({detail})" if detail else ""
        _out(f"  skipped: {reason.value}{suffix}")
        logger.warning("Skipping %s: %s%s", url, reason.value, suffix)
        return ItemOutcome(index=index, url=url, status=ItemStatus.SKIPPED, skip_reason=reason)

    def process(self, index: int, url: str) -> ItemOutcome:
        """Run one URL through the pipeline and return its tagged outcome."""
        content = self.client.fetch_content(url)

        if not content:
            return self._skip(index, url, SkipReason.NO_CONTENT)
        if is_extraction_failure(content):
            return self._skip(index, url, SkipReason.EXTRACTION_FAILED, content)
        if len(content) < self.settings.min_content_chars:
            return self._skip(index, url, SkipReason.CONTENT_TOO_SHORT, f"{len(content)} chars")

        analysis = self.client.analyze(content)

        if analysis is None:
            return self._skip(index, url, SkipReason.ANALYSIS_UNAVAILABLE)
        if analysis.status is AnalysisStatus.ERROR:
            return self._skip(index, url, SkipReason.ANALYSIS_ERROR, analysis.error or "")
        if analysis.score is None or analysis.ai_generated is None:
            return self._skip(index, url, SkipReason.ANALYSIS_INCOMPLETE)

        record = AnalysisRecord(url=url, score=analysis.score, ai_generated=analysis.ai_generated)
        _out(f"  accepted: score={record.score} ai_generated={record.ai_generated}")
        return ItemOutcome(index=index, url=url, status=ItemStatus.ACCEPTED, record=record)

    def _checkpoint(self, records: list[AnalysisRecord], processed: int) -> None:
        try:
            self.store.save(records)
        except OSError as exc:
            raise BatchError(f"Checkpoint write to {self.store.path} failed: {exc}") from exc
        _out(f"  saved progress at {processed} articles ({len(records)} records)")
        logger.info("Checkpoint at %d processed, %d records", processed, len(records))

    def run(self, urls: list[str]) -> list[AnalysisRecord]:
        """
        Process every URL in order and return the accepted records.

        Raises:
            BatchError: If a checkpoint cannot be written.
        """
        records: list[AnalysisRecord] = self.store.load() if self.resume else []
        done = {r.url for r in records}
        if done:
            _out(f"Resuming with {len(records)} saved records")

        self.outcomes = []
        total = len(urls)
        interval = self.settings.checkpoint_interval
        run_start = time.time()

        _out(f"Starting batch analysis of {total} articles...")

        for index, url in enumerate(urls, start=1):
            _out()
            _out(f"[{index}/{total}] {url}")

            if url in done:
                _out("  already recorded, skipping")
            else:
                outcome = self.process(index, url)
                self.outcomes.append(outcome)
                if outcome.record is not None:
                    records.append(outcome.record)

            if index % interval == 0 or index == total:
                self._checkpoint(records, index)

        if total == 0:
            self._checkpoint(records, 0)

        skipped = sum(1 for o in self.outcomes if o.status is ItemStatus.SKIPPED)
        _out()
        _out(LINE)
        _out("  BATCH COMPLETE")
        _out(LINE)
        _out(f"  Processed:  {total}")
        _out(f"  Recorded:   {len(records)}")
        _out(f"  Skipped:    {skipped}")
        _out(f"  Saved to:   {self.store.path}")
        _out(f"  Total time: {_elapsed(run_start)}")
        _out(LINE)

        logger.info("Batch complete. Processed: %d, Records: %d, Skipped: %d", total, len(records), skipped)
        return records
