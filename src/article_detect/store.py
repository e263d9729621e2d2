"""JSON result file for checkpointing and resuming batch runs."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from article_detect.models import AnalysisRecord

logger = logging.getLogger(__name__)

DEFAULT_RESULT_FILE = Path("ai_results.json")

_RECORDS = TypeAdapter(list[AnalysisRecord])


class ResultStore:
    """Overwrites a single JSON array of analysis records on every save."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_RESULT_FILE

    def save(self, records: list[AnalysisRecord]) -> None:
        """Write all records, replacing the previous file in one step.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [r.model_dump() for r in records]
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug("Saved %d records to %s", len(records), self.path)

    def load(self) -> list[AnalysisRecord]:
        """Return previously saved records; a missing or unreadable file yields []."""
        if not self.path.exists():
            return []
        try:
            return _RECORDS.validate_json(self.path.read_text(encoding="utf-8"))
        except (ValidationError, OSError) as exc:
            logger.warning("Ignoring unreadable result file %s: %s", self.path, exc)
            return []
