"""AI-text detectors that score a block of text."""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from typing import Any

from article_detect.config import Settings

logger = logging.getLogger(__name__)


class DetectorError(Exception):
    """Raised when the detector fails or returns something unusable."""


class AnalysisService(ABC):
    """Contract for a service that estimates whether text is AI-generated."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @abstractmethod
    def detect(self, text: str) -> dict[str, Any]:
        """
        Score ``text``.

        Returns:
            The detector's JSON object, normally with ``score`` and
            ``ai_generated`` keys.

        Raises:
            DetectorError: If detection fails or times out.
        """
        ...


class SubprocessDetector(AnalysisService):
    """Runs an external detector command: text on stdin, one JSON object on stdout."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.command = shlex.split(settings.detector_command)
        if not self.command:
            raise ValueError("DETECTOR_COMMAND is empty")

    def detect(self, text: str) -> dict[str, Any]:
        logger.info("Running detector on %d chars", len(text))
        try:
            proc = subprocess.run(
                self.command,
                input=text,
                capture_output=True,
                text=True,
                timeout=self.settings.detector_timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.error("Detector could not run: %s", exc)
            raise DetectorError(f"Detector could not run: {exc}") from exc

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            logger.error("Detector exited with %d: %s", proc.returncode, stderr)
            raise DetectorError(f"Detector failed: {stderr}")

        try:
            result = json.loads(proc.stdout)
        except json.JSONDecodeError as exc:
            raise DetectorError("Failed to parse detector output") from exc
        if not isinstance(result, dict):
            raise DetectorError(f"Detector returned {type(result).__name__}, expected an object")

        logger.debug("Detector returned %s", result)
        return result
