"""Centralized configuration loaded from .env."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    # Article service (discovery / content / analysis endpoints)
    service_base_url: str = "http://localhost:3000"

    # Listing crawl
    listing_url_template: str = "https://www.aftonbladet.se/nyheter?pageId={page}"
    article_url_template: str = "https://www.aftonbladet.se/nyheter/a/{id}"
    max_pages: int = 383
    settle_delay: float = 1.0

    # Browser
    render_timeout: float = 60.0
    headless: bool = True
    browser_profile_dir: str = ""  # empty = throwaway profile

    # Transport / detector
    request_timeout: float = 900.0
    detector_command: str = "python DetectGPT/detect_wrapper.py"
    detector_timeout: float = 900.0

    # Batch thresholds
    checkpoint_interval: int = 25
    min_content_chars: int = 100
    min_analysis_chars: int = 50

    @classmethod
    def from_env(cls) -> Settings:
        _load_env()
        return cls(
            service_base_url=os.getenv("ARTICLE_SERVICE_URL", "http://localhost:3000"),
            listing_url_template=os.getenv(
                "LISTING_URL_TEMPLATE", "https://www.aftonbladet.se/nyheter?pageId={page}"
            ),
            article_url_template=os.getenv(
                "ARTICLE_URL_TEMPLATE", "https://www.aftonbladet.se/nyheter/a/{id}"
            ),
            max_pages=_int_env("MAX_PAGES", 383),
            render_timeout=_float_env("RENDER_TIMEOUT", 60.0),
            browser_profile_dir=os.getenv("BROWSER_PROFILE_DIR", ""),
            request_timeout=_float_env("REQUEST_TIMEOUT", 900.0),
            detector_command=os.getenv(
                "DETECTOR_COMMAND", "python DetectGPT/detect_wrapper.py"
            ),
            detector_timeout=_float_env("DETECTOR_TIMEOUT", 900.0),
            checkpoint_interval=_int_env("CHECKPOINT_INTERVAL", 25),
            min_content_chars=_int_env("MIN_CONTENT_CHARS", 100),
            min_analysis_chars=_int_env("MIN_ANALYSIS_CHARS", 50),
        )
