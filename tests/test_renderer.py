"""Tests for article_detect.renderer module.

Playwright is mocked at ``sync_playwright`` so no browser is launched.
"""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from article_detect.renderer import ArticleBody, PlaywrightRenderer, RenderError


@pytest.fixture()
def playwright_mock():
    with patch("playwright.sync_api.sync_playwright") as mock_sync:
        pw = mock_sync.return_value.start.return_value
        yield pw


def _element(text: str) -> MagicMock:
    el = MagicMock()
    el.inner_text.return_value = text
    return el


class TestLifecycle:
    def test_open_launches_browser_and_page(self, settings, playwright_mock):
        with PlaywrightRenderer(settings):
            pass

        launch = playwright_mock.chromium.launch
        launch.assert_called_once()
        assert launch.call_args.kwargs["headless"] is True
        assert "--disable-features=FirstPartySets" in launch.call_args.kwargs["args"]
        browser = launch.return_value
        browser.new_context.return_value.new_page.assert_called_once()

    def test_close_releases_everything(self, settings, playwright_mock):
        with PlaywrightRenderer(settings):
            pass

        browser = playwright_mock.chromium.launch.return_value
        browser.new_context.return_value.close.assert_called_once()
        browser.close.assert_called_once()
        playwright_mock.stop.assert_called_once()

    def test_closes_when_body_raises(self, settings, playwright_mock):
        with pytest.raises(RuntimeError):
            with PlaywrightRenderer(settings):
                raise RuntimeError("boom")

        playwright_mock.chromium.launch.return_value.close.assert_called_once()
        playwright_mock.stop.assert_called_once()

    def test_persistent_profile(self, settings, playwright_mock):
        settings = replace(settings, browser_profile_dir="/tmp/profile")
        with PlaywrightRenderer(settings):
            pass

        persistent = playwright_mock.chromium.launch_persistent_context
        persistent.assert_called_once()
        assert persistent.call_args.args[0] == "/tmp/profile"
        playwright_mock.chromium.launch.assert_not_called()
        persistent.return_value.close.assert_called_once()

    def test_launch_failure_stops_playwright(self, settings, playwright_mock):
        playwright_mock.chromium.launch.side_effect = RuntimeError("no browser installed")

        with pytest.raises(RuntimeError):
            PlaywrightRenderer(settings).open()

        playwright_mock.stop.assert_called_once()


class TestNavigate:
    def test_waits_for_network_idle(self, settings, playwright_mock):
        with PlaywrightRenderer(settings) as renderer:
            page = renderer.navigate("https://news.example/", settle=1.5)

        page.goto.assert_called_once_with(
            "https://news.example/", wait_until="networkidle", timeout=60000
        )
        page.wait_for_timeout.assert_called_once_with(1500)

    def test_no_settle_by_default(self, settings, playwright_mock):
        with PlaywrightRenderer(settings) as renderer:
            page = renderer.navigate("https://news.example/")

        page.wait_for_timeout.assert_not_called()

    def test_timeout_becomes_render_error(self, settings, playwright_mock):
        page = playwright_mock.chromium.launch.return_value.new_context.return_value.new_page.return_value
        page.goto.side_effect = PlaywrightTimeoutError("Timeout 60000ms exceeded")

        with PlaywrightRenderer(settings) as renderer:
            with pytest.raises(RenderError, match="Failed to render"):
                renderer.navigate("https://news.example/")

    def test_navigate_before_open_raises(self, settings):
        with pytest.raises(RenderError, match="not open"):
            PlaywrightRenderer(settings).navigate("https://news.example/")


class TestExtraction:
    def test_hrefs(self, settings):
        handle = MagicMock()
        handle.eval_on_selector_all.return_value = ["https://a", "https://b"]

        assert PlaywrightRenderer(settings).hrefs(handle) == ["https://a", "https://b"]
        assert handle.eval_on_selector_all.call_args.args[0] == "a[href]"

    def test_extract_by_marker(self, settings):
        wrapper = MagicMock()
        wrapper.query_selector_all.side_effect = lambda sel: {
            "h1": [_element("  Title  ")],
            "p": [_element("One."), _element(" Two. ")],
        }[sel]
        handle = MagicMock()
        handle.query_selector.return_value = wrapper

        body = PlaywrightRenderer(settings).extract_by_marker(handle, "article-wrapper-abc123")

        assert body == ArticleBody(headings=["Title"], paragraphs=["One.", "Two."])
        handle.query_selector.assert_called_once_with("article.article-wrapper-abc123")

    def test_extract_by_marker_missing(self, settings):
        handle = MagicMock()
        handle.query_selector.return_value = None

        assert PlaywrightRenderer(settings).extract_by_marker(handle, "article-wrapper-x") is None
