"""Tests for browser launch utilities."""

import pytest
from unittest.mock import AsyncMock, Mock

from portal_qa.utils.browser_launch import DEFAULT_USER_AGENT, create_context, launch_browser


class TestLaunchBrowser:
    @pytest.mark.asyncio
    async def test_passes_headless_and_args(self):
        playwright = Mock()
        playwright.chromium.launch = AsyncMock()

        await launch_browser(playwright, headless=False, args=["--no-sandbox"])

        kwargs = playwright.chromium.launch.call_args.kwargs
        assert kwargs["headless"] is False
        assert "--no-sandbox" in kwargs["args"]
        assert "--disable-blink-features=AutomationControlled" in kwargs["args"]

    @pytest.mark.asyncio
    async def test_no_extra_args(self):
        playwright = Mock()
        playwright.chromium.launch = AsyncMock()

        await launch_browser(playwright)

        kwargs = playwright.chromium.launch.call_args.kwargs
        assert kwargs["headless"] is True
        assert kwargs["args"] == ["--disable-blink-features=AutomationControlled"]


class TestCreateContext:
    @pytest.mark.asyncio
    async def test_viewport_and_default_user_agent(self):
        mock_browser = AsyncMock()
        mock_context = AsyncMock()
        mock_browser.new_context = AsyncMock(return_value=mock_context)

        context = await create_context(mock_browser, viewport={"width": 1920, "height": 1080})

        assert context is mock_context
        call_kwargs = mock_browser.new_context.call_args.kwargs
        assert call_kwargs["viewport"] == {"width": 1920, "height": 1080}
        assert call_kwargs["user_agent"] == DEFAULT_USER_AGENT
        mock_context.add_init_script.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_custom_user_agent(self):
        mock_browser = AsyncMock()
        mock_browser.new_context = AsyncMock(return_value=AsyncMock())

        await create_context(
            mock_browser, viewport={"width": 800, "height": 600}, user_agent="qa-bot/1.0",
        )

        assert mock_browser.new_context.call_args.kwargs["user_agent"] == "qa-bot/1.0"
