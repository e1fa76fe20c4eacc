"""Browser launch utilities: starts Chromium and builds the run's context."""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Browser, BrowserContext, Playwright

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

# Hide navigator.webdriver so portals that gate on automation still render
_INIT_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => false });
"""


async def launch_browser(
    playwright: Playwright, headless: bool = True, args: list[str] | None = None,
) -> Browser:
    """Launch Chromium with the given command-line flags."""
    return await playwright.chromium.launch(
        headless=headless,
        args=["--disable-blink-features=AutomationControlled", *(args or [])],
    )


async def create_context(
    browser: Browser,
    viewport: dict,
    user_agent: Optional[str] = None,
) -> BrowserContext:
    """Create an isolated browser context with a fixed viewport."""
    context = await browser.new_context(
        viewport=viewport,
        user_agent=user_agent or DEFAULT_USER_AGENT,
        locale="en-US",
        extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
    )
    await context.add_init_script(_INIT_SCRIPT)
    return context
