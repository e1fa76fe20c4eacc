"""Browser session: owns the headless Chromium process for one run."""

from __future__ import annotations

import logging

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from portal_qa.models.config import SessionConfig
from portal_qa.utils.browser_launch import create_context, launch_browser

from .errors import NavigationError, SessionFatalError

logger = logging.getLogger(__name__)

# Playwright error text that means the browser or page is gone, not just
# that one call failed.
_FATAL_MARKERS = ("has been closed", "target closed", "browser closed", "crashed")


class BrowserSession:
    """Acquire, navigate and release a single isolated browser page.

    Use as an async context manager so the browser is torn down on every
    exit path::

        async with BrowserSession(config) as session:
            await session.navigate(url)
            ...

    ``release()`` is idempotent; the teardown body runs at most once.
    """

    def __init__(self, config: SessionConfig | None = None):
        self.config = config or SessionConfig()
        self.page: Page | None = None
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._dead_reason: str | None = None
        self._released = False

    async def __aenter__(self) -> "BrowserSession":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()

    @property
    def is_alive(self) -> bool:
        return self.page is not None and self._dead_reason is None

    async def acquire(self) -> Page:
        """Launch Chromium and open the run's page with a fixed viewport."""
        if self.page is not None:
            return self.page
        if self._released:
            raise SessionFatalError("Session has already been released")

        logger.debug("Launching Chromium (headless=%s, viewport=%dx%d)...",
                     self.config.headless, self.config.viewport.width,
                     self.config.viewport.height)
        try:
            self._playwright = await async_playwright().start()
            self._browser = await launch_browser(
                self._playwright,
                headless=self.config.headless,
                args=self.config.launch_args,
            )
            self._browser.on("disconnected", self._on_disconnected)
            self._context = await create_context(
                self._browser,
                viewport=self.config.viewport.model_dump(),
                user_agent=self.config.user_agent,
            )
            page = await self._context.new_page()
            page.on("crash", self._on_crash)
        except Exception as e:
            logger.error("Browser launch failed: %s", e)
            await self.release()
            raise SessionFatalError(f"Browser launch failed: {e}") from e

        self.page = page
        return page

    async def navigate(self, url: str, timeout_ms: int = 60000) -> None:
        """Load ``url`` and wait until the DOM has been parsed."""
        page = self._require_page()
        logger.debug("Navigating to %s (timeout=%dms)...", url, timeout_ms)
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationError(url, f"timed out after {timeout_ms}ms") from e
        except PlaywrightError as e:
            if self.is_fatal(e):
                raise SessionFatalError(f"Browser session failed: {e}") from e
            raise NavigationError(url, str(e)) from e

    async def release(self) -> None:
        """Close the browser and stop the Playwright driver."""
        if self._released:
            return
        self._released = True
        logger.debug("Releasing browser session")
        try:
            if self._browser is not None:
                # Closing the browser closes its contexts and pages
                await self._browser.close()
        except PlaywrightError as e:
            logger.debug("Browser close failed (already gone?): %s", e)
        finally:
            if self._playwright is not None:
                await self._playwright.stop()
            self.page = None
            self._context = None
            self._browser = None
            self._playwright = None

    def ensure_alive(self) -> None:
        """Raise SessionFatalError if the browser or page has died."""
        if self._dead_reason:
            raise SessionFatalError(self._dead_reason)
        if self.page is None:
            raise SessionFatalError("Browser session is not acquired")

    def is_fatal(self, exc: BaseException) -> bool:
        """Whether ``exc`` means the session itself is unusable."""
        if isinstance(exc, SessionFatalError) or self._dead_reason:
            return True
        if not isinstance(exc, PlaywrightError):
            return False
        message = str(exc).lower()
        return any(marker in message for marker in _FATAL_MARKERS)

    def _require_page(self) -> Page:
        self.ensure_alive()
        return self.page  # type: ignore[return-value]

    def _on_crash(self, _page) -> None:
        logger.error("Page crashed")
        self._dead_reason = "Page crashed"

    def _on_disconnected(self, _browser) -> None:
        if not self._released:
            logger.error("Browser disconnected unexpectedly")
            self._dead_reason = "Browser disconnected"
