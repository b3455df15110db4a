"""Browser orchestration helpers."""
from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from types import TracebackType
from typing import Optional, Type

from patchright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.page import BlogPage

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """Async context manager that owns Patchright + browser lifecycle.

    One session backs exactly one scenario; leaving the ``async with`` block
    closes every context and the browser, whether the scenario passed or not.
    """

    settings: Settings
    _playwright_cm: Optional[AbstractAsyncContextManager] = None
    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _context: Optional[BrowserContext] = None

    async def __aenter__(self) -> "BrowserSession":  # noqa: D401
        self._playwright_cm = async_playwright()
        self._playwright = await self._playwright_cm.__aenter__()
        launch_args = self.settings.chromium_launch_args()
        logger.info("Launching Chromium with args: %s", launch_args)
        try:
            self._browser = await self._playwright.chromium.launch(**launch_args)
        except BaseException:
            await self._playwright_cm.__aexit__(None, None, None)
            self._playwright_cm = None
            raise
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if self._context:
                await ensure_close_context(self._context)
                self._context = None
            if self._browser:
                browser, self._browser = self._browser, None
                await browser.close()
        finally:
            if self._playwright_cm:
                playwright_cm, self._playwright_cm = self._playwright_cm, None
                await playwright_cm.__aexit__(exc_type, exc, tb)

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Browser not initialised")
        return self._browser

    async def new_context(self, **overrides: object) -> BrowserContext:
        """Create the session's browser context with configured timeouts."""
        options = {**self.settings.context_options(), **overrides}
        logger.debug("Creating context with options: %s", options)
        if self._context:
            await ensure_close_context(self._context)
        context = await self.browser.new_context(**options)
        context.set_default_timeout(self.settings.wait_timeout_s * 1000)
        context.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        self._context = context
        return context

    async def new_page(self, **overrides: object) -> Page:
        context = await self.new_context(**overrides)
        return await context.new_page()

    async def open_blog_page(self, **overrides: object) -> BlogPage:
        """Return the browsing capability bound to a fresh page."""
        page = await self.new_page(**overrides)
        return BlogPage(page, self.settings)


async def ensure_close_context(context: BrowserContext) -> None:
    """Helper to close contexts in finally blocks."""
    try:
        await context.close()
    except Exception:  # pragma: no cover - best effort cleanup
        logger.exception("Failed to close context")
