"""Browsing capability the search workflow drives."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from patchright.async_api import Error as PatchrightError
from patchright.async_api import Locator, Page

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.errors import ElementNotFoundError, WaitTimeoutError
from blog_search_qa.core.waiting import poll_until

logger = logging.getLogger(__name__)

# Detached nodes and navigations that destroy the execution context surface as
# driver errors; they mean "not there yet" while a wait is in progress.
_TRANSIENT_ERRORS = (PatchrightError,)


class BlogPage:
    """Thin wrapper over a Patchright page exposing the operations the checks need."""

    def __init__(self, page: Page, settings: Settings) -> None:
        self.page = page
        self.settings = settings

    @property
    def url(self) -> str:
        return self.page.url

    async def open(self, url: str) -> None:
        logger.info("Opening %s", url)
        await self.page.goto(url)

    async def wait_until_clickable(self, selector: str, timeout: Optional[float] = None) -> Locator:
        locator = self.page.locator(selector).first

        async def _clickable() -> Optional[Locator]:
            if not await locator.is_visible():
                return None
            if not await locator.is_enabled(timeout=self._check_timeout_ms):
                return None
            return locator

        return await self._wait(_clickable, selector, "clickable", timeout)

    async def wait_until_visible(self, selector: str, timeout: Optional[float] = None) -> Locator:
        locator = self.page.locator(selector).first

        async def _visible() -> Optional[Locator]:
            return locator if await locator.is_visible() else None

        return await self._wait(_visible, selector, "visible", timeout)

    async def click(self, locator: Locator) -> None:
        await locator.click()

    async def follow_link(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Click ``locator`` and wait until the page has left its current URL."""
        origin = self.page.url
        await locator.click()

        async def _navigated() -> bool:
            return self.page.url != origin

        effective_timeout = self.settings.wait_timeout_s if timeout is None else timeout
        await poll_until(
            _navigated,
            timeout=effective_timeout,
            interval=self.settings.poll_interval_s,
            description=f"navigation away from {origin}",
        )
        logger.debug("Followed link to %s", self.page.url)

    async def type(self, locator: Locator, text: str) -> None:
        await locator.fill(text)

    async def submit(self, locator: Locator) -> None:
        await locator.press("Enter")

    async def find_all(self, selector: str) -> list[Locator]:
        return await self.page.locator(selector).all()

    async def count(self, selector: str) -> int:
        return await self.page.locator(selector).count()

    async def find_optional(self, selector: str) -> Optional[Locator]:
        """Return the first match, or ``None`` when nothing matches right now."""
        locator = self.page.locator(selector)
        if not await locator.count():
            return None
        return locator.first

    async def text_of(self, locator: Locator) -> str:
        return await locator.inner_text()

    async def scroll(self, delta_y: int) -> None:
        x, y = self.settings.scroll_origin
        await self.page.mouse.move(x, y)
        await self.page.mouse.wheel(0, delta_y)

    async def navigate_back(self) -> None:
        logger.debug("Navigating back from %s", self.page.url)
        await self.page.go_back()

    @property
    def _check_timeout_ms(self) -> float:
        return self.settings.poll_interval_s * 1000

    async def _wait(
        self,
        condition: Callable[[], Awaitable[Optional[Locator]]],
        selector: str,
        state: str,
        timeout: Optional[float],
    ) -> Locator:
        effective_timeout = self.settings.wait_timeout_s if timeout is None else timeout
        try:
            return await poll_until(
                condition,
                timeout=effective_timeout,
                interval=self.settings.poll_interval_s,
                ignoring=_TRANSIENT_ERRORS,
                description=f"{selector} to be {state}",
            )
        except WaitTimeoutError as exc:
            raise ElementNotFoundError(selector, state, effective_timeout) from exc
