"""Search workflow against the blog under test."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from patchright.async_api import Locator

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.errors import ElementNotFoundError
from blog_search_qa.core.page import BlogPage
from blog_search_qa.selectors.search_page import BlogSearchSelectors
from blog_search_qa.sites.catalog import BlogSite

logger = logging.getLogger(__name__)


class ArticleEntry:
    """Result entry resolved by position on the results page.

    The element is looked up again on every call, so the entry survives the
    results page being re-rendered after a detail view.
    """

    def __init__(self, task: "SearchTask", index: int) -> None:
        self._task = task
        self.index = index

    async def summary_text(self) -> str:
        item = await self._task.result_at(self.index)
        return await self._task.session.text_of(item)

    async def detail_text(self) -> str:
        session = self._task.session
        item = await self._task.result_at(self.index)
        link = item.locator(BlogSearchSelectors.result_link).first
        # Result excerpts also render inside .entry-content, so only look for the
        # article body once the browser has left the results page.
        await session.follow_link(link)
        body = await session.wait_until_visible(BlogSearchSelectors.article_body)
        text = await session.text_of(body)
        await session.navigate_back()
        await self._task.wait_for_results_page()
        return text

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"ArticleEntry(index={self.index})"


class SearchTask:
    """Drive the blog's search box and expose the rendered results."""

    def __init__(self, session: BlogPage, site: BlogSite, settings: Settings) -> None:
        self.session = session
        self.site = site
        self.settings = settings

    async def open_blog(self) -> None:
        await self.session.open(self.site.url)
        await self.session.wait_until_clickable(BlogSearchSelectors.search_trigger)

    async def run(self, term: str) -> None:
        logger.info("Searching %s for %r", self.site.key, term)
        trigger = await self.session.wait_until_clickable(BlogSearchSelectors.search_trigger)
        await self.session.click(trigger)
        field = await self.session.wait_until_clickable(BlogSearchSelectors.search_field)
        await self.session.type(field, term)
        await self.session.submit(field)

    async def wait_for_results_page(self) -> None:
        await self.session.wait_until_visible(BlogSearchSelectors.page_title)

    async def result_count(self) -> int:
        return await self.session.count(BlogSearchSelectors.result_items)

    async def load_all_results(self, minimum: Optional[int] = None) -> int:
        """Scroll until the result count stops growing and return the final count.

        With ``minimum`` set, stops as soon as that many results are rendered.
        """
        await self.wait_for_results_page()
        count = await self.result_count()
        unchanged = 0
        rounds = 0
        while rounds < self.settings.scroll_max_rounds:
            if minimum is not None and count >= minimum:
                break
            await self.session.scroll(self.settings.scroll_delta_y)
            await asyncio.sleep(self.settings.scroll_settle_s)
            rounds += 1
            latest = await self.result_count()
            if latest > count:
                count = latest
                unchanged = 0
                continue
            unchanged += 1
            if unchanged >= self.settings.scroll_stable_rounds:
                break
        logger.info("Loaded %s results after %s scroll rounds", count, rounds)
        return count

    async def result_at(self, index: int) -> Locator:
        count = await self.result_count()
        if count <= index:
            count = await self.load_all_results(minimum=index + 1)
        if count <= index:
            raise ElementNotFoundError(
                f"{BlogSearchSelectors.result_items} #{index}", "rendered", self.settings.wait_timeout_s
            )
        items = await self.session.find_all(BlogSearchSelectors.result_items)
        return items[index]

    async def entries(self) -> list[ArticleEntry]:
        count = await self.result_count()
        return [ArticleEntry(self, index) for index in range(count)]
