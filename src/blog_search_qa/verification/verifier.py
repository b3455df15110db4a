"""Relevance checks applied to the rendered search results."""
from __future__ import annotations

import logging
from typing import Sequence

from blog_search_qa.core.page import BlogPage
from blog_search_qa.selectors.search_page import BlogSearchSelectors
from blog_search_qa.verification.models import ResultEntry

logger = logging.getLogger(__name__)


def contains_term(text: str, term: str) -> bool:
    """Case-insensitive substring containment."""
    return term.casefold() in text.casefold()


def entry_count(entries: Sequence[ResultEntry]) -> int:
    return len(entries)


async def no_results_banner_shown(session: BlogPage, expected_message: str) -> bool:
    """True only if the "no results" banner is present and contains ``expected_message``."""
    banner = await session.find_optional(BlogSearchSelectors.no_results_banner)
    if banner is None:
        logger.info("No results banner not present on %s", session.url)
        return False
    text = await session.text_of(banner)
    shown = expected_message in text
    if not shown:
        logger.info("No results banner text did not match: %r", text)
    return shown


class SearchResultVerifier:
    """Decides whether every result entry is relevant to a search term."""

    async def entry_matches(self, entry: ResultEntry, term: str) -> bool:
        if contains_term(await entry.summary_text(), term):
            return True
        logger.debug("Term %r missing from summary; checking article body", term)
        return contains_term(await entry.detail_text(), term)

    async def all_entries_match(self, entries: Sequence[ResultEntry], term: str) -> bool:
        """Return True when each entry mentions ``term`` in its summary or detail text.

        Stops at the first entry that fails both checks. An empty sequence is
        vacuously true, so callers expecting zero results must check the count.
        """
        for index, entry in enumerate(entries):
            if not await self.entry_matches(entry, term):
                logger.info("Result %s does not mention %r", index, term)
                return False
        return True
