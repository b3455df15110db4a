"""Live search checks against the catalogued blogs."""
from __future__ import annotations

import pytest

from blog_search_qa.tasks.scenarios import (
    check_existing_term,
    check_missing_term,
    check_sql_injection,
    search_existing_term,
    search_injection_term,
    search_missing_term,
)

pytestmark = [pytest.mark.e2e, pytest.mark.asyncio]


async def test_search_existing_term(blog_page, site, settings):
    outcome = await search_existing_term(blog_page, site, settings)
    check_existing_term(outcome)


async def test_search_missing_term(blog_page, site, settings):
    outcome = await search_missing_term(blog_page, site, settings)
    check_missing_term(outcome)


async def test_sql_injection_in_search_field(blog_page, site, settings):
    outcome = await search_injection_term(blog_page, site, settings)
    check_sql_injection(outcome)
