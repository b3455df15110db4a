from __future__ import annotations

import os

import pytest
import pytest_asyncio

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.browser import BrowserSession
from blog_search_qa.core.logging import configure_logging
from blog_search_qa.sites.catalog import SiteCatalog


def _run_e2e() -> bool:
    return os.getenv("BLOGQA_RUN_E2E") == "1"


def pytest_generate_tests(metafunc):
    if "site" not in metafunc.fixturenames:
        return
    # Skipped runs only need site ids, so they never read BLOGQA_SITE_CATALOG_PATH.
    catalog = SiteCatalog.from_settings(Settings()) if _run_e2e() else SiteCatalog.default()
    sites = list(catalog.values())
    metafunc.parametrize("site", sites, ids=[site.key for site in sites])


def pytest_collection_modifyitems(config, items):
    if _run_e2e():
        return
    skip_live = pytest.mark.skip(reason="live browser checks run only with BLOGQA_RUN_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture(scope="session")
def settings() -> Settings:
    settings = Settings()
    configure_logging(settings.log_level, settings.log_dir)
    return settings


@pytest_asyncio.fixture
async def blog_page(settings: Settings):
    async with BrowserSession(settings) as browser:
        yield await browser.open_blog_page()
