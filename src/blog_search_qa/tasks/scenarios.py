"""The search scenarios, runnable from pytest or the CLI runner."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional

from patchright.async_api import Error as PatchrightError

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.browser import BrowserSession
from blog_search_qa.core.errors import WaitTimeoutError
from blog_search_qa.core.page import BlogPage
from blog_search_qa.sites.catalog import BlogSite
from blog_search_qa.tasks.search import SearchTask
from blog_search_qa.verification.models import ScenarioResult, SearchOutcome
from blog_search_qa.verification.verifier import (
    SearchResultVerifier,
    entry_count,
    no_results_banner_shown,
)

logger = logging.getLogger(__name__)

TERM_NOT_FOUND_IN_RESULTS = "O termo de pesquisa não foi encontrado em pelo menos 1 dos resultados."
EXPECTED_NO_RESULTS = "Deveriam ser 0 resultados."
NOT_FOUND_BANNER_MISSING = "Mensagem de artigo não encontrado não foi exibida corretamente"
INJECTION_VULNERABLE = "O campo de pesquisa é vulnerável a SQL Injection."


async def search_existing_term(
    session: BlogPage,
    site: BlogSite,
    settings: Settings,
    verifier: Optional[SearchResultVerifier] = None,
) -> SearchOutcome:
    verifier = verifier or SearchResultVerifier()
    task = SearchTask(session, site, settings)
    await task.open_blog()
    await task.run(site.existing_term)
    await task.load_all_results()
    entries = await task.entries()
    all_match = await verifier.all_entries_match(entries, site.existing_term)
    return SearchOutcome(term=site.existing_term, entry_count=entry_count(entries), all_match=all_match)


async def search_missing_term(session: BlogPage, site: BlogSite, settings: Settings) -> SearchOutcome:
    task = SearchTask(session, site, settings)
    await task.open_blog()
    await task.run(site.missing_term)
    await task.wait_for_results_page()
    entries = await task.entries()
    banner_shown = await no_results_banner_shown(session, site.not_found_message)
    return SearchOutcome(term=site.missing_term, entry_count=entry_count(entries), banner_shown=banner_shown)


async def search_injection_term(session: BlogPage, site: BlogSite, settings: Settings) -> SearchOutcome:
    task = SearchTask(session, site, settings)
    await task.open_blog()
    await task.run(site.injection_term)
    await task.wait_for_results_page()
    entries = await task.entries()
    return SearchOutcome(term=site.injection_term, entry_count=entry_count(entries))


def check_existing_term(outcome: SearchOutcome) -> None:
    if not outcome.entry_count or not outcome.all_match:
        raise AssertionError(TERM_NOT_FOUND_IN_RESULTS)


def check_missing_term(outcome: SearchOutcome) -> None:
    if outcome.entry_count != 0:
        raise AssertionError(EXPECTED_NO_RESULTS)
    if not outcome.banner_shown:
        raise AssertionError(NOT_FOUND_BANNER_MISSING)


def check_sql_injection(outcome: SearchOutcome) -> None:
    if outcome.entry_count:
        raise AssertionError(INJECTION_VULNERABLE)


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    measure: Callable[[BlogPage, BlogSite, Settings], Awaitable[SearchOutcome]]
    check: Callable[[SearchOutcome], None]


SCENARIOS: dict[str, Scenario] = {
    scenario.name: scenario
    for scenario in (
        Scenario(
            "existing_term",
            "Pesquisar um termo existente",
            search_existing_term,
            check_existing_term,
        ),
        Scenario(
            "missing_term",
            "Pesquisar um termo inexistente",
            search_missing_term,
            check_missing_term,
        ),
        Scenario(
            "sql_injection",
            "Testar SQL Injection no campo de pesquisa",
            search_injection_term,
            check_sql_injection,
        ),
    )
}


def resolve_scenarios(names: Iterable[str]) -> list[Scenario]:
    selected: list[Scenario] = []
    for name in names:
        if name in {"*", "all"}:
            return list(SCENARIOS.values())
        try:
            selected.append(SCENARIOS[name])
        except KeyError as exc:
            known = ", ".join(sorted(SCENARIOS))
            raise KeyError(f"Unknown scenario '{name}'. Known scenarios: {known}") from exc
    return selected


async def run_scenario(scenario: Scenario, site: BlogSite, settings: Settings) -> ScenarioResult:
    """Run one scenario in its own browser session and record the verdict."""
    logger.info("Running scenario %s against %s", scenario.name, site.key)
    started = time.monotonic()
    outcome: Optional[SearchOutcome] = None
    try:
        async with BrowserSession(settings) as browser:
            session = await browser.open_blog_page()
            outcome = await scenario.measure(session, site, settings)
        scenario.check(outcome)
    except AssertionError as exc:
        logger.warning("Scenario %s failed on %s: %s", scenario.name, site.key, exc)
        return ScenarioResult(
            scenario=scenario.name,
            site=site.key,
            passed=False,
            outcome=outcome,
            message=str(exc),
            duration_s=time.monotonic() - started,
        )
    except (WaitTimeoutError, PatchrightError) as exc:
        logger.exception("Scenario %s aborted on %s", scenario.name, site.key)
        return ScenarioResult(
            scenario=scenario.name,
            site=site.key,
            passed=False,
            outcome=outcome,
            message=f"{type(exc).__name__}: {exc}",
            duration_s=time.monotonic() - started,
        )
    logger.info("Scenario %s passed on %s", scenario.name, site.key)
    return ScenarioResult(
        scenario=scenario.name,
        site=site.key,
        passed=True,
        outcome=outcome,
        duration_s=time.monotonic() - started,
    )


async def run_scenarios(
    settings: Settings,
    sites: Iterable[BlogSite],
    scenarios: Iterable[Scenario],
) -> list[ScenarioResult]:
    scenario_list = list(scenarios)
    results: list[ScenarioResult] = []
    for site in sites:
        for scenario in scenario_list:
            results.append(await run_scenario(scenario, site, settings))
    return results
