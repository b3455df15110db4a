"""Entry point for manual runs of the blog search checks."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.logging import configure_logging
from blog_search_qa.sites.catalog import SiteCatalog
from blog_search_qa.storage.report_writer import ReportStore
from blog_search_qa.tasks.scenarios import SCENARIOS, resolve_scenarios, run_scenarios

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the blog search checks against live sites")
    parser.add_argument(
        "--site",
        action="append",
        metavar="KEY",
        help="Site catalog key to check (repeatable; 'all' for every site). Defaults to BLOGQA_SITE_KEY.",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        choices=sorted(SCENARIOS) + ["all"],
        help="Scenario to run (repeatable). Defaults to all scenarios.",
    )
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--headed",
        action="store_true",
        help="Force headed browser mode (overrides env)",
    )
    mode_group.add_argument(
        "--headless",
        action="store_true",
        help="Force headless browser mode (overrides env)",
    )
    parser.add_argument(
        "--report",
        default=None,
        help="Report filename written under the report directory (default: timestamped)",
    )
    parser.add_argument(
        "--override",
        action="append",
        metavar="KEY=VALUE",
        help="Override a Settings attribute (repeatable). Values accept JSON literals.",
    )
    return parser


def _decode_override(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _apply_overrides(settings: Settings, overrides: dict[str, object]) -> None:
    for key, raw in overrides.items():
        if not hasattr(settings, key):
            logger.warning("Ignoring unknown override '%s'", key)
            continue
        setattr(settings, key, raw)
        logger.info("Override: set %s=%r", key, raw)


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    settings = Settings()

    overrides: dict[str, object] = {}
    for entry in args.override or ():
        if "=" not in entry:
            parser.error(f"Override must be in KEY=VALUE form (got '{entry}')")
        key, value = entry.split("=", 1)
        overrides[key.strip()] = _decode_override(value.strip())

    if args.headed:
        settings.headless = False
    elif args.headless:
        settings.headless = True

    configure_logging(settings.log_level, settings.log_dir)
    if overrides:
        _apply_overrides(settings, overrides)
    settings.ensure_directories()

    catalog = SiteCatalog.from_settings(settings)
    sites = catalog.select(args.site or [settings.site_key])
    scenarios = resolve_scenarios(args.scenario or ["all"])
    logger.info(
        "Running %s scenario(s) against %s",
        len(scenarios),
        ", ".join(site.key for site in sites),
    )

    results = asyncio.run(run_scenarios(settings, sites, scenarios))

    filename = args.report or f"search_checks_{datetime.now():%Y%m%d_%H%M%S}.json"
    path = ReportStore(settings.report_dir).write(results, filename=filename)
    failed = [result for result in results if not result.passed]
    for result in results:
        status = "PASS" if result.passed else "FAIL"
        suffix = f" - {result.message}" if result.message else ""
        print(f"[{status}] {result.site}/{result.scenario}{suffix}")
    logger.info("Wrote %s results to %s (%s failed)", len(results), path, len(failed))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
