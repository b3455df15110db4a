"""Dataclasses describing what a search check observed."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


class ResultEntry(Protocol):
    """One search-result item as seen on the results page.

    Handles are only valid for a single verification pass: fetching the detail
    text may navigate away and back, which re-renders the result list.
    """

    async def summary_text(self) -> str:
        ...

    async def detail_text(self) -> str:
        ...


@dataclass(slots=True)
class SearchOutcome:
    """Measurements from one search-term evaluation.

    Only the fields a scenario actually measured are populated.
    """

    term: str
    entry_count: Optional[int] = None
    banner_shown: Optional[bool] = None
    all_match: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.entry_count is not None and self.entry_count < 0:
            raise ValueError("entry_count must be non-negative")

    def to_dict(self) -> dict[str, object]:
        return {
            "term": self.term,
            "entry_count": self.entry_count,
            "banner_shown": self.banner_shown,
            "all_match": self.all_match,
        }


@dataclass(slots=True)
class ScenarioResult:
    """Pass/fail verdict for one scenario run against one site."""

    scenario: str
    site: str
    passed: bool
    outcome: Optional[SearchOutcome] = None
    message: Optional[str] = None
    duration_s: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "scenario": self.scenario,
            "site": self.site,
            "passed": self.passed,
            "outcome": self.outcome.to_dict() if self.outcome else None,
            "message": self.message,
            "duration_s": round(self.duration_s, 3),
        }
