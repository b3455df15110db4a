"""Catalog of blog deployments the search checks can target."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover
    from blog_search_qa.config.settings import Settings

NOT_FOUND_MESSAGE = (
    "Lamentamos, mas nada foi encontrado para sua pesquisa, tente novamente com outras palavras."
)
SQL_INJECTION_TERM = "' OR '1'='1'"


@dataclass(frozen=True)
class BlogSite:
    """A deployment of the blog plus the terms used to exercise its search."""

    key: str
    name: str
    url: str
    existing_term: str
    missing_term: str
    injection_term: str = SQL_INJECTION_TERM
    not_found_message: str = NOT_FOUND_MESSAGE


DEFAULT_SITES: tuple[BlogSite, ...] = (
    BlogSite(
        key="blogdoagi",
        name="Blog do Agi",
        url="https://blogdoagi.com.br/",
        existing_term="financiamento",
        missing_term="basculho",
    ),
    BlogSite(
        key="agibank",
        name="Blog Agibank",
        url="https://blog.agibank.com.br/",
        existing_term="banco",
        missing_term="asdasdasd",
    ),
)


class SiteCatalog:
    """Loads blog site metadata from disk or the built-in defaults."""

    def __init__(self, sites: Mapping[str, BlogSite], *, source: Optional[Path] = None) -> None:
        self._sites = dict(sites)
        self._source = source

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def get(self, key: str) -> BlogSite:
        try:
            return self._sites[key]
        except KeyError as exc:
            known = ", ".join(sorted(self._sites))
            origin = self._source or "built-in catalog"
            raise KeyError(f"Site '{key}' not found in {origin}. Known keys: {known}") from exc

    def values(self) -> Iterable[BlogSite]:
        return self._sites.values()

    def keys(self) -> list[str]:
        return list(self._sites)

    def select(self, keys: Iterable[str]) -> list[BlogSite]:
        """Resolve keys to sites; ``all`` or ``*`` selects every site."""
        selected: list[BlogSite] = []
        for key in keys:
            if key.strip().lower() in {"*", "all"}:
                return list(self.values())
            selected.append(self.get(key.strip()))
        return selected

    @classmethod
    def default(cls) -> "SiteCatalog":
        return cls({site.key: site for site in DEFAULT_SITES})

    @classmethod
    def load(cls, path: Path) -> "SiteCatalog":
        if not path.exists():
            raise FileNotFoundError(f"Site catalog not found at {path}")
        data = json.loads(path.read_text(encoding="utf-8"))
        sites: dict[str, BlogSite] = {}
        for entry in data.get("sites", []):
            site = BlogSite(
                key=entry["key"],
                name=entry.get("name", entry["key"]),
                url=entry["url"],
                existing_term=entry["existing_term"],
                missing_term=entry["missing_term"],
                injection_term=entry.get("injection_term", SQL_INJECTION_TERM),
                not_found_message=entry.get("not_found_message", NOT_FOUND_MESSAGE),
            )
            sites[site.key] = site
        return cls(sites, source=path)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SiteCatalog":
        if settings.site_catalog_path:
            return cls.load(settings.site_catalog_path)
        return cls.default()
