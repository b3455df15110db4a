"""Centralised selectors for the blog search flow.

The blogs run the Astra WordPress theme; the header path below breaks whenever
the theme's header builder layout changes.
"""
from __future__ import annotations


class BlogSearchSelectors:
    search_trigger = 'xpath=//*[@id="ast-desktop-header"]/div[1]/div/div/div/div[3]/div[2]/div/div/a'
    search_field = 'xpath=//*[@id="search-field"]'
    no_results_banner = ".no-results"
    page_title = ".page-title"
    result_items = "article"
    result_link = "a"
    article_body = ".entry-content"
