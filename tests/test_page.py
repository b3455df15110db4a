from __future__ import annotations

from typing import Callable, Optional

import pytest
from patchright.async_api import Error as PatchrightError

from blog_search_qa.config.settings import Settings
from blog_search_qa.core.errors import ElementNotFoundError, WaitTimeoutError
from blog_search_qa.core.page import BlogPage


class _DummyLocator:
    """Locator whose visibility checks follow a script of (visible, enabled) states or errors."""

    def __init__(self, states: list[object] | None = None, count: int = 1, text: str = "") -> None:
        self._states = iter(states or [])
        self._count = count
        self._enabled = False
        self.text = text
        self.checks = 0
        self.clicks = 0
        self.on_click: Optional[Callable[[], None]] = None

    @property
    def first(self) -> "_DummyLocator":
        return self

    async def is_visible(self) -> bool:
        self.checks += 1
        state = next(self._states, (False, False))
        if isinstance(state, BaseException):
            raise state
        visible, self._enabled = state
        return visible

    async def is_enabled(self, timeout: float | None = None) -> bool:
        return self._enabled

    async def count(self) -> int:
        return self._count

    async def click(self) -> None:
        self.clicks += 1
        if self.on_click:
            self.on_click()


class _DummyMouse:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int, int]] = []

    async def move(self, x: int, y: int) -> None:
        self.calls.append(("move", x, y))

    async def wheel(self, delta_x: int, delta_y: int) -> None:
        self.calls.append(("wheel", delta_x, delta_y))


class _DummyPage:
    def __init__(self, locators: dict[str, _DummyLocator], url: str = "https://blog.example/?s=banco") -> None:
        self._locators = locators
        self.url = url
        self.mouse = _DummyMouse()

    def locator(self, selector: str) -> _DummyLocator:
        return self._locators.get(selector) or _DummyLocator(count=0)


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"poll_interval_s": 0.001, "wait_timeout_s": 0.05}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.mark.asyncio
async def test_wait_until_clickable_ignores_driver_errors_until_enabled():
    trigger = _DummyLocator(
        [
            PatchrightError("Element is not attached to the DOM"),
            (True, False),
            (True, True),
        ]
    )
    page = BlogPage(_DummyPage({"#search": trigger}), _settings(wait_timeout_s=1.0))  # type: ignore[arg-type]

    assert await page.wait_until_clickable("#search") is trigger
    assert trigger.checks == 3


@pytest.mark.asyncio
async def test_wait_until_clickable_times_out_with_selector_and_state():
    hidden = _DummyLocator([(False, False)] * 1000)
    page = BlogPage(_DummyPage({"#search-field": hidden}), _settings())  # type: ignore[arg-type]

    with pytest.raises(ElementNotFoundError, match="#search-field to be clickable") as excinfo:
        await page.wait_until_clickable("#search-field")
    assert excinfo.value.selector == "#search-field"
    assert excinfo.value.state == "clickable"
    assert excinfo.value.timeout == 0.05


@pytest.mark.asyncio
async def test_wait_until_visible_times_out_when_selector_never_matches():
    page = BlogPage(_DummyPage({}), _settings())  # type: ignore[arg-type]

    with pytest.raises(ElementNotFoundError) as excinfo:
        await page.wait_until_visible(".page-title")
    assert excinfo.value.state == "visible"


@pytest.mark.asyncio
async def test_wait_until_visible_returns_locator():
    title = _DummyLocator([(False, False), (True, True)])
    page = BlogPage(_DummyPage({".page-title": title}), _settings(wait_timeout_s=1.0))  # type: ignore[arg-type]

    assert await page.wait_until_visible(".page-title") is title


@pytest.mark.asyncio
async def test_find_optional_returns_none_without_matches():
    banner = _DummyLocator(count=1, text="Lamentamos")
    page = BlogPage(_DummyPage({".no-results": banner}), _settings())  # type: ignore[arg-type]

    assert await page.find_optional(".missing") is None
    assert await page.find_optional(".no-results") is banner


@pytest.mark.asyncio
async def test_follow_link_waits_for_url_change():
    link = _DummyLocator()
    dummy_page = _DummyPage({"article a": link})
    link.on_click = lambda: setattr(dummy_page, "url", "https://blog.example/artigo/")
    page = BlogPage(dummy_page, _settings(wait_timeout_s=1.0))  # type: ignore[arg-type]

    await page.follow_link(link)  # type: ignore[arg-type]
    assert link.clicks == 1
    assert page.url == "https://blog.example/artigo/"


@pytest.mark.asyncio
async def test_follow_link_times_out_when_page_stays_put():
    link = _DummyLocator()
    page = BlogPage(_DummyPage({"article a": link}), _settings())  # type: ignore[arg-type]

    with pytest.raises(WaitTimeoutError, match="navigation away from"):
        await page.follow_link(link)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_scroll_wheels_from_configured_origin():
    dummy_page = _DummyPage({})
    page = BlogPage(dummy_page, _settings(scroll_origin=(10, 10)))  # type: ignore[arg-type]

    await page.scroll(1000)
    assert dummy_page.mouse.calls == [("move", 10, 10), ("wheel", 0, 1000)]
