from __future__ import annotations

import pytest
from pydantic import ValidationError

from blog_search_qa.config.settings import DEFAULT_CHROMIUM_ARGS, Settings


def test_settings_default_wait_and_scroll_policy():
    settings = Settings(_env_file=None)
    assert settings.wait_timeout_s == 90.0
    assert settings.poll_interval_s == 1.0
    assert settings.scroll_delta_y == 1000
    assert settings.scroll_origin == (10, 10)


def test_settings_builds_launch_args(tmp_path):
    settings = Settings(
        _env_file=None,
        headless=False,
        slow_mo_ms=50,
        chromium_channel="chrome",
        report_dir=tmp_path / "reports",
    )

    launch_args = settings.chromium_launch_args()
    assert launch_args["headless"] is False
    assert launch_args["slow_mo"] == 50
    assert launch_args["channel"] == "chrome"
    assert launch_args["args"] == list(DEFAULT_CHROMIUM_ARGS)
    settings.ensure_directories()
    assert settings.report_dir.exists()


def test_settings_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BLOGQA_SITE_KEY", "agibank")
    monkeypatch.setenv("BLOGQA_CHROMIUM_ARGS", "--no-sandbox, --disable-gpu")
    monkeypatch.setenv("BLOGQA_SCROLL_ORIGIN", "20,30")

    settings = Settings(_env_file=None)
    assert settings.site_key == "agibank"
    assert settings.chromium_args == ("--no-sandbox", "--disable-gpu")
    assert settings.scroll_origin == (20, 30)


def test_settings_rejects_non_positive_timings():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, wait_timeout_s=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, scroll_stable_rounds=0)


def test_context_options_include_viewport_and_locale():
    settings = Settings(_env_file=None, viewport_width=800, viewport_height=600, locale="pt-BR")
    assert settings.context_options() == {
        "viewport": {"width": 800, "height": 600},
        "locale": "pt-BR",
    }


def test_browser_install_target_follows_channel():
    assert Settings(_env_file=None).browser_install_target() == "chromium"
    assert Settings(_env_file=None, chromium_channel="chrome").browser_install_target() == "chrome"
