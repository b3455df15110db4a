"""Runtime configuration for the search checks.

Relies on pydantic-settings so that environment variables (prefixed with ``BLOGQA_``)
can override defaults. See `.env.example` for common values.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Iterable, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CHROMIUM_ARGS: tuple[str, ...] = (
    "--disable-dev-shm-usage",
    "--start-maximized",
    "--disable-infobars",
    "--disable-extensions",
    "--disable-gpu",
    "--no-sandbox",
    "--disable-software-rasterizer",
)


class Settings(BaseSettings):
    """Captures runtime configuration for the search checks."""

    site_key: str = Field(default="blogdoagi", description="Catalog key of the blog under test")
    site_catalog_path: Optional[Path] = Field(
        default=None, description="JSON site catalog; the built-in catalog is used when unset"
    )

    headless: bool = True
    slow_mo_ms: int = Field(default=0, description="Slow-mo delay in milliseconds")
    viewport_width: int = 1920
    viewport_height: int = 1080
    locale: Optional[str] = Field(default="pt-BR")
    chromium_channel: Optional[str] = Field(
        default=None,
        description="Browser channel passed to Patchright (e.g. 'chrome'); use None for bundled Chromium",
    )
    chromium_args: Annotated[Tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_CHROMIUM_ARGS,
        description="Extra Chromium args passed during launch",
    )
    navigation_timeout_ms: int = Field(default=90000)

    wait_timeout_s: float = Field(default=90.0, description="Upper bound for every element wait")
    poll_interval_s: float = Field(default=1.0, description="Seconds between wait polls")

    scroll_delta_y: int = Field(default=1000, description="Pixels scrolled per wheel step")
    scroll_origin: Annotated[Tuple[int, int], NoDecode] = Field(
        default=(10, 10), description="Viewport point the wheel events originate from"
    )
    scroll_stable_rounds: int = Field(
        default=3, description="Stop scrolling after this many rounds without new results"
    )
    scroll_max_rounds: int = Field(default=250, description="Hard cap on scroll rounds")
    scroll_settle_s: float = Field(
        default=0.5, description="Pause after each scroll before counting results"
    )

    report_dir: Path = Field(default=Path("data/reports"))
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))

    model_config = SettingsConfigDict(
        env_prefix="BLOGQA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    @field_validator("report_dir", "log_dir", mode="before")
    def _expand_dir(cls, value: str | Path) -> Path:  # noqa: D401
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    @field_validator("site_catalog_path", mode="before")
    def _expand_catalog_path(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("chromium_args", mode="before")
    def _parse_chromium_args(cls, value: object) -> Tuple[str, ...]:
        if value is None or value == "":
            return ()
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value if str(item))
        if isinstance(value, str):
            parts: Iterable[str] = (part.strip() for part in value.split(","))
            return tuple(part for part in parts if part)
        raise TypeError("chromium_args must be provided as a comma-separated string or list")

    @field_validator("scroll_origin", mode="before")
    def _parse_scroll_origin(cls, value: object) -> Tuple[int, int]:
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(",") if part.strip()]
            if len(parts) != 2:
                raise ValueError("scroll_origin must be two comma-separated integers")
            return int(parts[0]), int(parts[1])
        return value  # type: ignore[return-value]

    @field_validator("wait_timeout_s", "poll_interval_s")
    def _validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("wait timings must be positive")
        return value

    @field_validator("scroll_stable_rounds", "scroll_max_rounds")
    def _validate_rounds(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("scroll round limits must be positive")
        return value

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.report_dir.mkdir(parents=True, exist_ok=True)

    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def chromium_launch_args(self) -> dict[str, object]:
        launch_args: dict[str, object] = {
            "headless": self.headless,
        }
        if self.slow_mo_ms:
            launch_args["slow_mo"] = self.slow_mo_ms
        if self.chromium_channel:
            launch_args["channel"] = self.chromium_channel
        if self.chromium_args:
            launch_args["args"] = list(self.chromium_args)
        return launch_args

    def browser_install_target(self) -> str:
        """Name ``patchright install`` needs for the browser this config launches."""
        return self.chromium_channel or "chromium"

    def context_options(self) -> dict[str, object]:
        options: dict[str, object] = {
            "viewport": self.viewport(),
        }
        if self.locale:
            options["locale"] = self.locale
        return options
