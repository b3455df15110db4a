"""Exceptions raised while driving the blog under test."""
from __future__ import annotations


class WaitTimeoutError(RuntimeError):
    """Raised when a polled condition never holds before its deadline."""

    def __init__(self, description: str, timeout: float) -> None:
        super().__init__(f"Timed out after {timeout:.1f}s waiting for {description}")
        self.description = description
        self.timeout = timeout


class ElementNotFoundError(WaitTimeoutError):
    """Raised when a selector never reaches the requested state."""

    def __init__(self, selector: str, state: str, timeout: float) -> None:
        super().__init__(f"{selector} to be {state}", timeout)
        self.selector = selector
        self.state = state
