"""Fixed-interval polling used by every element wait."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from blog_search_qa.core.errors import WaitTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def poll_until(
    condition: Callable[[], Awaitable[Optional[T]]],
    *,
    timeout: float,
    interval: float,
    ignoring: Tuple[Type[BaseException], ...] = (),
    description: str = "condition",
) -> T:
    """Await ``condition`` every ``interval`` seconds until it returns a truthy value.

    Exceptions listed in ``ignoring`` count as "not yet" and are retried until the
    deadline; anything else propagates immediately. The condition is always
    evaluated at least once, and once more at the deadline.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    last_error: Optional[BaseException] = None
    while True:
        try:
            result = await condition()
        except ignoring as exc:
            last_error = exc
            result = None
        if result:
            return result
        remaining = deadline - loop.time()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval, remaining))

    if last_error is not None:
        logger.debug("Last ignored error while waiting for %s: %s", description, last_error)
        raise WaitTimeoutError(description, timeout) from last_error
    raise WaitTimeoutError(description, timeout)
