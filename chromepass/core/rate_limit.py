"""Fixed-window, per-client rate limiting for sensitive routes.

State lives in process memory, so limits are per worker.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request

from chromepass.core.exceptions import RateLimitError
from chromepass.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    """Count hits per key inside fixed windows of ``window_seconds``.

    Expired windows are swept at most once per window length, so clients
    that stop calling do not stay in memory.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (window end, hits)
        self._windows: dict[str, tuple[float, int]] = {}
        self._next_sweep = 0.0

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (ends, _) in self._windows.items() if ends <= now]
        for key in expired:
            del self._windows[key]

    def hit(self, key: str, limit: int, window_seconds: int) -> int | None:
        """Record a hit for ``key``.

        Returns:
            None if the hit is allowed, otherwise the number of seconds
            until the current window resets.
        """
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
                self._next_sweep = now + window_seconds
            ends, count = self._windows.get(key, (now + window_seconds, 0))
            if ends <= now:
                ends, count = now + window_seconds, 0
            count += 1
            self._windows[key] = (ends, count)

        if count > limit:
            return max(1, int(ends - now))
        return None

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._next_sweep = 0.0


auth_rate_limiter = FixedWindowRateLimiter()


def limit_auth_requests(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Router dependency limiting authentication attempts per client IP."""
    if not settings.rate_limit_enabled:
        return

    client_ip = request.client.host if request.client else "unknown"
    retry_after = auth_rate_limiter.hit(
        f"auth:{client_ip}",
        limit=settings.auth_rate_limit,
        window_seconds=settings.rate_limit_window_seconds,
    )
    if retry_after is not None:
        logger.warning(
            "Auth rate limit exceeded for %s",
            client_ip,
            extra={"client_ip": client_ip, "path": request.url.path},
        )
        raise RateLimitError(
            "Too many authentication attempts, please try again later",
            retry_after=retry_after,
        )
