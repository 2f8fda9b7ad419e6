# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from cohort_tools.domain.users.repositories import RateLimiter
from cohort_tools.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RateLimitPolicy:
    window_seconds: float
    max_requests: int
    message: str = "Too many requests, please try again later."

    def __post_init__(self) -> None:
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")


@dataclass(slots=True)
class Window:
    started_at: float
    count: int


class FixedWindowRateLimiter(RateLimiter):
    """Per-key fixed-window request counter.

    A window opens on the first request for a key and lasts
    ``policy.window_seconds``; a request at or after the window end opens a
    new one. Inside a window the count saturates at ``max_requests + 1`` so
    repeated denials leave the state unchanged.
    """

    def __init__(
        self,
        policy: RateLimitPolicy,
        *,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.policy = policy
        self.name = name
        self._clock = clock
        self._windows: dict[str, Window] = {}
        self._lock = Lock()
        self._last_prune = clock()

    def check_and_consume(self, client_key: str) -> bool:
        with self._lock:
            now = self._clock()
            window = self._windows.get(client_key)
            if window is None or now >= window.started_at + self.policy.window_seconds:
                self._windows[client_key] = Window(started_at=now, count=1)
                if now - self._last_prune >= self.policy.window_seconds:
                    self._prune(now)
                return True

            if window.count <= self.policy.max_requests:
                window.count += 1
            allowed = window.count <= self.policy.max_requests

        if not allowed:
            logger.warning(
                f"rate_limit[{self.name}]: denied key={client_key} "
                f"limit={self.policy.max_requests}/{self.policy.window_seconds:g}s"
            )
        return allowed

    def retry_after(self, client_key: str) -> float:
        with self._lock:
            window = self._windows.get(client_key)
            if window is None:
                return 0.0
            remaining = window.started_at + self.policy.window_seconds - self._clock()
            return max(0.0, remaining)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        # Caller holds the lock; runs at most once per window length.
        self._last_prune = now
        expired = [
            key
            for key, window in self._windows.items()
            if now >= window.started_at + self.policy.window_seconds
        ]
        for key in expired:
            del self._windows[key]


class NoopRateLimiter(RateLimiter):
    """Limiter used when rate limiting is disabled by configuration."""

    def check_and_consume(self, client_key: str) -> bool:
        return True

    def retry_after(self, client_key: str) -> float:
        return 0.0


__all__ = ["FixedWindowRateLimiter", "NoopRateLimiter", "RateLimitPolicy", "Window"]
