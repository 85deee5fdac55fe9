import os
import time
from collections import defaultdict, deque
from threading import Lock
from typing import Callable

from fastapi import HTTPException, Request, status


class InMemoryRateLimiter:
    def __init__(self, max_requests: int, window_seconds: int, clock: Callable[[], float] = time.time) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._store: dict[str, deque[float]] = defaultdict(deque)
        self._last_sweep = clock()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def _sweep(self, now: float) -> None:
        stale = [key for key, bucket in self._store.items() if not bucket or (now - bucket[-1]) > self.window_seconds]
        for key in stale:
            del self._store[key]
        self._last_sweep = now

    def allow(self, key: str) -> tuple[bool, int]:
        now = self.clock()
        with self._lock:
            if (now - self._last_sweep) > self.window_seconds:
                self._sweep(now)

            bucket = self._store[key]
            while bucket and (now - bucket[0]) > self.window_seconds:
                bucket.popleft()

            if len(bucket) >= self.max_requests:
                retry_after = max(1, int(self.window_seconds - (now - bucket[0])))
                return False, retry_after

            bucket.append(now)
            return True, 0


rate_limiter = InMemoryRateLimiter(
    max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "120")),
    window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
)


def client_key(request: Request) -> str:
    return request.client.host if request.client else "anonymous"


def enforce_rate_limit(request: Request) -> None:
    allowed, retry_after = rate_limiter.allow(client_key(request))
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded.",
            headers={"Retry-After": str(retry_after)},
        )
