from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Attempts:
    failures: int = 0
    locked_until: float = 0.0


class PinAttemptLimiter:
    """Counts failed PIN validations per client and locks the client out for a while.

    ``max_attempts=0`` disables the limiter entirely.
    """

    def __init__(self, *, max_attempts: int = 0, lockout_seconds: int = 300, clock: Callable[[], float] = time.monotonic):
        self._max_attempts = int(max_attempts)
        self._lockout_seconds = int(lockout_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._by_client: dict[str, _Attempts] = {}

    @property
    def enabled(self) -> bool:
        return self._max_attempts > 0

    def is_locked(self, client_key: str) -> bool:
        if not self.enabled:
            return False
        with self._lock:
            state = self._by_client.get(client_key)
            return bool(state and state.locked_until > self._clock())

    def record_failure(self, client_key: str) -> int:
        """Return the failure count after this attempt (0 when disabled)."""
        if not self.enabled:
            return 0
        with self._lock:
            state = self._by_client.setdefault(client_key, _Attempts())
            if state.locked_until and state.locked_until <= self._clock():
                # lockout expired, start counting again
                state.failures = 0
                state.locked_until = 0.0
            state.failures += 1
            if state.failures >= self._max_attempts:
                state.locked_until = self._clock() + self._lockout_seconds
            return state.failures

    def record_success(self, client_key: str) -> None:
        with self._lock:
            self._by_client.pop(client_key, None)

    def clear(self) -> None:
        with self._lock:
            self._by_client.clear()
