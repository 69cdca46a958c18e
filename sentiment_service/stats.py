"""Process-wide request counters shared by the API handlers."""

from __future__ import annotations

import threading


class ServiceStats:
    """Thread-safe success/failure/hook-call counters.

    One instance is created per application and handed to handlers through a
    FastAPI dependency.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._successes = 0
        self._failures = 0
        self._hook_calls = 0

    def record_success(self) -> None:
        with self._lock:
            self._successes += 1

    def record_failure(self) -> None:
        with self._lock:
            self._failures += 1

    def record_hook_call(self) -> None:
        with self._lock:
            self._hook_calls += 1

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return {
                "successes": self._successes,
                "failures": self._failures,
                "hookCalls": self._hook_calls,
            }
