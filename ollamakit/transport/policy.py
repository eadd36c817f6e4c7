from __future__ import annotations

"""
Retry policy for transport.

This module centralizes retry classification and delay timing so the transport
stays thin. Only failures below the HTTP layer are retryable; an HTTP error
status is an answer from the server and is never retried.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import httpx


Classifier = Callable[[BaseException], bool]


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    retry_delay_s: float = 1.0
    classify_exception: Optional[Classifier] = None

    def should_retry(self, exc: BaseException, attempt_index: int) -> bool:
        """
        Return True when we should retry the given exception.
        attempt_index is zero-based (0 == the initial attempt just failed).
        """
        if attempt_index >= max(0, int(self.max_retries)):
            return False
        cls = self.classify_exception or is_transport_failure
        return bool(cls(exc))

    def backoff_seconds(self, attempt_index: int) -> float:
        """Fixed delay between attempts; no growth, no jitter."""
        return max(0.0, float(self.retry_delay_s))


def is_transport_failure(exc: BaseException) -> bool:
    """Connection, DNS, timeout and protocol failures raised by httpx."""
    return isinstance(exc, httpx.TransportError)
