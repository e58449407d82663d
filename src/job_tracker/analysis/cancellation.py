"""
Cooperative cancellation for the analysis batch.

The analyzer checks the token between emails only: an in-flight LLM call
is never interrupted by cancel(), although its timeout is capped by the
remaining deadline.
"""

import time
from typing import Callable, Optional


class CancellationToken:
    """
    Cancel flag plus an optional deadline on the monotonic clock.

    Usage:
        token = CancellationToken.with_timeout(300)
        ...
        if token.is_cancelled:
            ...
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            deadline: Absolute time on ``clock`` after which the batch stops
            clock: Time source (injectable for tests)
        """
        self.deadline = deadline
        self._clock = clock
        self._cancelled = False

    @classmethod
    def with_timeout(
        cls, seconds: float, clock: Callable[[], float] = time.monotonic
    ) -> "CancellationToken":
        return cls(deadline=clock() + seconds, clock=clock)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def deadline_exceeded(self) -> bool:
        return self.deadline is not None and self._clock() >= self.deadline

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled or self.deadline_exceeded

    @property
    def reason(self) -> Optional[str]:
        if self._cancelled:
            return "cancelled"
        if self.deadline_exceeded:
            return "deadline_exceeded"
        return None

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self._clock())

    def cap_timeout(self, timeout: Optional[float]) -> Optional[float]:
        """Shorten a per-call timeout so it never outlives the deadline."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        if timeout is None:
            return remaining
        return min(timeout, remaining)
