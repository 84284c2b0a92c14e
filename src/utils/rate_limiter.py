"""
Submission Rate Limiting.

A completed wizard may be sent to the form service only a few times per
hour per session. Timestamps of successful submissions are kept per
session and expire once they fall out of the sliding window.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Optional

logger = logging.getLogger(__name__)


class RateLimitExceededError(Exception):
    """Raised when a session has no submissions left in the window."""

    def __init__(self, identifier: str, retry_after: float):
        self.identifier = identifier
        self.retry_after = retry_after
        super().__init__(
            f"Submission limit reached for {identifier}; retry in {retry_after:.0f}s"
        )


@dataclass
class RateLimitConfig:
    """Submission window settings."""
    max_requests: int = 3
    window_seconds: int = 3600


@dataclass
class SubmissionWindow:
    """Submission timestamps for one session, oldest first."""
    sent_at: Deque[float] = field(default_factory=deque)

    def expire(self, cutoff: float) -> None:
        while self.sent_at and self.sent_at[0] <= cutoff:
            self.sent_at.popleft()


class RateLimiter:
    """
    Sliding-window limiter keyed by session.

    Only successful submissions are recorded, so a failed delivery does
    not use up the allowance:

        limiter.enforce(session_id)
        result = submitter.submit(payload)
        if result.success:
            limiter.record_request(session_id)
    """

    def __init__(
        self,
        config: Optional[RateLimitConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._windows: Dict[str, SubmissionWindow] = {}

        logger.debug(
            f"Submission limiter: {self.config.max_requests} per "
            f"{self.config.window_seconds}s"
        )

    def _window(self, identifier: str) -> SubmissionWindow:
        window = self._windows.setdefault(identifier, SubmissionWindow())
        window.expire(self._clock() - self.config.window_seconds)
        return window

    def is_allowed(self, identifier: str = "global") -> bool:
        """Whether identifier may submit now."""
        used = len(self._window(identifier).sent_at)
        if used < self.config.max_requests:
            return True
        logger.warning(f"Submission limit reached for {identifier}: {used} sent")
        return False

    def enforce(self, identifier: str = "global") -> None:
        """
        Raise if identifier has used up its window.

        Raises:
            RateLimitExceededError: With the seconds until a slot frees up.
        """
        if not self.is_allowed(identifier):
            raise RateLimitExceededError(identifier, self.get_reset_time(identifier))

    def record_request(self, identifier: str = "global") -> None:
        self._window(identifier).sent_at.append(self._clock())

    def get_remaining(self, identifier: str = "global") -> int:
        used = len(self._window(identifier).sent_at)
        return max(0, self.config.max_requests - used)

    def get_reset_time(self, identifier: str = "global") -> float:
        """Seconds until the oldest submission leaves the window; 0 if none."""
        window = self._window(identifier)
        if not window.sent_at:
            return 0
        frees_at = window.sent_at[0] + self.config.window_seconds
        return max(0.0, frees_at - self._clock())

    def reset(self, identifier: str = "global") -> None:
        self._windows.pop(identifier, None)
