"""
Utilities Module

Common utility classes for the tax wizard.
"""

from utils.rate_limiter import (
    RateLimiter,
    RateLimitConfig,
    RateLimitExceededError,
)

__all__ = [
    "RateLimiter",
    "RateLimitConfig",
    "RateLimitExceededError",
]
