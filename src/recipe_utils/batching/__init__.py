"""Batch throttling and retry utilities for store-bound work."""

from .retry import retry_on_store_error
from .throttle import FixedDelayThrottle, NoThrottle

__all__ = ["FixedDelayThrottle", "NoThrottle", "retry_on_store_error"]
