"""Pluggable pauses between batches of store-bound work."""

import logging
import random
import time
from typing import Tuple

logger = logging.getLogger(__name__)


class NoThrottle:
    """Never waits."""

    def wait(self) -> None:
        return None


class FixedDelayThrottle:
    """Waits a fixed delay, plus optional random jitter, between batches.

    Attributes:
        delay: Delay between batches in seconds
        jitter_range: Random jitter range added to the delay
    """

    def __init__(self, delay: float = 2.0, jitter_range: Tuple[float, float] = (0.0, 0.0)):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.delay = delay
        self.jitter_range = jitter_range

    def wait(self) -> None:
        """Sleep for the delay plus random jitter."""
        pause = self.delay + random.uniform(*self.jitter_range)
        if pause <= 0:
            return
        logger.info(f"Waiting {pause:.1f}s before next batch...")
        time.sleep(pause)
