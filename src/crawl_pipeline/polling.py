"""Dequeue-or-wait loop shared by every worker."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, Optional

from common.queue_client import QueueClient, WorkItem

logger = logging.getLogger(__name__)

MAX_IDLE_ATTEMPTS = 12
IDLE_RESET_WAIT_MS = 2000


class IdleBackoff:
    """Truncated exponential wait used while a queue stays empty.

    Attempts 1..12 wait 2**attempt seconds. The attempt after that waits
    2 seconds and restarts the counter at 1, so the ramp cycles instead of
    growing without bound. `reset()` is called whenever messages arrive.
    """

    def __init__(self, max_wait_ms: Optional[int] = None) -> None:
        self.max_wait_ms = max_wait_ms
        self.attempt = 1

    def reset(self) -> None:
        self.attempt = 1

    def next_wait_ms(self) -> int:
        if self.attempt <= MAX_IDLE_ATTEMPTS:
            wait_ms = 2 ** self.attempt * 1000
        else:
            wait_ms = IDLE_RESET_WAIT_MS
            self.attempt = 0

        self.attempt += 1

        if self.max_wait_ms is not None:
            wait_ms = min(wait_ms, self.max_wait_ms)
        return wait_ms


def poll_batches(
    queue: QueueClient,
    backoff: Optional[IdleBackoff] = None,
    hiccup_seconds: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[list[WorkItem]]:
    """Yield non-empty batches from `queue` forever.

    A failed receive, or one that raises, sleeps `hiccup_seconds` and tries
    again; an empty receive sleeps for the next backoff wait. Each `next()`
    therefore blocks until there is work.
    """
    backoff = backoff or IdleBackoff()

    while True:
        try:
            result = queue.dequeue_batch()
        except Exception:
            logger.exception("Unexpected error receiving from %s", queue.queue_name)
            sleep(hiccup_seconds)
            continue

        if result.failed:
            sleep(hiccup_seconds)
            continue

        if not result.items:
            wait_ms = backoff.next_wait_ms()
            logger.info("No messages on %s, waiting %d ms", queue.queue_name, wait_ms)
            sleep(wait_ms / 1000)
            continue

        backoff.reset()
        yield result.items
