"""Bounded fetch retry policies."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class RetryPolicy:
    """How often and how patiently to re-fetch a page that came back empty.

    `max_retries` counts attempts after the first one. With `linear` set,
    the n-th retry waits n * delay, capped at `max_delay_seconds`; otherwise
    every retry waits `delay_seconds`.
    """
    max_retries: int = 3
    delay_seconds: float = 1.0
    linear: bool = False
    max_delay_seconds: float = 30.0

    def delay_for(self, retry: int) -> float:
        if self.linear:
            return min(retry * self.delay_seconds, self.max_delay_seconds)
        return self.delay_seconds


def fetch_with_retry(
    fetch: Callable[[str], Optional[str]],
    url: str,
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[str]:
    """Call `fetch(url)` until it returns a body or the retries run out."""
    body = fetch(url)
    retry = 0
    while not body and retry < policy.max_retries:
        retry += 1
        delay = policy.delay_for(retry)
        logger.info("Retrying %s (%d/%d) in %.1fs", url, retry, policy.max_retries, delay)
        if delay > 0:
            sleep(delay)
        body = fetch(url)

    return body or None
