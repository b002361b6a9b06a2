"""HTTP page fetching, optionally through a rotating proxy."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from common.proxies import ProxyPool

logger = logging.getLogger(__name__)


class Fetcher:
    """Issues one GET per call and returns the body text, or None on failure.

    Failures of any kind (timeouts, connection errors, non-2xx responses,
    empty bodies) come back as None so callers apply one retry policy to all
    of them.
    """

    def __init__(
        self,
        user_agent: str,
        timeout: float = 30.0,
        proxy_pool: Optional[ProxyPool] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.proxy_pool = proxy_pool
        self.session = session or requests.Session()

    def get(self, url: str) -> Optional[str]:
        proxies = None
        if self.proxy_pool is not None:
            proxies = self.proxy_pool.next().as_requests_proxies()

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                proxies=proxies,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.warning("Timeout fetching %s", url)
            return None
        except requests.exceptions.RequestException as e:
            logger.warning("Request failed for %s: %s", url, e)
            return None

        text = response.text
        if not text or not text.strip():
            logger.warning("Empty body from %s", url)
            return None
        return text

    def close(self) -> None:
        self.session.close()
