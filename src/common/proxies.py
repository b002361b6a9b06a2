"""Credentialed HTTP proxy pool with round-robin selection."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from common.errors import ProxyFileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyEndpoint:
    """A single proxy, optionally with credentials."""
    host: str
    port: str
    user: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_line(cls, line: str) -> ProxyEndpoint:
        """Parse `host:port` or `host:port:user:password`."""
        parts = line.strip().split(":")
        if len(parts) == 2:
            return cls(host=parts[0], port=parts[1])
        if len(parts) == 4:
            return cls(host=parts[0], port=parts[1], user=parts[2], password=parts[3])
        raise ProxyFileError(f"Malformed proxy line (expected 2 or 4 fields, got {len(parts)}): {line!r}")

    def as_url(self) -> str:
        if self.user is not None:
            return f"http://{self.user}:{self.password}@{self.host}:{self.port}"
        return f"http://{self.host}:{self.port}"

    def as_requests_proxies(self) -> dict[str, str]:
        url = self.as_url()
        return {"http": url, "https": url}


class ProxyPool:
    """Round-robin rotation over a list of proxies loaded once at startup.

    There is no health checking: a bad proxy just shows up as a failed fetch
    and the caller's retry policy moves on to the next one. The cursor is
    guarded by a lock so one pool can be shared across threads.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._proxies: list[ProxyEndpoint] = []
        self._cursor = 0
        self._lock = threading.Lock()
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._proxies)

    def load(self, lines: Iterable[str]) -> None:
        """Replace the pool contents with the proxies in `lines`.

        Each proxy is inserted at a random position so the rotation order does
        not follow the file order. Any malformed line aborts the whole load.
        """
        proxies: list[ProxyEndpoint] = []
        for line in lines:
            proxy = ProxyEndpoint.from_line(line)
            proxies.insert(self._rng.randrange(len(proxies) + 1), proxy)

        with self._lock:
            self._proxies = proxies
            self._cursor = 0

        logger.info("Loaded %d proxies", len(proxies))

    def next(self) -> ProxyEndpoint:
        """Return the next proxy in rotation."""
        with self._lock:
            if not self._proxies:
                raise ProxyFileError("Proxy pool is empty")
            proxy = self._proxies[self._cursor % len(self._proxies)]
            self._cursor += 1
        return proxy


def load_proxy_file(path: str | Path, rng: Optional[random.Random] = None) -> ProxyPool:
    """Build a ProxyPool from a UTF-8, one-proxy-per-line file.

    Raises:
        ProxyFileError: If the file is missing or any line is malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise ProxyFileError(f"Couldn't find proxies on path: {path}")

    lines = [line for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
    pool = ProxyPool(rng=rng)
    pool.load(lines)
    if not len(pool):
        raise ProxyFileError(f"No proxies found in {path}")
    return pool
