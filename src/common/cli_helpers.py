"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Sequence

from common.config import CrawlerConfig, load_config
from common.errors import (
    EXIT_CONFIG_ERROR,
    EXIT_PROXY_FILE_INVALID,
    EXIT_PROXY_FILE_MISSING,
    EXIT_QUEUE_UNAVAILABLE,
    ConfigError,
    ProxyFileError,
    QueueError,
)
from common.proxies import ProxyPool, load_proxy_file
from common.queue_client import QueueClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 10


def setup_logging(log_file: Optional[str] = None, level: str = "INFO", log_dir: str = "log") -> None:
    """Configure console logging, plus a rotating file when `log_file` is given."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path / log_file,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def parse_worker_args(description: str, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the arguments shared by every stage.

    The optional positional argument is a proxy list file; leaving it out
    disables proxies.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "proxies",
        nargs="?",
        default=None,
        help="Path to a proxy list file (host:port[:user:password] per line).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under common/configs (default: $CRAWLER_CONFIG or prod).",
    )
    return parser.parse_args(argv)


def load_config_or_exit(config_name: Optional[str]) -> CrawlerConfig:
    try:
        return load_config(config_name)
    except ConfigError as e:
        logger.critical("Invalid configuration: %s", e)
        sys.exit(EXIT_CONFIG_ERROR)


def load_proxies_or_exit(path: Optional[str]) -> Optional[ProxyPool]:
    """Load the proxy pool, or return None when no path was given."""
    if path is None:
        logger.info("No proxy file given, fetching directly")
        return None

    if not Path(path).is_file():
        logger.critical("Couldn't find proxies on path: %s", path)
        sys.exit(EXIT_PROXY_FILE_MISSING)

    try:
        return load_proxy_file(path)
    except ProxyFileError as e:
        logger.critical("Invalid proxy file %s: %s", path, e)
        sys.exit(EXIT_PROXY_FILE_INVALID)


def open_queue_or_exit(queue_name: str, config: CrawlerConfig, sqs=None) -> QueueClient:
    try:
        return QueueClient(
            queue_name,
            max_messages=config.max_messages_per_dequeue,
            sqs=sqs,
            region=config.aws_region,
        )
    except QueueError as e:
        logger.critical("Queue unavailable: %s", e)
        sys.exit(EXIT_QUEUE_UNAVAILABLE)
