"""CLI for seeding the category queue."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from bootstrap_catalog.bootstrap_catalog import bootstrap_catalog
from common.cli_helpers import (
    load_config_or_exit,
    load_proxies_or_exit,
    open_queue_or_exit,
    parse_worker_args,
    setup_logging,
)
from common.fetcher import Fetcher

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FILE = "podcasts_bootstrapper.log"


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_worker_args("Queue the category URLs of the podcast catalog.", argv)
    config = load_config_or_exit(args.config)
    setup_logging(LOG_FILE, config.log_level, config.log_dir)

    logger.info("Bootstrapper started")
    proxy_pool = load_proxies_or_exit(args.proxies)
    categories_queue = open_queue_or_exit(config.queues.categories, config)

    fetcher = Fetcher(config.user_agent, config.request_timeout_seconds, proxy_pool)
    try:
        exit_code = bootstrap_catalog(config, fetcher, categories_queue)
    finally:
        fetcher.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
