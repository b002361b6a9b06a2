"""CLI for the category worker."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from dotenv import load_dotenv

from common.cli_helpers import (
    load_config_or_exit,
    load_proxies_or_exit,
    open_queue_or_exit,
    parse_worker_args,
    setup_logging,
)
from common.fetcher import Fetcher
from crawl_categories.crawl_categories import build_categories_stage
from crawl_pipeline.worker import run_worker

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FILE = "podcasts_categories_worker.log"


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_worker_args("Turn queued category pages into listing URLs.", argv)
    config = load_config_or_exit(args.config)
    setup_logging(LOG_FILE, config.log_level, config.log_dir)

    proxy_pool = load_proxies_or_exit(args.proxies)

    logger.info("Initializing queues")
    categories_queue = open_queue_or_exit(config.queues.categories, config)
    listings_queue = open_queue_or_exit(config.queues.listings, config)

    fetcher = Fetcher(config.user_agent, config.request_timeout_seconds, proxy_pool)
    stage = build_categories_stage(config, fetcher, categories_queue, listings_queue)
    run_worker(stage, config)


if __name__ == "__main__":
    main()
