"""CLI for the listing worker."""

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
from crawl_listings.crawl_listings import build_listings_stage
from crawl_pipeline.worker import run_worker

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FILE = "podcasts_listings_worker.log"


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_worker_args("Expand listing pages into page URLs and podcast URLs.", argv)
    config = load_config_or_exit(args.config)
    setup_logging(LOG_FILE, config.log_level, config.log_dir)

    proxy_pool = load_proxies_or_exit(args.proxies)

    logger.info("Initializing queues")
    listings_queue = open_queue_or_exit(config.queues.listings, config)
    podcasts_queue = open_queue_or_exit(config.queues.podcasts, config)

    fetcher = Fetcher(config.user_agent, config.request_timeout_seconds, proxy_pool)
    stage = build_listings_stage(config, fetcher, listings_queue, podcasts_queue)
    run_worker(stage, config)


if __name__ == "__main__":
    main()
