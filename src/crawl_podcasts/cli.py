"""CLI for the podcast worker."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from common.cli_helpers import (
    load_config_or_exit,
    load_proxies_or_exit,
    open_queue_or_exit,
    parse_worker_args,
    setup_logging,
)
from common.errors import EXIT_CONFIG_ERROR, ConfigError
from common.fetcher import Fetcher
from crawl_pipeline.worker import run_worker
from crawl_podcasts.crawl_podcasts import build_podcasts_stage
from podcast_store.connection import ensure_schema, get_engine, get_session_factory
from podcast_store.store import PodcastStore

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FILE = "podcasts_worker.log"


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_worker_args("Parse queued podcast pages into the database.", argv)
    config = load_config_or_exit(args.config)
    setup_logging(LOG_FILE, config.log_level, config.log_dir)

    proxy_pool = load_proxies_or_exit(args.proxies)

    logger.info("Initializing database")
    try:
        engine = get_engine()
    except ConfigError as e:
        logger.critical("Invalid configuration: %s", e)
        sys.exit(EXIT_CONFIG_ERROR)
    ensure_schema(engine)
    store = PodcastStore(get_session_factory(engine))

    logger.info("Initializing queues")
    podcasts_queue = open_queue_or_exit(config.queues.podcasts, config)

    fetcher = Fetcher(config.user_agent, config.request_timeout_seconds, proxy_pool)
    stage = build_podcasts_stage(config, fetcher, podcasts_queue, store)
    run_worker(stage, config)


if __name__ == "__main__":
    main()
