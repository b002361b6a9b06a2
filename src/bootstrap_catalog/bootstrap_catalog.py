"""Seed the pipeline with the category URLs of the catalog root page."""

import logging
import time
from typing import Callable

from common.config import CrawlerConfig
from common.errors import EXIT_SEED_UNPARSABLE, EXIT_SEED_UNREACHABLE, ExtractionError
from common.fetcher import Fetcher
from common.queue_client import QueueClient
from crawl_pipeline.retry import RetryPolicy, fetch_with_retry
from parse_catalog.parse_catalog import parse_category_urls

logger = logging.getLogger(__name__)


def bootstrap_catalog(
    config: CrawlerConfig,
    fetcher: Fetcher,
    categories_queue: QueueClient,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Fetch the root page and queue every category URL on it.

    Returns:
        Exit code (0 on success, non-zero if the root page could not be
        fetched or parsed)
    """
    policy = RetryPolicy(
        max_retries=config.seed_max_retries,
        delay_seconds=config.seed_retry_delay_seconds,
    )

    logger.info("Fetching root page %s", config.seed_url)
    html = fetch_with_retry(fetcher.get, config.seed_url, policy, sleep=sleep)
    if html is None:
        logger.error("Error obtaining root page after %d retries - aborting", config.seed_max_retries)
        return EXIT_SEED_UNREACHABLE

    try:
        category_urls = parse_category_urls(html)
    except ExtractionError as e:
        logger.error("Could not parse root page: %s", e)
        return EXIT_SEED_UNPARSABLE

    if not category_urls:
        logger.warning("No category URLs found on root page")
        return 0

    logger.info("Queueing %d categories", len(category_urls))
    report = categories_queue.enqueue_batch(category_urls)
    if not report.ok:
        logger.error("%d category URLs could not be queued", len(report.failed))

    logger.info("End of bootstrapping phase: %d categories queued", report.sent)
    return 0
