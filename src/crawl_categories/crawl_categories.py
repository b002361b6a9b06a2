"""Turn category pages into listing URLs."""

import functools
import logging
import time
from typing import Callable

from common.config import CrawlerConfig
from common.errors import ExtractionError
from common.fetcher import Fetcher
from common.queue_client import QueueClient, WorkItem
from crawl_pipeline.models import ItemResult, Outcome
from crawl_pipeline.retry import RetryPolicy, fetch_with_retry
from crawl_pipeline.worker import Stage
from parse_catalog.parse_catalog import parse_character_urls

logger = logging.getLogger(__name__)


def crawl_category(
    item: WorkItem,
    fetcher: Fetcher,
    listings_queue: QueueClient,
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> ItemResult:
    html = fetch_with_retry(fetcher.get, item.body, policy, sleep=sleep)
    if html is None:
        return ItemResult.failed(Outcome.UNREACHABLE, "no response after retries")

    try:
        listing_urls = parse_character_urls(html)
    except ExtractionError as e:
        return ItemResult.failed(Outcome.EXTRACTION_FAILED, e)

    report = listings_queue.enqueue_batch(listing_urls)
    logger.info("Queued %d listing URLs from %s", report.sent, item.body)
    return ItemResult.processed(produced=report.sent)


def build_categories_stage(
    config: CrawlerConfig,
    fetcher: Fetcher,
    categories_queue: QueueClient,
    listings_queue: QueueClient,
    sleep: Callable[[float], None] = time.sleep,
) -> Stage:
    policy = RetryPolicy(max_retries=config.max_retries, delay_seconds=config.retry_delay_seconds)
    handler = functools.partial(
        crawl_category,
        fetcher=fetcher,
        listings_queue=listings_queue,
        policy=policy,
        sleep=sleep,
    )
    return Stage(
        name="categories",
        queue=categories_queue,
        handle=handler,
        drop_unreachable=config.drop_unreachable,
    )
