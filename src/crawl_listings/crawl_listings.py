"""Fan out paginated listings and collect podcast URLs from listing pages."""

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
from parse_catalog.parse_catalog import extract_listing_page

logger = logging.getLogger(__name__)


def crawl_listing(
    item: WorkItem,
    fetcher: Fetcher,
    listings_queue: QueueClient,
    podcasts_queue: QueueClient,
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> ItemResult:
    """Process one listing URL.

    Root listings feed their numbered pages back into the listings queue;
    numbered pages send their podcast URLs on to the podcasts queue.
    """
    html = fetch_with_retry(fetcher.get, item.body, policy, sleep=sleep)
    if html is None:
        return ItemResult.failed(Outcome.UNREACHABLE, "no response after retries")

    try:
        extraction = extract_listing_page(item.body, html)
    except ExtractionError as e:
        return ItemResult.failed(Outcome.EXTRACTION_FAILED, e)

    if extraction.is_root:
        report = listings_queue.enqueue_batch(extraction.listing_urls)
    else:
        report = podcasts_queue.enqueue_batch(extraction.podcast_urls)

    return ItemResult.processed(produced=report.sent)


def build_listings_stage(
    config: CrawlerConfig,
    fetcher: Fetcher,
    listings_queue: QueueClient,
    podcasts_queue: QueueClient,
    sleep: Callable[[float], None] = time.sleep,
) -> Stage:
    policy = RetryPolicy(max_retries=config.max_retries, delay_seconds=config.hiccup_seconds)
    handler = functools.partial(
        crawl_listing,
        fetcher=fetcher,
        listings_queue=listings_queue,
        podcasts_queue=podcasts_queue,
        policy=policy,
        sleep=sleep,
    )
    return Stage(
        name="listings",
        queue=listings_queue,
        handle=handler,
        drop_unreachable=config.drop_unreachable,
    )
