"""Parse podcast detail pages and store them."""

import functools
import logging
import time
from datetime import datetime, timezone
from typing import Callable

from common.config import CrawlerConfig
from common.errors import ExtractionError, SinkError
from common.fetcher import Fetcher
from common.queue_client import QueueClient, WorkItem
from crawl_pipeline.models import ItemResult, Outcome
from crawl_pipeline.retry import RetryPolicy, fetch_with_retry
from crawl_pipeline.worker import Stage
from parse_catalog.parse_podcast import parse_podcast_page
from podcast_store.store import PodcastStore

logger = logging.getLogger(__name__)

PODCAST_URL_PREFIXES = (
    "https://itunes.apple.com/us/podcast",
    "https://itunes.apple.com/podcast/",
)


def is_podcast_url(url: str) -> bool:
    return url.startswith(PODCAST_URL_PREFIXES)


def crawl_podcast(
    item: WorkItem,
    fetcher: Fetcher,
    store: PodcastStore,
    policy: RetryPolicy,
    politeness_delay_seconds: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> ItemResult:
    """Fetch, parse and store one podcast page.

    Only a successful store (or an URL that will never work) lets the item
    be deleted; parse and store failures are left for redelivery.
    """
    if not is_podcast_url(item.body):
        return ItemResult.failed(Outcome.REJECTED, "not a podcast URL")

    html = fetch_with_retry(fetcher.get, item.body, policy, sleep=sleep)
    if html is None:
        return ItemResult.failed(Outcome.UNREACHABLE, "no response after retries")

    try:
        record = parse_podcast_page(html, url=item.body)
    except ExtractionError as e:
        return ItemResult.failed(Outcome.EXTRACTION_FAILED, e)

    record.crawled_at = datetime.now(timezone.utc)

    try:
        store.save(record)
    except SinkError as e:
        return ItemResult.failed(Outcome.SINK_FAILED, e)

    if politeness_delay_seconds > 0:
        sleep(politeness_delay_seconds)

    return ItemResult.processed(produced=1)


def build_podcasts_stage(
    config: CrawlerConfig,
    fetcher: Fetcher,
    podcasts_queue: QueueClient,
    store: PodcastStore,
    sleep: Callable[[float], None] = time.sleep,
) -> Stage:
    policy = RetryPolicy(
        max_retries=config.max_retries,
        delay_seconds=config.hiccup_seconds,
        linear=True,
        max_delay_seconds=config.max_retry_delay_seconds,
    )
    handler = functools.partial(
        crawl_podcast,
        fetcher=fetcher,
        store=store,
        policy=policy,
        politeness_delay_seconds=config.politeness_delay_seconds,
        sleep=sleep,
    )
    return Stage(
        name="podcasts",
        queue=podcasts_queue,
        handle=handler,
        terminal=True,
        drop_unreachable=config.drop_unreachable,
    )
