"""Shared poll-process-commit loop for the crawl stages."""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from common.config import CrawlerConfig
from common.queue_client import QueueClient, WorkItem
from crawl_pipeline.models import BatchSummary, ItemResult, Outcome
from crawl_pipeline.polling import IdleBackoff, poll_batches

logger = logging.getLogger(__name__)

# Outcomes after which a terminal stage keeps the item for redelivery
TERMINAL_RETRY_OUTCOMES = {Outcome.EXTRACTION_FAILED, Outcome.SINK_FAILED, Outcome.ERROR}


@dataclass
class Stage:
    """One worker: the queue it consumes and the per-item handler.

    A terminal stage writes to the document store, so it only deletes an item
    once the write went through. Earlier stages delete every item they touch.
    """
    name: str
    queue: QueueClient
    handle: Callable[[WorkItem], ItemResult]
    terminal: bool = False
    drop_unreachable: bool = True


def should_delete(stage: Stage, result: ItemResult) -> bool:
    if result.outcome is Outcome.UNREACHABLE:
        return stage.drop_unreachable
    if stage.terminal:
        return result.outcome not in TERMINAL_RETRY_OUTCOMES
    return True


def handle_item(stage: Stage, item: WorkItem) -> ItemResult:
    """Run the stage handler, turning any unexpected exception into a result."""
    try:
        return stage.handle(item)
    except Exception as e:
        logger.exception("[%s] Unhandled error processing %s", stage.name, item.body)
        return ItemResult.failed(Outcome.ERROR, e)


def process_batch(stage: Stage, items: list[WorkItem]) -> BatchSummary:
    """Handle items in order; one failing item never stops the rest."""
    summary = BatchSummary()

    for item in items:
        logger.info("[%s] Processing %s", stage.name, item.body)
        result = handle_item(stage, item)

        if result.outcome is Outcome.PROCESSED:
            summary.processed += 1
        else:
            summary.failed += 1
            logger.warning("[%s] %s for %s: %s", stage.name, result.outcome.value, item.body, result.error)

        if should_delete(stage, result):
            if stage.queue.delete_item(item):
                summary.deleted += 1
        else:
            summary.kept += 1
            logger.info("[%s] Leaving %s for redelivery", stage.name, item.body)

    return summary


def run_worker(
    stage: Stage,
    config: CrawlerConfig,
    sleep: Callable[[float], None] = time.sleep,
    max_batches: Optional[int] = None,
) -> None:
    """Poll the stage's queue and process batches forever.

    `max_batches` bounds the loop; it is only meant for tests and one-off runs.
    """
    backoff = IdleBackoff(max_wait_ms=config.max_idle_wait_ms)
    batches = poll_batches(stage.queue, backoff, hiccup_seconds=config.hiccup_seconds, sleep=sleep)
    if max_batches is not None:
        batches = itertools.islice(batches, max_batches)

    logger.info("[%s] Started processing %s", stage.name, stage.queue.queue_name)
    for items in batches:
        try:
            summary = process_batch(stage, items)
        except Exception:
            logger.exception("[%s] Batch failed, continuing", stage.name)
            continue
        logger.info(
            "[%s] Batch done: %d processed, %d failed, %d deleted, %d kept",
            stage.name, summary.processed, summary.failed, summary.deleted, summary.kept,
        )
