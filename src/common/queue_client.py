"""Retrying wrapper around a single SQS queue."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from common.aws import SQS_MAX_BATCH_SIZE, get_queue_url, get_sqs_client
from common.errors import QueueError

logger = logging.getLogger(__name__)

QUEUE_ERRORS = (ClientError, BotoCoreError)


@dataclass(frozen=True)
class WorkItem:
    """A dequeued message: the URL body plus the receipt needed to delete it."""
    id: str
    receipt_handle: str
    body: str

    @classmethod
    def from_message(cls, message: dict) -> WorkItem:
        return cls(
            id=message["MessageId"],
            receipt_handle=message["ReceiptHandle"],
            body=message["Body"],
        )


@dataclass
class ReceiveResult:
    """Outcome of one receive call.

    `failed` is set when the call itself did not go through, which callers
    treat differently from a successful call that found nothing.
    """
    items: list[WorkItem] = field(default_factory=list)
    failed: bool = False

    @property
    def empty(self) -> bool:
        return not self.failed and not self.items


@dataclass
class EnqueueReport:
    sent: int = 0
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class QueueClient:
    """Batch enqueue, bounded dequeue and single delete on one named queue.

    None of the steady-state methods raise on transport errors: they log and
    report the failure through their return value so a worker loop never dies
    because SQS hiccuped.
    """

    def __init__(
        self,
        queue_name: str,
        max_messages: int = SQS_MAX_BATCH_SIZE,
        sqs=None,
        region: Optional[str] = None,
        send_retries: int = 3,
        wait_time_seconds: int = 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.queue_name = queue_name
        self.max_messages = max(1, min(max_messages, SQS_MAX_BATCH_SIZE))
        self.sqs = sqs or get_sqs_client(region)
        self.send_retries = max(1, send_retries)
        self.wait_time_seconds = wait_time_seconds
        self._sleep = sleep
        # Raises QueueError when the queue does not exist
        self.queue_url = get_queue_url(queue_name, self.sqs)

    def __repr__(self) -> str:
        return f"QueueClient({self.queue_name!r})"

    def enqueue(self, body: str) -> bool:
        """Send one message, retrying with a short random pause."""
        for attempt in range(1, self.send_retries + 1):
            try:
                self.sqs.send_message(QueueUrl=self.queue_url, MessageBody=body)
                return True
            except QUEUE_ERRORS as e:
                logger.warning(
                    "Enqueue attempt %d/%d to %s failed: %s",
                    attempt, self.send_retries, self.queue_name, e,
                )
                if attempt < self.send_retries:
                    self._sleep(random.uniform(0.5, 2.0))
        return False

    def enqueue_batch(self, bodies: Iterable[str]) -> EnqueueReport:
        """Send messages in groups of at most 10.

        Entries rejected by a batch call (or a whole group when the call itself
        fails) are retried one by one. Messages that still cannot be sent are
        listed in the report and logged; the remaining groups are still sent.
        """
        bodies = list(bodies)
        report = EnqueueReport()

        for start in range(0, len(bodies), SQS_MAX_BATCH_SIZE):
            chunk = bodies[start:start + SQS_MAX_BATCH_SIZE]
            entries = [{"Id": str(i), "MessageBody": body} for i, body in enumerate(chunk)]

            try:
                response = self.sqs.send_message_batch(QueueUrl=self.queue_url, Entries=entries)
                rejected = [chunk[int(entry["Id"])] for entry in response.get("Failed", [])]
            except QUEUE_ERRORS as e:
                logger.warning("Batch enqueue to %s failed, sending individually: %s", self.queue_name, e)
                rejected = list(chunk)

            report.sent += len(chunk) - len(rejected)

            if rejected:
                self._sleep(0.1)
            for body in rejected:
                if self.enqueue(body):
                    report.sent += 1
                else:
                    logger.error("Dropped message for %s after retries: %s", self.queue_name, body)
                    report.failed.append(body)

        return report

    def dequeue_batch(self, max_items: Optional[int] = None) -> ReceiveResult:
        """Receive up to `max_items` messages with a single call."""
        limit = self.max_messages if max_items is None else max(1, min(max_items, SQS_MAX_BATCH_SIZE))
        try:
            response = self.sqs.receive_message(
                QueueUrl=self.queue_url,
                MaxNumberOfMessages=limit,
                WaitTimeSeconds=self.wait_time_seconds,
            )
        except QUEUE_ERRORS as e:
            logger.warning("Dequeue from %s failed: %s", self.queue_name, e)
            return ReceiveResult(failed=True)

        messages = response.get("Messages") or []
        return ReceiveResult(items=[WorkItem.from_message(message) for message in messages])

    def delete_item(self, item: WorkItem) -> bool:
        """Delete a processed message.

        An expired or already-used receipt only means the message will be
        redelivered, so it is logged and reported as False.
        """
        try:
            self.sqs.delete_message(QueueUrl=self.queue_url, ReceiptHandle=item.receipt_handle)
            return True
        except QUEUE_ERRORS as e:
            logger.warning("Delete of %s from %s failed: %s", item.id, self.queue_name, e)
            return False

    def approximate_count(self) -> int:
        try:
            response = self.sqs.get_queue_attributes(
                QueueUrl=self.queue_url,
                AttributeNames=["ApproximateNumberOfMessages"],
            )
        except QUEUE_ERRORS as e:
            logger.warning("Could not read attributes of %s: %s", self.queue_name, e)
            return 0
        return int(response.get("Attributes", {}).get("ApproximateNumberOfMessages", 0))

    def purge(self) -> None:
        """Drop every message using the PurgeQueue API."""
        try:
            self.sqs.purge_queue(QueueUrl=self.queue_url)
        except QUEUE_ERRORS as e:
            raise QueueError(f"Failed to purge {self.queue_name}: {e}") from e
        logger.info("Purged queue %s", self.queue_name)

    def clear_all(self) -> int:
        """Receive and delete messages until the queue reports empty.

        Stops early if a receive call fails. Returns the number of messages
        deleted.
        """
        deleted = 0
        while True:
            result = self.dequeue_batch()
            if result.failed:
                logger.error("Aborting clear of %s after a failed receive", self.queue_name)
                break
            if not result.items:
                break
            for item in result.items:
                if self.delete_item(item):
                    deleted += 1

        logger.info("Cleared %d messages from %s", deleted, self.queue_name)
        return deleted
