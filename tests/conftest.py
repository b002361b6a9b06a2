"""Shared fixtures: an in-memory SQS client and a test config."""

from __future__ import annotations

import itertools
from collections import OrderedDict

import pytest
from botocore.exceptions import ClientError

from common.config import parse_config


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeSQS:
    """Just enough of the boto3 SQS client for the queue tests.

    Received messages stay in flight until deleted; there is no visibility
    timeout, so an undeleted message is never redelivered.
    """

    def __init__(self, queue_names=()):
        self.queues: dict[str, OrderedDict] = {}
        self.in_flight: dict[str, dict] = {}
        self._ids = itertools.count(1)
        self.fail_receive = 0
        self.fail_batch_ids: set[str] = set()
        for name in queue_names:
            self.create_queue(QueueName=name)

    @staticmethod
    def _name(url: str) -> str:
        return url.rsplit("/", 1)[-1]

    def create_queue(self, QueueName, Attributes=None):
        self.queues.setdefault(QueueName, OrderedDict())
        return {"QueueUrl": f"https://sqs.local/000000000000/{QueueName}"}

    def delete_queue(self, QueueUrl):
        del self.queues[self._name(QueueUrl)]
        return {}

    def get_queue_url(self, QueueName):
        if QueueName not in self.queues:
            raise client_error("AWS.SimpleQueueService.NonExistentQueue", "GetQueueUrl")
        return {"QueueUrl": f"https://sqs.local/000000000000/{QueueName}"}

    def send_message(self, QueueUrl, MessageBody):
        message_id = f"m{next(self._ids)}"
        self.queues[self._name(QueueUrl)][message_id] = MessageBody
        return {"MessageId": message_id}

    def send_message_batch(self, QueueUrl, Entries):
        assert len(Entries) <= 10
        successful, failed = [], []
        for entry in Entries:
            if entry["MessageBody"] in self.fail_batch_ids:
                failed.append({"Id": entry["Id"], "SenderFault": False, "Code": "InternalError"})
                continue
            self.send_message(QueueUrl, entry["MessageBody"])
            successful.append({"Id": entry["Id"]})
        return {"Successful": successful, "Failed": failed}

    def receive_message(self, QueueUrl, MaxNumberOfMessages=1, WaitTimeSeconds=0):
        if self.fail_receive:
            self.fail_receive -= 1
            raise client_error("ServiceUnavailable", "ReceiveMessage")
        queue = self.queues[self._name(QueueUrl)]
        messages = []
        for message_id in list(queue)[:MaxNumberOfMessages]:
            body = queue.pop(message_id)
            receipt = f"r-{message_id}"
            self.in_flight[receipt] = {"queue": self._name(QueueUrl), "body": body}
            messages.append({"MessageId": message_id, "ReceiptHandle": receipt, "Body": body})
        return {"Messages": messages} if messages else {}

    def delete_message(self, QueueUrl, ReceiptHandle):
        if ReceiptHandle not in self.in_flight:
            raise client_error("ReceiptHandleIsInvalid", "DeleteMessage")
        del self.in_flight[ReceiptHandle]
        return {}

    def purge_queue(self, QueueUrl):
        self.queues[self._name(QueueUrl)].clear()
        return {}

    def get_queue_attributes(self, QueueUrl, AttributeNames):
        count = len(self.queues[self._name(QueueUrl)])
        return {"Attributes": {"ApproximateNumberOfMessages": str(count)}}

    def bodies(self, name: str) -> list[str]:
        return list(self.queues[name].values())


@pytest.fixture
def fake_sqs():
    return FakeSQS(["categories", "listings", "podcasts"])


@pytest.fixture
def config():
    return parse_config(
        {
            "queues": {"categories": "categories", "listings": "listings", "podcasts": "podcasts"},
            "max_retries": 2,
            "retry_delay_seconds": 1.0,
            "hiccup_seconds": 1.0,
            "politeness_delay_seconds": 0,
            "seed_max_retries": 3,
            "seed_retry_delay_seconds": 0,
        }
    )
