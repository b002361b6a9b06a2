import logging
from typing import Any, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from common.errors import QueueError

load_dotenv()

logger = logging.getLogger(__name__)

# SQS hard limits
SQS_MAX_MESSAGE_SIZE = 256 * 1024
SQS_MAX_BATCH_SIZE = 10

# (minimum, maximum, default) per queue attribute
QUEUE_ATTRIBUTE_LIMITS = {
    "DelaySeconds": (0, 900, 0),
    "MaximumMessageSize": (1024, SQS_MAX_MESSAGE_SIZE, SQS_MAX_MESSAGE_SIZE),
    "MessageRetentionPeriod": (60, 1209600, 345600),
    "ReceiveMessageWaitTimeSeconds": (0, 20, 0),
    "VisibilityTimeout": (0, 43200, 30),
}


def get_sqs_client(region: Optional[str] = None):
    """Create SQS client."""
    return boto3.client("sqs", region_name=region)


def clamp_queue_attributes(attributes: Optional[Mapping[str, Any]] = None) -> dict[str, str]:
    """Fill in defaults and clamp numeric queue attributes to the SQS limits."""
    attributes = dict(attributes or {})
    result = {}
    for name, (low, high, default) in QUEUE_ATTRIBUTE_LIMITS.items():
        value = int(attributes.pop(name, default))
        result[name] = str(min(max(value, low), high))
    # Anything else (e.g. Policy) is passed through untouched
    for name, value in attributes.items():
        result[name] = str(value)
    return result


def create_queue(name: str, attributes: Optional[Mapping[str, Any]] = None, sqs=None) -> str:
    """Create a queue (or return the existing one) and return its URL.

    Raises:
        QueueError: If the name is blank or SQS rejects the request.
    """
    if not name or not name.strip():
        raise QueueError("Invalid queue name")

    sqs = sqs or get_sqs_client()
    try:
        response = sqs.create_queue(QueueName=name, Attributes=clamp_queue_attributes(attributes))
    except (ClientError, BotoCoreError) as e:
        raise QueueError(f"Failed to create queue {name}: {e}") from e

    logger.info("Created queue %s", name)
    return response["QueueUrl"]


def get_queue_url(name: str, sqs=None) -> str:
    """Resolve a queue name to its URL.

    Raises:
        QueueError: If the queue does not exist or SQS is unreachable.
    """
    sqs = sqs or get_sqs_client()
    try:
        return sqs.get_queue_url(QueueName=name)["QueueUrl"]
    except (ClientError, BotoCoreError) as e:
        raise QueueError(f"Failed to open queue {name}: {e}") from e


def delete_queue(name: str, sqs=None) -> None:
    """Delete a queue and every message on it."""
    sqs = sqs or get_sqs_client()
    url = get_queue_url(name, sqs)
    try:
        sqs.delete_queue(QueueUrl=url)
    except (ClientError, BotoCoreError) as e:
        raise QueueError(f"Failed to delete queue {name}: {e}") from e
    logger.info("Deleted queue %s", name)
