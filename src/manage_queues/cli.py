"""Out-of-band queue administration: create, count, purge, clear and delete."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from common.aws import create_queue, delete_queue, get_sqs_client
from common.cli_helpers import load_config_or_exit, setup_logging
from common.config import CrawlerConfig
from common.errors import EXIT_QUEUE_UNAVAILABLE, QueueError
from common.queue_client import QueueClient

load_dotenv()

logger = logging.getLogger(__name__)

COMMANDS = ("create", "count", "purge", "clear", "delete")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Administer the crawler queues.")
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument(
        "queues",
        nargs="*",
        help="Queue names (default: every queue in the config).",
    )
    parser.add_argument("--config", default=None)
    parser.add_argument(
        "--visibility-timeout",
        type=int,
        default=None,
        help="VisibilityTimeout in seconds for created queues.",
    )
    return parser.parse_args(argv)


def configured_queue_names(config: CrawlerConfig) -> list[str]:
    return [config.queues.categories, config.queues.listings, config.queues.podcasts]


def manage_queues(
    command: str,
    queue_names: list[str],
    sqs,
    attributes: Optional[dict] = None,
) -> dict[str, int]:
    """Run `command` on each queue.

    Returns:
        Mapping of queue name to a count: messages deleted for `clear`,
        approximate messages for `count`, 0 otherwise.
    """
    results = {}
    for name in queue_names:
        if command == "create":
            create_queue(name, attributes, sqs=sqs)
            results[name] = 0
            continue
        if command == "delete":
            delete_queue(name, sqs=sqs)
            results[name] = 0
            continue

        queue = QueueClient(name, sqs=sqs)
        if command == "count":
            results[name] = queue.approximate_count()
            logger.info("%s: ~%d messages", name, results[name])
        elif command == "purge":
            queue.purge()
            results[name] = 0
        elif command == "clear":
            results[name] = queue.clear_all()
        else:
            raise ValueError(f"Unknown command: {command}")
    return results


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = load_config_or_exit(args.config)
    setup_logging(level=config.log_level)

    queue_names = args.queues or configured_queue_names(config)
    attributes = {}
    if args.visibility_timeout is not None:
        attributes["VisibilityTimeout"] = args.visibility_timeout

    try:
        manage_queues(args.command, queue_names, get_sqs_client(config.aws_region), attributes)
    except QueueError as e:
        logger.critical("%s", e)
        sys.exit(EXIT_QUEUE_UNAVAILABLE)


if __name__ == "__main__":
    main()
