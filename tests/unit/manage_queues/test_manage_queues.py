"""Tests for manage_queues.cli module."""

from unittest.mock import patch

import pytest

from common.errors import QueueError
from common.queue_client import QueueClient
from manage_queues.cli import configured_queue_names, main, manage_queues


class TestManageQueues:
    def test_create(self, fake_sqs) -> None:
        results = manage_queues("create", ["new-a", "new-b"], fake_sqs)
        assert results == {"new-a": 0, "new-b": 0}
        assert {"new-a", "new-b"} <= set(fake_sqs.queues)

    def test_count(self, fake_sqs) -> None:
        QueueClient("listings", sqs=fake_sqs).enqueue_batch(["a", "b"])
        assert manage_queues("count", ["listings", "podcasts"], fake_sqs) == {"listings": 2, "podcasts": 0}

    def test_clear(self, fake_sqs) -> None:
        QueueClient("podcasts", sqs=fake_sqs).enqueue_batch([str(i) for i in range(11)])
        assert manage_queues("clear", ["podcasts"], fake_sqs) == {"podcasts": 11}
        assert fake_sqs.bodies("podcasts") == []

    def test_purge(self, fake_sqs) -> None:
        QueueClient("podcasts", sqs=fake_sqs).enqueue("x")
        manage_queues("purge", ["podcasts"], fake_sqs)
        assert fake_sqs.bodies("podcasts") == []

    def test_delete(self, fake_sqs) -> None:
        assert manage_queues("delete", ["listings"], fake_sqs) == {"listings": 0}
        assert "listings" not in fake_sqs.queues
        assert {"categories", "podcasts"} <= set(fake_sqs.queues)

    def test_delete_missing_queue_raises(self, fake_sqs) -> None:
        with pytest.raises(QueueError):
            manage_queues("delete", ["missing"], fake_sqs)

    def test_configured_names(self, config) -> None:
        assert configured_queue_names(config) == ["categories", "listings", "podcasts"]


class TestManageQueuesCli:
    @patch("manage_queues.cli.setup_logging")
    @patch("manage_queues.cli.get_sqs_client")
    @patch("manage_queues.cli.load_config_or_exit")
    def test_create_with_visibility_timeout(self, mock_config, mock_client, mock_logging, config, fake_sqs) -> None:
        mock_config.return_value = config
        mock_client.return_value = fake_sqs

        with patch("manage_queues.cli.create_queue") as mock_create:
            main(["create", "--visibility-timeout", "120"])

        names = [call.args[0] for call in mock_create.call_args_list]
        assert names == ["categories", "listings", "podcasts"]
        assert mock_create.call_args.args[1] == {"VisibilityTimeout": 120}

    @patch("manage_queues.cli.setup_logging")
    @patch("manage_queues.cli.get_sqs_client")
    @patch("manage_queues.cli.load_config_or_exit")
    def test_missing_queue_exits_103(self, mock_config, mock_client, mock_logging, config, fake_sqs) -> None:
        mock_config.return_value = config
        mock_client.return_value = fake_sqs

        with pytest.raises(SystemExit) as exc:
            main(["count", "does-not-exist"])
        assert exc.value.code == 103

    @patch("manage_queues.cli.setup_logging")
    @patch("manage_queues.cli.get_sqs_client")
    @patch("manage_queues.cli.load_config_or_exit")
    def test_delete_named_queue(self, mock_config, mock_client, mock_logging, config, fake_sqs) -> None:
        mock_config.return_value = config
        mock_client.return_value = fake_sqs

        main(["delete", "podcasts"])

        assert "podcasts" not in fake_sqs.queues
