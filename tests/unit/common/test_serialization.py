"""Tests for common.serialization module."""

from datetime import datetime

from common.datetime import DATE_SENTINEL
from common.serialization import serialize_dataclass
from parse_catalog.models import Episode, PodcastRecord


class TestSerializeDataclass:
    def test_episode_dates_become_strings(self) -> None:
        episode = Episode(index=1, name="Pilot", description="First", release_date=datetime(2016, 1, 5))
        assert serialize_dataclass(episode) == {
            "index": 1,
            "name": "Pilot",
            "description": "First",
            "release_date": "2016-01-05T00:00:00",
        }

    def test_nested_episodes(self) -> None:
        record = PodcastRecord(id="u", episodes=[Episode(1, "a", "b")])
        data = serialize_dataclass(record)
        assert data["episodes"][0]["release_date"] == DATE_SENTINEL.isoformat()
        assert data["last_release_date"] == "0001-01-01T00:00:00"
        assert data["crawled_at"] is None
