"""Crawler configuration loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping

import yaml

from common.errors import ConfigError

CONFIG_DIR = Path(__file__).parent / "configs"
CONFIG_ENV_VAR = "CRAWLER_CONFIG"

DEFAULT_SEED_URL = "https://itunes.apple.com/us/genre/podcasts/id26?mt=2"
DEFAULT_USER_AGENT = "Crawling for a college work - more at https://github.com/MarcelloLins/AppStoreCrawler"

# SQS receive calls accept at most 10 messages
MAX_MESSAGES_LIMIT = 10


@dataclass
class QueueNames:
    categories: str
    listings: str
    podcasts: str


@dataclass
class CrawlerConfig:
    queues: QueueNames
    aws_region: str = "us-east-1"
    seed_url: str = DEFAULT_SEED_URL
    seed_max_retries: int = 100
    seed_retry_delay_seconds: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_seconds: float = 30.0
    max_messages_per_dequeue: int = MAX_MESSAGES_LIMIT
    max_retries: int = 3
    retry_delay_seconds: float = 1.0
    max_retry_delay_seconds: float = 30.0
    hiccup_seconds: float = 1.0
    max_idle_wait_ms: int = 2 ** 12 * 1000
    politeness_delay_seconds: float = 1.0
    drop_unreachable: bool = True
    log_dir: str = "log"
    log_level: str = "INFO"


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = CONFIG_ENV_VAR,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml) or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        ConfigError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None, config_dir: Path = CONFIG_DIR) -> CrawlerConfig:
    """Load a named crawler config.

    Raises:
        ConfigError: If the file is missing or a required key is absent.
    """
    path = find_config_path(config_name, config_dir)
    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    return parse_config(data)


def parse_config(data: dict) -> CrawlerConfig:
    """Parse config dictionary into a CrawlerConfig.

    Raises:
        ConfigError: If the data is not a mapping, a queue name is missing,
            a key is unknown or a value has the wrong type or range.
    """
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

    queues_data = data.get("queues") or {}
    if not isinstance(queues_data, Mapping):
        raise ConfigError(f"'queues' must be a mapping, got {type(queues_data).__name__}")
    missing = [name for name in ("categories", "listings", "podcasts") if not queues_data.get(name)]
    if missing:
        raise ConfigError(f"Missing queue names in config: {', '.join(missing)}")
    bad_names = [name for name in ("categories", "listings", "podcasts") if not isinstance(queues_data[name], str)]
    if bad_names:
        raise ConfigError(f"Queue names must be strings: {', '.join(bad_names)}")

    queues = QueueNames(
        categories=queues_data["categories"],
        listings=queues_data["listings"],
        podcasts=queues_data["podcasts"],
    )

    known = {f.name: f for f in fields(CrawlerConfig) if f.name != "queues"}
    unknown = sorted(set(data) - set(known) - {"queues"})
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    values = {}
    for key, value in data.items():
        if key == "queues":
            continue
        values[key] = _check_type(key, value, type(known[key].default))
    config = CrawlerConfig(queues=queues, **values)

    if not 1 <= config.max_messages_per_dequeue <= MAX_MESSAGES_LIMIT:
        raise ConfigError(
            f"max_messages_per_dequeue must be between 1 and {MAX_MESSAGES_LIMIT}, "
            f"got {config.max_messages_per_dequeue}"
        )
    if config.max_retries < 0 or config.seed_max_retries < 0:
        raise ConfigError("Retry counts must not be negative")

    return config


def _check_type(key: str, value, expected: type):
    """Return `value` if it matches the field's type; ints are accepted for floats."""
    if expected is float and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if expected is int and isinstance(value, int) and not isinstance(value, bool):
        return value
    if expected in (bool, str) and isinstance(value, expected):
        return value
    raise ConfigError(f"'{key}' must be of type {expected.__name__}, got {type(value).__name__}: {value!r}")
