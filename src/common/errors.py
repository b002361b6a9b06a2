"""Crawler exception types and process exit codes."""

# Process exit codes for fatal startup errors
EXIT_PROXY_FILE_MISSING = 100
EXIT_PROXY_FILE_INVALID = 101
EXIT_CONFIG_ERROR = 102
EXIT_QUEUE_UNAVAILABLE = 103
EXIT_SEED_UNREACHABLE = 104
EXIT_SEED_UNPARSABLE = 105


class CrawlerError(Exception):
    """Base class for crawler errors."""


class ConfigError(CrawlerError):
    """Configuration is missing or invalid."""


class ProxyFileError(CrawlerError):
    """Proxy list file is missing or contains a malformed line."""


class QueueError(CrawlerError):
    """A queue could not be opened or created."""


class ExtractionError(CrawlerError):
    """A page did not have the structure the extractor expects."""


class SinkError(CrawlerError):
    """A record could not be written to the document store."""
