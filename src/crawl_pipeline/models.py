"""Data models for the shared worker loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Outcome(Enum):
    """What happened to one work item."""
    PROCESSED = "processed"
    UNREACHABLE = "unreachable"
    REJECTED = "rejected"
    EXTRACTION_FAILED = "extraction_failed"
    SINK_FAILED = "sink_failed"
    ERROR = "error"


@dataclass
class ItemResult:
    outcome: Outcome
    produced: int = 0
    error: Optional[str] = None

    @classmethod
    def processed(cls, produced: int = 0) -> ItemResult:
        return cls(Outcome.PROCESSED, produced=produced)

    @classmethod
    def failed(cls, outcome: Outcome, error: Exception | str) -> ItemResult:
        return cls(outcome, error=str(error))


@dataclass
class BatchSummary:
    processed: int = 0
    deleted: int = 0
    kept: int = 0
    failed: int = 0
