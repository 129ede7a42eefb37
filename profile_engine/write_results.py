from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class WriteOutcome(str, Enum):
    """Outcome of one mutating store operation."""

    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class WriteResult:
    """
    Result of a mutation's durable write.

    Attributes
    ----------
    key:
        Backend key the mutation targeted.
    outcome:
        Outcome of the write. ``SKIPPED`` means the mutation was a documented
        no-op and nothing was written.
    message:
        Optional human-readable detail (e.g., failure reason).

    Notes
    -----
    A ``FAILED`` result means the in-memory state changed but durable storage
    did not. The next successful write of the same key brings them back in line.
    """

    key: str
    outcome: WriteOutcome
    message: str | None = None

    @property
    def ok(self) -> bool:
        """True unless the backend rejected the write."""
        return self.outcome is not WriteOutcome.FAILED

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["outcome"] = self.outcome.value
        return payload


def written(key: str) -> WriteResult:
    return WriteResult(key=key, outcome=WriteOutcome.WRITTEN)


def skipped(key: str, message: str) -> WriteResult:
    return WriteResult(key=key, outcome=WriteOutcome.SKIPPED, message=message)


def failed(key: str, message: str) -> WriteResult:
    return WriteResult(key=key, outcome=WriteOutcome.FAILED, message=message)
