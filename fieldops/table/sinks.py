from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple
import logging

logger = logging.getLogger(__name__)

CellKey = Tuple[str, str]  # (record_id, field_id)


class SaveError(Exception):
    """The save collaborator rejected a batch of pending edits."""


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    error: Optional[SaveError] = None
    committed: Mapping[CellKey, Any] = field(default_factory=dict)

    @staticmethod
    def success(committed: Optional[Mapping[CellKey, Any]] = None) -> "SaveResult":
        return SaveResult(ok=True, committed=dict(committed or {}))

    @staticmethod
    def failure(error: SaveError | str) -> "SaveResult":
        if not isinstance(error, SaveError):
            error = SaveError(error)
        return SaveResult(ok=False, error=error)


class SaveSink(Protocol):
    def save(self, pending: Mapping[CellKey, Any]) -> SaveResult:
        """Persist a batch of staged cell edits.

        Return SaveResult.failure(...) or raise SaveError to reject it.
        """
        ...


class LoggingSaveSink:
    """Accepts every batch and only logs it."""

    def save(self, pending: Mapping[CellKey, Any]) -> SaveResult:
        logger.info(f"Saving changes: {dict(pending)}")
        return SaveResult.success(pending)


@dataclass
class MemorySaveSink:
    """Keeps accepted batches in memory; rejects everything when fail_with is set."""

    fail_with: Optional[str] = None
    batches: List[Dict[CellKey, Any]] = field(default_factory=list)

    def save(self, pending: Mapping[CellKey, Any]) -> SaveResult:
        if self.fail_with is not None:
            return SaveResult.failure(self.fail_with)
        self.batches.append(dict(pending))
        return SaveResult.success(pending)

    @property
    def last(self) -> Optional[Dict[CellKey, Any]]:
        return self.batches[-1] if self.batches else None
