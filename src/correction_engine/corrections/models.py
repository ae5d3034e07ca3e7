"""Correction record types.

Timestamps are kept as aware UTC datetimes in memory and written as epoch
milliseconds in the persisted document. ``CorrectionsDocument`` validates
a persisted or imported document before any record is built from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from correction_engine.text.words import fold_case


class CorrectionStatus(str, Enum):
    """Lifecycle state of a learned correction."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    DEPRECATED = "deprecated"


class CorrectionSource(str, Enum):
    """Where a correction came from."""

    DIFF = "diff"
    STEM_INFERRED = "stem_inferred"
    MANUAL = "manual"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_millis(value: int | float) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


@dataclass
class CorrectionRecord:
    """A learned mapping from a mis-recognized word to its correction.

    Attributes:
        wrong: Case-folded mistaken token; unique key within a store
        right: Replacement text as the user wrote it
        count: Number of times the mistake was observed
        first_seen: When the mistake was first observed
        last_seen: When the mistake was last observed
        revert_count: Times the user undid an automatic application
        status: Lifecycle state
        source: How the record was learned
    """

    wrong: str
    right: str
    count: int = 1
    first_seen: datetime = field(default_factory=utc_now)
    last_seen: datetime = field(default_factory=utc_now)
    revert_count: int = 0
    status: CorrectionStatus = CorrectionStatus.PENDING
    source: CorrectionSource = CorrectionSource.DIFF

    def days_since_seen(self, now: datetime) -> float:
        seconds = (now - self.last_seen).total_seconds()
        return max(0.0, seconds) / 86400.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "wrong": self.wrong,
            "right": self.right,
            "count": self.count,
            "first_seen": to_millis(self.first_seen),
            "last_seen": to_millis(self.last_seen),
            "revert_count": self.revert_count,
            "status": self.status.value,
            "source": self.source.value,
        }


# Last millisecond of year 9999, the latest time a datetime can hold
MAX_MILLIS = 253_402_300_799_999


def correction_key(word: str) -> str:
    """Case-folded store key for ``word``, one character per character."""
    # Text lowercased with str.lower() spells "İ" as "i" plus U+0307
    return fold_case(word).replace("i\u0307", "i")


class CorrectionEntry(BaseModel):
    """One record as written in a corrections document.

    Timestamps are epoch milliseconds; 0 means the document never recorded
    the time.
    """

    model_config = ConfigDict(extra="ignore")

    wrong: str
    right: str
    count: int = Field(default=1, ge=0)
    first_seen: int = Field(default=0, ge=0, le=MAX_MILLIS)
    last_seen: int = Field(default=0, ge=0, le=MAX_MILLIS)
    revert_count: int = Field(default=0, ge=0)
    status: CorrectionStatus = CorrectionStatus.PENDING
    source: CorrectionSource = CorrectionSource.DIFF

    @field_validator("wrong", "right")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status_name(cls, value: Any) -> Any:
        # Older documents wrote the variant names ("Pending", "Active")
        if value is None or value == "":
            return CorrectionStatus.PENDING
        return value.lower() if isinstance(value, str) else value

    @field_validator("source", mode="before")
    @classmethod
    def _source_name(cls, value: Any) -> Any:
        if value is None or value == "":
            return CorrectionSource.DIFF
        return value.lower() if isinstance(value, str) else value

    @field_validator("first_seen", "last_seen", mode="before")
    @classmethod
    def _missing_time(cls, value: Any) -> Any:
        return 0 if value is None else value

    @model_validator(mode="after")
    def _not_self_correction(self) -> "CorrectionEntry":
        if correction_key(self.wrong) == correction_key(self.right):
            raise ValueError(f"'{self.wrong}' corrects to itself")
        return self

    @property
    def key(self) -> str:
        return correction_key(self.wrong)

    def to_record(self, now: datetime) -> CorrectionRecord:
        """Build the in-memory record; unrecorded times become ``now``."""
        last_seen = from_millis(self.last_seen) if self.last_seen else now
        first_seen = from_millis(self.first_seen) if self.first_seen else last_seen
        return CorrectionRecord(
            wrong=self.key,
            right=self.right,
            count=self.count,
            first_seen=first_seen,
            last_seen=last_seen,
            revert_count=self.revert_count,
            status=self.status,
            source=self.source,
        )


class CorrectionsDocument(BaseModel):
    """A versioned corrections snapshot, as persisted and exported."""

    version: int = 0
    corrections: list[CorrectionEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_keys(self) -> "CorrectionsDocument":
        seen: set[str] = set()
        for entry in self.corrections:
            if entry.key in seen:
                raise ValueError(f"duplicate correction for '{entry.wrong}'")
            seen.add(entry.key)
        return self


@dataclass(frozen=True)
class CorrectionView:
    """A record paired with its confidence at the time it was read."""

    record: CorrectionRecord
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        data = self.record.to_dict()
        data["confidence"] = round(self.confidence, 4)
        return data
