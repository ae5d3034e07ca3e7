"""Correction store: learned word corrections and their lifecycle.

Each record moves through Pending -> Confirmed -> Active as evidence
accumulates and falls back (or out) as its confidence decays:

    confidence = max(0, count - 2 * revert_count) * exp(-0.01 * days_since_last_seen)

Only Active records with confidence >= 0.5 are applied to new transcripts.

The store is an ordinary object owned by whoever constructs it. All reads
take a shared lock and all mutations an exclusive one, so the transcription
handler and the edit handler can use the same instance from different
threads. Persistence is left to the caller: ``to_document`` produces a
detached snapshot that can be written without holding the lock.
"""

from __future__ import annotations

import copy
import json
import math
from datetime import datetime, timedelta
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from correction_engine.corrections.models import (
    CorrectionRecord,
    CorrectionSource,
    CorrectionStatus,
    CorrectionsDocument,
    CorrectionView,
    correction_key,
    utc_now,
)
from correction_engine.errors import ImportFormatError
from correction_engine.locking import ReadWriteLock
from correction_engine.logging import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 2

MIN_CONFIRMATIONS = 3
AUTO_APPLY_CONFIDENCE = 0.5
DEPRECATION_THRESHOLD = 0.1
DECAY_PER_DAY = 0.01
PURGE_AFTER = timedelta(days=90)


def calculate_confidence(record: CorrectionRecord, now: datetime) -> float:
    """Trust score of a record at ``now``."""
    effective = max(0, record.count - 2 * record.revert_count)
    return effective * math.exp(-DECAY_PER_DAY * record.days_since_seen(now))


def next_status(record: CorrectionRecord, confidence: float) -> CorrectionStatus:
    """Single lifecycle step for a record with the given confidence."""
    status = record.status

    if status == CorrectionStatus.PENDING:
        if record.count >= MIN_CONFIRMATIONS or record.source == CorrectionSource.MANUAL:
            return CorrectionStatus.CONFIRMED

    elif status == CorrectionStatus.CONFIRMED:
        if confidence >= AUTO_APPLY_CONFIDENCE:
            return CorrectionStatus.ACTIVE
        if confidence < DEPRECATION_THRESHOLD and record.count > 0:
            return CorrectionStatus.DEPRECATED

    elif status == CorrectionStatus.ACTIVE:
        if confidence < DEPRECATION_THRESHOLD:
            return CorrectionStatus.DEPRECATED
        if confidence < AUTO_APPLY_CONFIDENCE:
            return CorrectionStatus.CONFIRMED

    # Deprecated only leaves the store by deletion or the 90-day purge
    return status


def _migrate(document: CorrectionsDocument) -> CorrectionsDocument:
    """Bring an older corrections document up to the current schema.

    Records that predate the lifecycle were applied as soon as they were
    seen, so pending ones are promoted by their observation count.
    """
    if document.version >= SCHEMA_VERSION:
        return document

    migrated = []
    for entry in document.corrections:
        if entry.status == CorrectionStatus.PENDING:
            if entry.count >= MIN_CONFIRMATIONS:
                entry = entry.model_copy(update={"status": CorrectionStatus.ACTIVE})
            elif entry.count >= 1:
                entry = entry.model_copy(update={"status": CorrectionStatus.CONFIRMED})
        migrated.append(entry)

    logger.info(
        f"Migrated corrections document v{document.version} -> v{SCHEMA_VERSION}",
        extra={"records": len(migrated)},
    )
    return document.model_copy(update={"version": SCHEMA_VERSION, "corrections": migrated})


def parse_document(document: Any, now: datetime) -> list[CorrectionRecord]:
    """Validate, migrate and decode a corrections document.

    Args:
        document: Parsed JSON of a persisted or exported snapshot
        now: Time given to records whose document never recorded one

    Raises:
        ImportFormatError: If the document is not a corrections snapshot, or
            holds an empty word, a self-correction or a repeated word
    """
    try:
        parsed = CorrectionsDocument.model_validate(document)
    except PydanticValidationError as e:
        raise ImportFormatError(f"Invalid corrections document: {e}") from e

    return [entry.to_record(now) for entry in _migrate(parsed).corrections]


class CorrectionStore:
    """Thread-safe collection of correction records keyed by ``wrong``."""

    def __init__(
        self,
        records: list[CorrectionRecord] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the store.

        Args:
            records: Initial records; later duplicates of a key win
            clock: Source of the current time, injectable for tests
        """
        self._lock = ReadWriteLock()
        self._clock = clock
        self._records: dict[str, CorrectionRecord] = {}
        for record in records or []:
            self._records[self._key(record.wrong)] = record

    def _now(self, now: datetime | None) -> datetime:
        return now if now is not None else self._clock()

    @staticmethod
    def _key(word: str) -> str:
        return correction_key(word.strip())

    @staticmethod
    def _is_self_correction(wrong: str, right: str) -> bool:
        return correction_key(wrong.strip()) == correction_key(right.strip())

    # ─── Writes ───

    def _upsert(
        self,
        wrong: str,
        right: str,
        initial_count: int,
        source: CorrectionSource,
        now: datetime | None,
    ) -> bool:
        key = self._key(wrong)
        right = right.strip()
        if not key or not right or self._is_self_correction(key, right):
            return False

        now = self._now(now)
        with self._lock.write():
            existing = self._records.get(key)
            if existing is not None:
                existing.right = right
                existing.count += 1
                existing.last_seen = now
                if source == CorrectionSource.MANUAL:
                    existing.source = CorrectionSource.MANUAL
                if existing.count >= MIN_CONFIRMATIONS and existing.status == CorrectionStatus.PENDING:
                    existing.status = CorrectionStatus.CONFIRMED
            else:
                self._records[key] = CorrectionRecord(
                    wrong=key,
                    right=right,
                    count=initial_count,
                    first_seen=now,
                    last_seen=now,
                    source=source,
                )
        return True

    def add(self, wrong: str, right: str, now: datetime | None = None) -> bool:
        """Record an observed mistake learned from a diff.

        Self-corrections and empty words are ignored.

        Returns:
            True if a record was created or updated
        """
        return self._upsert(wrong, right, 1, CorrectionSource.DIFF, now)

    def add_stem(self, wrong: str, right: str, now: datetime | None = None) -> bool:
        """Record a stem-level correction inferred from a suffixed pair.

        New stem records start at count 0, so they need three further
        observations before they can be confirmed.
        """
        return self._upsert(wrong, right, 0, CorrectionSource.STEM_INFERRED, now)

    def add_manual(self, wrong: str, right: str, now: datetime | None = None) -> bool:
        """Add a correction typed in by the user.

        Manual records skip the confirmation count and are confirmed at the
        next status recalculation.
        """
        return self._upsert(wrong, right, 1, CorrectionSource.MANUAL, now)

    def remove(self, wrong: str) -> bool:
        """Delete a record. Returns True if it existed."""
        with self._lock.write():
            return self._records.pop(self._key(wrong), None) is not None

    def report_revert(self, wrong: str, right: str) -> bool:
        """Note that the user undid an automatic ``wrong -> right`` application."""
        with self._lock.write():
            record = self._records.get(self._key(wrong))
            if record is None or correction_key(record.right) != correction_key(right.strip()):
                return False
            record.revert_count += 1
            revert_count = record.revert_count

        logger.info(
            f"Correction reverted: {wrong} -> {right}",
            extra={"revert_count": revert_count},
        )
        return True

    def promote(self, wrong: str) -> bool:
        """Force a Pending or Confirmed record to Active and mark it manual."""
        with self._lock.write():
            record = self._records.get(self._key(wrong))
            if record is None or record.status not in (
                CorrectionStatus.PENDING,
                CorrectionStatus.CONFIRMED,
            ):
                return False
            record.status = CorrectionStatus.ACTIVE
            record.source = CorrectionSource.MANUAL

        logger.info(f"Correction promoted: {wrong} -> active")
        return True

    def demote(self, wrong: str) -> bool:
        """Force a record to Deprecated."""
        with self._lock.write():
            record = self._records.get(self._key(wrong))
            if record is None:
                return False
            record.status = CorrectionStatus.DEPRECATED

        logger.info(f"Correction demoted: {wrong} -> deprecated")
        return True

    def recalculate_all_statuses(self, now: datetime | None = None) -> int:
        """Re-evaluate every record's lifecycle state.

        Steps are applied until each record is stable, so a well-observed
        Pending record can reach Active in a single pass.

        Returns:
            Number of records whose status changed
        """
        now = self._now(now)
        changed = 0
        with self._lock.write():
            for record in self._records.values():
                original = record.status
                confidence = calculate_confidence(record, now)
                while True:
                    status = next_status(record, confidence)
                    if status == record.status:
                        break
                    record.status = status
                if record.status != original:
                    changed += 1
        return changed

    def cleanup_deprecated(self, now: datetime | None = None) -> int:
        """Purge Deprecated records not seen for more than 90 days.

        Returns:
            Number of records removed
        """
        now = self._now(now)
        with self._lock.write():
            expired = [
                key
                for key, record in self._records.items()
                if record.status == CorrectionStatus.DEPRECATED
                and now - record.last_seen > PURGE_AFTER
            ]
            for key in expired:
                record = self._records.pop(key)
                logger.info(f"Purged deprecated correction: {record.wrong} -> {record.right}")
        return len(expired)

    def reset(self) -> None:
        """Remove every record."""
        with self._lock.write():
            self._records.clear()

    # ─── Reads ───

    def confidence(self, record: CorrectionRecord, now: datetime | None = None) -> float:
        return calculate_confidence(record, self._now(now))

    def get(self, wrong: str) -> CorrectionRecord | None:
        """Return a copy of the record for ``wrong``, if any."""
        with self._lock.read():
            record = self._records.get(self._key(wrong))
            return copy.copy(record) if record is not None else None

    def all(self) -> list[CorrectionRecord]:
        """Return copies of all records in insertion order."""
        with self._lock.read():
            return [copy.copy(r) for r in self._records.values()]

    def views(self, now: datetime | None = None) -> list[CorrectionView]:
        """All records with their current confidence."""
        now = self._now(now)
        return [CorrectionView(r, calculate_confidence(r, now)) for r in self.all()]

    def active_map(self, now: datetime | None = None) -> dict[str, str]:
        """Corrections eligible for automatic application.

        Only Active records with confidence >= 0.5 are included.
        """
        now = self._now(now)
        with self._lock.read():
            return {
                record.wrong: record.right
                for record in self._records.values()
                if record.status == CorrectionStatus.ACTIVE
                and not self._is_self_correction(record.wrong, record.right)
                and calculate_confidence(record, now) >= AUTO_APPLY_CONFIDENCE
            }

    def full_map(self) -> dict[str, str]:
        """Every record's mapping regardless of status."""
        with self._lock.read():
            return {record.wrong: record.right for record in self._records.values()}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)

    def __contains__(self, wrong: str) -> bool:
        with self._lock.read():
            return self._key(wrong) in self._records

    # ─── Snapshots ───

    def to_document(self) -> dict[str, Any]:
        """Detached, JSON-ready snapshot of the store."""
        with self._lock.read():
            corrections = [r.to_dict() for r in self._records.values()]
        return {"version": SCHEMA_VERSION, "corrections": corrections}

    @classmethod
    def from_document(
        cls,
        document: Any,
        clock: Callable[[], datetime] = utc_now,
    ) -> "CorrectionStore":
        """Build a store from a persisted document, migrating old schemas.

        Raises:
            ImportFormatError: If the document is malformed
        """
        return cls(parse_document(document, clock()), clock=clock)

    def replace_from_document(self, document: Any) -> int:
        """Swap in the records of ``document``.

        The document is fully decoded before the store is touched, so a
        malformed document leaves existing state intact.

        Returns:
            Number of records now in the store
        """
        records = parse_document(document, self._clock())
        with self._lock.write():
            self._records = {self._key(r.wrong): r for r in records}
            return len(self._records)

    def export_json(self) -> str:
        """Serialize the store as a self-describing JSON document."""
        return json.dumps(self.to_document(), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> int:
        """Replace the store's contents with an exported JSON document.

        Raises:
            ImportFormatError: If the text is not a valid corrections document
        """
        try:
            document = json.loads(text)
        except (TypeError, ValueError) as e:
            raise ImportFormatError(f"Cannot parse corrections JSON: {e}") from e

        count = self.replace_from_document(document)
        logger.info(f"Imported {count} corrections")
        return count
