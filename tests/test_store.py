"""Tests for the correction store and its lifecycle."""

import json
import threading
from datetime import datetime, timedelta, timezone

import pytest

from correction_engine.corrections import (
    CorrectionRecord,
    CorrectionSource,
    CorrectionStatus,
    CorrectionStore,
    calculate_confidence,
)
from correction_engine.corrections.models import to_millis
from correction_engine.errors import ImportFormatError

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    """Store with a frozen clock."""
    return CorrectionStore(clock=lambda: NOW)


def make_record(**overrides) -> CorrectionRecord:
    fields = {
        "wrong": "guzel",
        "right": "güzel",
        "count": 1,
        "first_seen": NOW,
        "last_seen": NOW,
    }
    fields.update(overrides)
    return CorrectionRecord(**fields)


class TestAdd:
    """Tests for recording observed mistakes."""

    def test_new_record_is_pending(self, store):
        """Test that a first observation creates a pending diff record."""
        assert store.add("guzel", "güzel") is True

        record = store.get("guzel")
        assert record.count == 1
        assert record.status == CorrectionStatus.PENDING
        assert record.source == CorrectionSource.DIFF
        assert record.first_seen == NOW
        assert record.last_seen == NOW

    def test_repeat_updates_right_and_count(self, store):
        """Test that a repeat bumps count and takes the newest right."""
        store.add("guzel", "guzell")
        later = NOW + timedelta(days=1)
        store.add("guzel", "güzel", now=later)

        record = store.get("guzel")
        assert record.count == 2
        assert record.right == "güzel"
        assert record.last_seen == later
        assert record.first_seen == NOW
        assert len(store) == 1

    def test_third_observation_confirms(self, store):
        """Test that three observations move pending to confirmed."""
        for _ in range(3):
            store.add("guzel", "güzel")
        assert store.get("guzel").status == CorrectionStatus.CONFIRMED

    def test_key_is_lowercased(self, store):
        """Test that lookups ignore case."""
        store.add("Guzel", "güzel")
        assert store.get("GUZEL").wrong == "guzel"
        assert "guzel" in store

    def test_self_correction_ignored(self, store):
        """Test that wrong == right (case-insensitive) is rejected."""
        assert store.add("Test", "test") is False
        assert len(store) == 0

    def test_empty_words_ignored(self, store):
        """Test that empty input is rejected."""
        assert store.add("", "x") is False
        assert store.add("x", "  ") is False
        assert len(store) == 0


class TestAddStem:
    """Tests for stem-inferred corrections."""

    def test_stem_record_starts_at_zero(self, store):
        """Test that new stem records carry no observations yet."""
        store.add_stem("ogretmen", "öğretmen")

        record = store.get("ogretmen")
        assert record.count == 0
        assert record.source == CorrectionSource.STEM_INFERRED
        assert record.status == CorrectionStatus.PENDING

    def test_stem_needs_three_more_observations(self, store):
        """Test that a stem record is confirmed on its third repeat."""
        store.add_stem("ogretmen", "öğretmen")
        store.add_stem("ogretmen", "öğretmen")
        store.add_stem("ogretmen", "öğretmen")
        assert store.get("ogretmen").status == CorrectionStatus.PENDING

        store.add_stem("ogretmen", "öğretmen")
        record = store.get("ogretmen")
        assert record.count == 3
        assert record.status == CorrectionStatus.CONFIRMED

    def test_pending_stem_record_stays_pending_on_recalculate(self, store):
        """Test that a zero-count stem record is not deprecated."""
        store.add_stem("ogretmen", "öğretmen")
        store.recalculate_all_statuses(now=NOW + timedelta(days=500))
        assert store.get("ogretmen").status == CorrectionStatus.PENDING


class TestConfidence:
    """Tests for the confidence formula."""

    def test_fresh_record(self):
        """Test that confidence equals count when just seen."""
        assert calculate_confidence(make_record(count=4), NOW) == pytest.approx(4.0)

    def test_reverts_weigh_double(self):
        """Test that each revert cancels two observations."""
        record = make_record(count=5, revert_count=2)
        assert calculate_confidence(record, NOW) == pytest.approx(1.0)

    def test_never_negative(self):
        """Test that heavy reverts floor at zero."""
        record = make_record(count=1, revert_count=3)
        assert calculate_confidence(record, NOW) == 0.0

    def test_decays_with_age(self):
        """Test exponential decay of one percent per day."""
        record = make_record(count=5, last_seen=NOW - timedelta(days=100))
        assert calculate_confidence(record, NOW) == pytest.approx(5 * 0.36787944, rel=1e-6)


class TestLifecycle:
    """Tests for status transitions."""

    def test_confirmed_becomes_active(self, store):
        """Test that a well-observed pending record reaches active."""
        for _ in range(5):
            store.add("guzel", "güzel")

        changed = store.recalculate_all_statuses()

        assert changed == 1
        assert store.get("guzel").status == CorrectionStatus.ACTIVE
        assert store.active_map() == {"guzel": "güzel"}

    def test_manual_record_activates(self, store):
        """Test that a manual record skips the count requirement."""
        store.add_manual("cok", "çok")
        store.recalculate_all_statuses()
        assert store.get("cok").status == CorrectionStatus.ACTIVE

    def test_active_decays_to_deprecated(self, store):
        """Test that an unused active record is eventually deprecated."""
        for _ in range(5):
            store.add("guzel", "güzel")
        store.recalculate_all_statuses()

        # 5 * exp(-0.01 * 400) < 0.1
        store.recalculate_all_statuses(now=NOW + timedelta(days=400))
        assert store.get("guzel").status == CorrectionStatus.DEPRECATED

    def test_active_falls_back_to_confirmed(self, store):
        """Test that moderate decay demotes active to confirmed."""
        store.add_manual("cok", "çok")
        store.promote("cok")

        # 1 * exp(-0.01 * 100) = 0.37
        store.recalculate_all_statuses(now=NOW + timedelta(days=100))
        assert store.get("cok").status == CorrectionStatus.CONFIRMED

    def test_reverts_deprecate(self, store):
        """Test that reverts drive confidence below the deprecation threshold."""
        for _ in range(4):
            store.add("guzel", "güzel")
        store.recalculate_all_statuses()
        store.report_revert("guzel", "GÜZEL")
        store.report_revert("guzel", "güzel")

        store.recalculate_all_statuses()
        assert store.get("guzel").status == CorrectionStatus.DEPRECATED
        assert store.active_map() == {}

    def test_deprecated_is_terminal(self, store):
        """Test that recalculation never revives a deprecated record."""
        for _ in range(5):
            store.add("guzel", "güzel")
        store.demote("guzel")

        store.recalculate_all_statuses()
        assert store.get("guzel").status == CorrectionStatus.DEPRECATED

    def test_active_map_requires_confidence(self, store):
        """Test that a stale active record is not applied before recalculation."""
        store.add_manual("cok", "çok")
        store.promote("cok")

        assert store.active_map() == {"cok": "çok"}
        assert store.active_map(now=NOW + timedelta(days=100)) == {}


class TestManualOperations:
    """Tests for promote, demote, remove and revert."""

    def test_promote_pending(self, store):
        """Test forcing a pending record active."""
        store.add("guzel", "güzel")
        assert store.promote("guzel") is True

        record = store.get("guzel")
        assert record.status == CorrectionStatus.ACTIVE
        assert record.source == CorrectionSource.MANUAL

    def test_promote_deprecated_refused(self, store):
        """Test that deprecated records cannot be promoted."""
        store.add("guzel", "güzel")
        store.demote("guzel")
        assert store.promote("guzel") is False
        assert store.get("guzel").status == CorrectionStatus.DEPRECATED

    def test_promote_unknown(self, store):
        """Test promoting a missing record."""
        assert store.promote("missing") is False

    def test_remove(self, store):
        """Test deleting a record."""
        store.add("guzel", "güzel")
        assert store.remove("GUZEL") is True
        assert store.remove("guzel") is False
        assert len(store) == 0

    def test_revert_requires_matching_right(self, store):
        """Test that a revert only counts for the stored replacement."""
        store.add("guzel", "güzel")
        assert store.report_revert("guzel", "gözel") is False
        assert store.report_revert("Guzel", "Güzel") is True
        assert store.get("guzel").revert_count == 1

    def test_get_returns_copy(self, store):
        """Test that callers cannot mutate stored records."""
        store.add("guzel", "güzel")
        store.get("guzel").count = 99
        assert store.get("guzel").count == 1


class TestCleanup:
    """Tests for purging deprecated records."""

    def test_purges_old_deprecated(self, store):
        """Test that deprecated records unseen for 90+ days are removed."""
        store.add("guzel", "güzel")
        store.add("gun", "gün")
        store.demote("guzel")

        removed = store.cleanup_deprecated(now=NOW + timedelta(days=91))

        assert removed == 1
        assert store.get("guzel") is None
        assert store.get("gun") is not None

    def test_keeps_recent_deprecated(self, store):
        """Test that recently seen deprecated records survive."""
        store.add("guzel", "güzel")
        store.demote("guzel")
        assert store.cleanup_deprecated(now=NOW + timedelta(days=89)) == 0
        assert store.get("guzel") is not None


class TestMaps:
    """Tests for active_map and full_map."""

    def test_full_map_includes_every_status(self, store):
        """Test that full_map ignores status."""
        store.add("guzel", "güzel")
        store.add("gun", "gün")
        store.demote("gun")
        assert store.full_map() == {"guzel": "güzel", "gun": "gün"}
        assert store.active_map() == {}


class TestDocuments:
    """Tests for snapshots, migration, export and import."""

    def test_document_round_trip(self, store):
        """Test that to_document/from_document preserves records."""
        for _ in range(3):
            store.add("guzel", "güzel")
        store.add_stem("ogretmen", "öğretmen")
        store.report_revert("guzel", "güzel")

        restored = CorrectionStore.from_document(store.to_document())

        assert [r.to_dict() for r in restored.all()] == [r.to_dict() for r in store.all()]

    def test_document_version(self, store):
        """Test that snapshots carry the schema version."""
        assert store.to_document() == {"version": 2, "corrections": []}

    def test_migrates_version_one(self):
        """Test that old documents get first_seen, source and promoted statuses."""
        last_seen = to_millis(NOW)
        document = {
            "version": 1,
            "corrections": [
                {"wrong": "guzel", "right": "güzel", "count": 4, "last_seen": last_seen},
                {"wrong": "gun", "right": "gün", "count": 1, "last_seen": last_seen},
                {"wrong": "cok", "right": "çok", "count": 0, "last_seen": last_seen},
                {
                    "wrong": "ozel",
                    "right": "özel",
                    "count": 2,
                    "last_seen": last_seen,
                    "status": "Deprecated",
                },
            ],
        }

        store = CorrectionStore.from_document(document)

        guzel = store.get("guzel")
        assert guzel.status == CorrectionStatus.ACTIVE
        assert guzel.source == CorrectionSource.DIFF
        assert guzel.first_seen == guzel.last_seen
        assert store.get("gun").status == CorrectionStatus.CONFIRMED
        assert store.get("cok").status == CorrectionStatus.PENDING
        assert store.get("ozel").status == CorrectionStatus.DEPRECATED

    def test_current_version_not_migrated(self):
        """Test that v2 pending records stay pending."""
        document = {
            "version": 2,
            "corrections": [
                {
                    "wrong": "guzel",
                    "right": "güzel",
                    "count": 5,
                    "first_seen": to_millis(NOW),
                    "last_seen": to_millis(NOW),
                    "status": "pending",
                    "source": "diff",
                }
            ],
        }
        store = CorrectionStore.from_document(document)
        assert store.get("guzel").status == CorrectionStatus.PENDING

    def test_export_import(self, store):
        """Test that an export can be imported into another store."""
        store.add("guzel", "güzel")
        exported = store.export_json()
        assert json.loads(exported)["version"] == 2

        other = CorrectionStore(clock=lambda: NOW)
        other.add("gun", "gün")
        assert other.import_json(exported) == 1
        assert other.full_map() == {"guzel": "güzel"}

    def test_malformed_import_leaves_store_intact(self, store):
        """Test that a failed import changes nothing."""
        store.add("guzel", "güzel")

        with pytest.raises(ImportFormatError):
            store.import_json("not json")
        with pytest.raises(ImportFormatError):
            store.import_json('{"corrections": [{"right": "x"}]}')
        with pytest.raises(ImportFormatError):
            store.import_json("[1, 2]")

        assert store.full_map() == {"guzel": "güzel"}

    @pytest.mark.parametrize(
        "entries",
        [
            [{"wrong": "abc", "right": "ABC"}],
            [{"wrong": "", "right": "x"}],
            [{"wrong": "guzel", "right": "  "}],
            [{"wrong": "guzel", "right": "güzel"}, {"wrong": "Guzel", "right": "güzel"}],
            [{"wrong": "guzel", "right": "güzel", "status": "maybe"}],
            [{"wrong": "guzel", "right": "güzel", "source": "guess"}],
            [{"wrong": "guzel", "right": "güzel", "count": -1}],
        ],
    )
    def test_import_rejects_invalid_entries(self, store, entries):
        """Test that imports obey the same rules as writes."""
        store.add("gun", "gün")

        with pytest.raises(ImportFormatError):
            store.import_json(json.dumps({"version": 2, "corrections": entries}))

        assert store.full_map() == {"gun": "gün"}

    def test_import_without_timestamps(self, store):
        """Test that records with no recorded time count as seen now."""
        document = {
            "version": 2,
            "corrections": [{"wrong": "yanlis", "right": "doğru", "count": 5, "status": "active"}],
        }

        store.import_json(json.dumps(document))

        record = store.get("yanlis")
        assert record.last_seen == NOW
        assert record.first_seen == NOW
        assert store.confidence(record) == pytest.approx(5.0)
        assert store.active_map() == {"yanlis": "doğru"}

    def test_import_dotted_capital_key(self, store):
        """Test that imported keys are folded like written ones."""
        store.import_json(json.dumps({"corrections": [{"wrong": "İstanbl", "right": "İstanbul"}]}))

        assert store.full_map() == {"istanbl": "İstanbul"}
        assert store.get("İSTANBL") is not None


class TestDottedCapitalKeys:
    """Tests for keys of words starting with the Turkish dotted capital I."""

    def test_key_keeps_word_length(self, store):
        """Test that "İ" folds to a single "i"."""
        store.add_manual("İstanbl", "İstanbul")

        assert store.full_map() == {"istanbl": "İstanbul"}
        assert "istanbl" in store
        assert "İstanbl" in store

    def test_self_correction_across_dotted_case(self, store):
        """Test that "İ" and "i" spellings of one word are the same word."""
        assert store.add("İzmir", "izmir") is False
        assert len(store) == 0

    def test_revert_matches_dotted_capital(self, store):
        """Test that reverts find the record whatever the case of "İ"."""
        store.add("istanbl", "İstanbul")

        assert store.report_revert("İstanbl", "İSTANBUL") is True
        assert store.get("istanbl").revert_count == 1


class TestConcurrency:
    """Tests for concurrent access."""

    def test_parallel_adds(self, store):
        """Test that concurrent writers lose no updates."""

        def worker():
            for _ in range(50):
                store.add("guzel", "güzel")
                store.active_map()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.get("guzel").count == 200
