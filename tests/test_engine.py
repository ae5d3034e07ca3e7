"""Tests for the CorrectionEngine facade."""

import json
from datetime import datetime, timezone

import pytest

from correction_engine.config import EngineSettings
from correction_engine.corrections import CorrectionStatus
from correction_engine.engine import CorrectionEngine
from correction_engine.errors import ImportFormatError, PersistenceError, ValidationError
from correction_engine.profile import Domain
from correction_engine.prompt import LANGUAGE_EXEMPLARS
from correction_engine.storage import (
    CORRECTIONS_DOCUMENT,
    PROFILE_DOCUMENT,
    JsonFileStorage,
    MemoryStorage,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def save(self, name, data):
        raise PersistenceError(f"Cannot write {name}")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def engine(storage):
    engine = CorrectionEngine(storage, clock=lambda: NOW)
    engine.load()
    return engine


class TestProcessTranscript:
    """Tests for the transcription path."""

    def test_normalizes_and_records(self, engine, storage):
        """Test that a transcript is normalized, learned from and persisted."""
        result = engine.process_transcript("bugun hava cok guzel")

        assert result == "Bugun hava çok güzel."
        assert engine.get_correction("guzel").count == 1
        assert engine.profile_snapshot().total_transcriptions == 1
        assert CORRECTIONS_DOCUMENT in storage
        assert PROFILE_DOCUMENT in storage

    def test_rejected_transcript_not_counted(self, engine):
        """Test that hallucinations are not recorded in the profile."""
        assert engine.process_transcript("Altyazı M.K.") == ""
        assert engine.profile_snapshot().total_transcriptions == 0
        assert engine.profile.history() == []

    def test_language_override(self, engine):
        """Test processing with another recognizer language."""
        assert engine.process_transcript("how are you", language="en") == "How are you?"

    def test_active_corrections_applied(self, engine):
        """Test that corrections learned from edits are applied once active."""
        for _ in range(3):
            engine.learn_from_edit("bugun geldim", "bugün geldim")
        engine.run_maintenance()

        assert engine.get_correction("bugun").status == CorrectionStatus.ACTIVE
        assert engine.process_transcript("bugun geldim") == "Bugün geldim."

    def test_dotted_capital_correction_applied(self, engine):
        """Test a correction for a word starting with the Turkish "İ"."""
        engine.add_correction("İstanbl", "İstanbul")
        engine.promote_correction("İstanbl")

        assert engine.process_transcript("İstanbl çok kalabalık") == "İstanbul çok kalabalık."

    def test_dotted_capital_learned_from_edit(self, engine):
        """Test that an edit of a sentence-initial "İ" word is applied once active."""
        for _ in range(3):
            engine.learn_from_edit("İnsanlr geldi", "İnsanlar geldi")
        engine.run_maintenance()

        assert engine.process_transcript("İnsanlr geldi") == "İnsanlar geldi."

    def test_unlisted_language_learning(self, engine):
        """Test that stop-words are not learned for a language without its own rules."""
        learned = engine.learn_from_edit("ve ben bir ile", "vee benn birr ilee", language="de")

        assert learned.direct == []
        assert engine.list_corrections() == []

    def test_pending_corrections_not_applied(self, engine):
        """Test that a single observation is not applied."""
        engine.learn_from_edit("bugun geldim", "bugün geldim")
        assert engine.process_transcript("bugun geldim") == "Bugun geldim."

    def test_maintenance_every_interval(self, storage):
        """Test that the lifecycle sweep runs every N transcriptions."""
        settings = EngineSettings(maintenance_interval=2)
        engine = CorrectionEngine(storage, settings, clock=lambda: NOW)
        engine.add_correction("kalem", "kâlem")

        engine.process_transcript("merhaba dünya")
        assert engine.get_correction("kalem").status == CorrectionStatus.PENDING

        engine.process_transcript("iyi akşamlar")
        assert engine.get_correction("kalem").status == CorrectionStatus.ACTIVE

    def test_save_failure_is_not_fatal(self):
        """Test that persistence errors do not interrupt processing."""
        engine = CorrectionEngine(FailingStorage(), clock=lambda: NOW)
        assert engine.process_transcript("bugun hava cok guzel") == "Bugun hava çok güzel."


class TestLearnFromEdit:
    """Tests for the edit path."""

    def test_records_direct_and_stem(self, engine):
        """Test that direct and stem pairs reach the store."""
        learned = engine.learn_from_edit("ogretmenler geldi", "öğretmenler geldi")

        assert learned.direct == [("ogretmenler", "öğretmenler")]
        assert engine.get_correction("ogretmenler").count == 1
        assert engine.get_correction("ogretmen").count == 0
        assert engine.profile_snapshot().total_corrections == 1

    def test_edit_feeds_profile(self, engine):
        """Test that edited text updates frequent words."""
        engine.learn_from_edit("toplanti notlari", "toplantı notları")
        assert "toplantı" in engine.profile_snapshot().frequent_words
        assert engine.profile_snapshot().total_transcriptions == 0


class TestCorrectionManagement:
    """Tests for manual correction operations."""

    def test_add_correction(self, engine):
        """Test adding a manual correction."""
        engine.add_correction("yapay zeka", "yapay zekâ")
        record = engine.get_correction("yapay zeka")
        assert record.right == "yapay zekâ"

    @pytest.mark.parametrize("wrong,right", [("", "x"), ("x", " "), ("Test", "test")])
    def test_add_correction_rejects(self, engine, wrong, right):
        """Test that invalid pairs raise ValidationError."""
        with pytest.raises(ValidationError):
            engine.add_correction(wrong, right)
        assert engine.list_corrections() == []

    def test_promote_demote_remove(self, engine):
        """Test the status overrides."""
        engine.add_correction("kalem", "kâlem")

        assert engine.promote_correction("kalem") is True
        assert engine.get_correction("kalem").status == CorrectionStatus.ACTIVE
        assert engine.demote_correction("kalem") is True
        assert engine.get_correction("kalem").status == CorrectionStatus.DEPRECATED
        assert engine.remove_correction("kalem") is True
        assert engine.remove_correction("kalem") is False

    def test_report_revert(self, engine):
        """Test revert bookkeeping."""
        engine.add_correction("kalem", "kâlem")
        assert engine.report_revert("kalem", "kâlem") is True
        assert engine.get_correction("kalem").revert_count == 1
        assert engine.report_revert("missing", "x") is False

    def test_list_includes_confidence(self, engine):
        """Test that listed corrections carry their confidence."""
        engine.add_correction("kalem", "kâlem")
        views = engine.list_corrections()
        assert len(views) == 1
        assert views[0].confidence == pytest.approx(1.0)

    def test_export_import(self, engine):
        """Test moving corrections between engines."""
        engine.add_correction("kalem", "kâlem")
        exported = engine.export_corrections()

        other = CorrectionEngine(MemoryStorage(), clock=lambda: NOW)
        assert other.import_corrections(exported) == 1
        assert other.get_correction("kalem").right == "kâlem"
        assert CORRECTIONS_DOCUMENT in other.storage

    def test_malformed_import(self, engine):
        """Test that a bad import raises and keeps existing corrections."""
        engine.add_correction("kalem", "kâlem")
        with pytest.raises(ImportFormatError):
            engine.import_corrections("{broken")
        assert engine.get_correction("kalem") is not None

    def test_reset(self, engine, storage):
        """Test that reset clears and persists empty state."""
        engine.add_correction("kalem", "kâlem")
        engine.process_transcript("hasta doktor tedavi")

        engine.reset()

        assert engine.list_corrections() == []
        assert engine.profile_snapshot().total_transcriptions == 0
        assert storage.load(CORRECTIONS_DOCUMENT)["corrections"] == []


class TestPersistence:
    """Tests for load and save."""

    def test_state_survives_reload(self, engine, storage):
        """Test that a new engine sees the persisted state."""
        engine.add_correction("kalem", "kâlem")
        engine.process_transcript("hasta doktor tedavi")

        reloaded = CorrectionEngine(storage, clock=lambda: NOW)
        reloaded.load()

        assert reloaded.get_correction("kalem").right == "kâlem"
        assert reloaded.profile_snapshot() == engine.profile_snapshot()
        assert reloaded.profile.history() == engine.profile.history()
        assert reloaded.domain_info().detected == Domain.MEDICAL

    def test_corrupted_state_starts_empty(self, storage):
        """Test that malformed snapshots are replaced by empty state."""
        storage.save(CORRECTIONS_DOCUMENT, {"corrections": "nope"})
        storage.save(PROFILE_DOCUMENT, {"total_transcriptions": "many"})

        engine = CorrectionEngine(storage)
        engine.load()

        assert engine.list_corrections() == []
        assert engine.profile_snapshot().total_transcriptions == 0

    def test_unreadable_file_starts_empty(self, tmp_path):
        """Test that invalid JSON on disk is tolerated."""
        (tmp_path / "user_corrections.json").write_text("{not json", encoding="utf-8")

        engine = CorrectionEngine(JsonFileStorage(tmp_path))
        engine.load()

        assert engine.list_corrections() == []

    def test_json_files_written(self, tmp_path):
        """Test the on-disk layout."""
        engine = CorrectionEngine(JsonFileStorage(tmp_path), clock=lambda: NOW)
        engine.add_correction("kalem", "kâlem")
        engine.process_transcript("merhaba dünya")

        corrections = json.loads((tmp_path / "user_corrections.json").read_text(encoding="utf-8"))
        profile = json.loads((tmp_path / "user_profile.json").read_text(encoding="utf-8"))

        assert corrections["version"] == 2
        assert corrections["corrections"][0]["wrong"] == "kalem"
        assert profile["total_transcriptions"] == 1
        assert profile["recent_texts"] == ["Merhaba dünya."]

    def test_prompt_follows_loaded_profile(self, engine, storage):
        """Test that the prompt builder uses the reloaded profile."""
        engine.process_transcript("hasta doktor tedavi")

        reloaded = CorrectionEngine(storage)
        reloaded.load()

        assert "Hasta muayene edildi." in reloaded.build_prompt()

    def test_default_prompt(self, engine):
        """Test the prompt of a fresh engine."""
        assert engine.build_prompt() == LANGUAGE_EXEMPLARS["tr"]
        assert engine.prompt_preview("en").base_prompt == LANGUAGE_EXEMPLARS["en"]
