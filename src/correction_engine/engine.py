"""Correction engine facade.

``CorrectionEngine`` owns one correction store, one profile store, the
text pipeline and the prompt builder, and persists the two stores through
a ``SnapshotStorage``. Host applications create one engine and call it
from their transcription and edit handlers; nothing here is global.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from correction_engine.config import EngineSettings
from correction_engine.corrections import (
    CorrectionRecord,
    CorrectionStore,
    CorrectionView,
    LearnedCorrections,
    learn_from_diff,
)
from correction_engine.corrections.models import utc_now
from correction_engine.errors import (
    ErrorContext,
    ImportFormatError,
    PersistenceError,
    ValidationError,
)
from correction_engine.locale import LocaleRules, get_locale
from correction_engine.logging import (
    LogContext,
    get_logger,
    log_operation_complete,
    log_operation_failed,
    log_operation_start,
)
from correction_engine.pipeline import TextPipeline
from correction_engine.profile import DomainInfo, NgramEntry, ProfileStore, UserProfile
from correction_engine.prompt import DynamicPromptBuilder, DynamicPromptPreview
from correction_engine.storage import CORRECTIONS_DOCUMENT, PROFILE_DOCUMENT, SnapshotStorage
from correction_engine.text import fold_case

logger = get_logger(__name__)


class CorrectionEngine:
    """Adaptive correction and normalization for one user."""

    def __init__(
        self,
        storage: SnapshotStorage,
        settings: EngineSettings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the engine with empty stores.

        Call ``load()`` to restore persisted state.

        Args:
            storage: Where snapshots are read from and written to
            settings: Engine settings (defaults if not given)
            clock: Source of the current time, injectable for tests
        """
        self.storage = storage
        self.settings = settings or EngineSettings()
        self.clock = clock
        self.corrections = CorrectionStore(clock=clock)
        self.profile = self._new_profile()
        self.pipeline = TextPipeline(self.settings.pipeline)
        self.prompt_builder = DynamicPromptBuilder(self.profile, self.settings.max_prompt_length)

    @property
    def locale(self) -> LocaleRules:
        return get_locale(self.settings.language)

    def _new_profile(self, document: dict | None = None) -> ProfileStore:
        if document is None:
            return ProfileStore(locale=self.locale, history_size=self.settings.history_size)
        return ProfileStore.from_document(
            document, locale=self.locale, history_size=self.settings.history_size
        )

    # ─── Persistence ───

    def load(self) -> None:
        """Restore both stores from storage.

        Missing, unreadable or malformed snapshots are logged and leave the
        affected store empty.
        """
        try:
            document = self.storage.load(CORRECTIONS_DOCUMENT)
            if document is not None:
                self.corrections.replace_from_document(document)
        except (PersistenceError, ImportFormatError) as e:
            logger.warning(f"Could not load corrections, starting empty: {e}")
            self.corrections.reset()

        try:
            document = self.storage.load(PROFILE_DOCUMENT)
            self.profile = self._new_profile(document)
        except (PersistenceError, ImportFormatError) as e:
            logger.warning(f"Could not load profile, starting empty: {e}")
            self.profile = self._new_profile()
        self.prompt_builder.profile_store = self.profile

        logger.info(
            "Engine state loaded",
            extra={
                "corrections": len(self.corrections),
                "transcriptions": self.profile.snapshot().total_transcriptions,
            },
        )

    def save_corrections(self) -> None:
        """Persist the correction store; failures are logged and dropped."""
        try:
            self.storage.save(CORRECTIONS_DOCUMENT, self.corrections.to_document())
        except PersistenceError as e:
            log_operation_failed(logger, "save corrections", e, document=CORRECTIONS_DOCUMENT)

    def save_profile(self) -> None:
        """Persist the profile; failures are logged and dropped."""
        try:
            self.storage.save(PROFILE_DOCUMENT, self.profile.to_document())
        except PersistenceError as e:
            log_operation_failed(logger, "save profile", e, document=PROFILE_DOCUMENT)

    def save(self) -> None:
        self.save_corrections()
        self.save_profile()

    # ─── Transcription path ───

    def process_transcript(self, raw: str, language: str | None = None) -> str:
        """Normalize a transcript and learn from it.

        Active corrections are applied, near-miss fixes made by the pipeline
        are recorded, the profile absorbs the result, and every
        ``maintenance_interval`` transcriptions the correction lifecycle is
        swept.

        Args:
            raw: Recognizer output
            language: Recognizer language (defaults to the configured one)

        Returns:
            The normalized text, or "" if it was rejected as a hallucination
        """
        language = language or self.settings.language
        with LogContext(language=language):
            return self._process_transcript(raw, language)

    def _process_transcript(self, raw: str, language: str) -> str:
        result = self.pipeline.process_and_learn(raw, language, self.corrections.active_map())

        for wrong, right in result.learned:
            self.corrections.add(wrong, right)
        if result.learned:
            logger.info(f"Learned {len(result.learned)} corrections from pipeline")
            self.save_corrections()

        if not result.text:
            return result.text

        total = self.profile.record_transcription(result.text)
        if total % self.settings.maintenance_interval == 0:
            self.run_maintenance()
        self.save_profile()

        return result.text

    def run_maintenance(self) -> tuple[int, int]:
        """Recalculate statuses and purge stale deprecated records.

        Returns:
            ``(status changes, records purged)``
        """
        log_operation_start(logger, "maintenance")
        changed = self.corrections.recalculate_all_statuses()
        purged = self.corrections.cleanup_deprecated()
        self.save_corrections()
        log_operation_complete(logger, "maintenance", changed=changed, purged=purged)
        return changed, purged

    # ─── Edit path ───

    def learn_from_edit(
        self,
        original: str,
        edited: str,
        language: str | None = None,
    ) -> LearnedCorrections:
        """Learn from the user's edit of a transcript.

        Args:
            original: Text as transcribed
            edited: Text after the user's edit
            language: Locale for stop-words and suffixes

        Returns:
            The direct and stem corrections that were recorded
        """
        locale = get_locale(language or self.settings.language)
        log = logger.with_context(operation="learn_from_edit", locale=locale.code)
        learned = learn_from_diff(original, edited, locale)

        for wrong, right in learned.direct:
            self.corrections.add(wrong, right)
            self.profile.increment_corrections()
        for wrong, right in learned.stem:
            self.corrections.add_stem(wrong, right)

        if learned.direct or learned.stem:
            self.save_corrections()
            log.info(
                f"Learned {len(learned.direct)} corrections and "
                f"{len(learned.stem)} stem inferences from edit"
            )

        self.profile.record_edit(edited)
        self.save_profile()
        return learned

    # ─── Prompt ───

    def build_prompt(self, language: str | None = None) -> str:
        return self.prompt_builder.build(language or self.settings.language)

    def prompt_preview(self, language: str | None = None) -> DynamicPromptPreview:
        return self.prompt_builder.preview(language or self.settings.language)

    # ─── Correction management ───

    def add_correction(self, wrong: str, right: str) -> None:
        """Add a user-typed correction.

        Raises:
            ValidationError: If a word is empty or both words are the same
        """
        if not wrong.strip() or not right.strip():
            raise ValidationError("Cannot add a correction with an empty word")
        if fold_case(wrong.strip()) == fold_case(right.strip()):
            raise ValidationError(
                "Wrong and right words must differ", context={"word": wrong.strip()}
            )
        self.corrections.add_manual(wrong, right)
        self.save_corrections()
        logger.info(f"Correction added: {wrong.strip()} -> {right.strip()}")

    def remove_correction(self, wrong: str) -> bool:
        removed = self.corrections.remove(wrong)
        if removed:
            self.save_corrections()
            logger.info(f"Correction removed: {wrong}")
        return removed

    def report_revert(self, wrong: str, right: str) -> bool:
        reverted = self.corrections.report_revert(wrong, right)
        if reverted:
            self.save_corrections()
        return reverted

    def promote_correction(self, wrong: str) -> bool:
        promoted = self.corrections.promote(wrong)
        if promoted:
            self.save_corrections()
        return promoted

    def demote_correction(self, wrong: str) -> bool:
        demoted = self.corrections.demote(wrong)
        if demoted:
            self.save_corrections()
        return demoted

    def get_correction(self, wrong: str) -> CorrectionRecord | None:
        return self.corrections.get(wrong)

    def list_corrections(self) -> list[CorrectionView]:
        """All corrections with their current confidence."""
        return self.corrections.views()

    def export_corrections(self) -> str:
        return self.corrections.export_json()

    def import_corrections(self, text: str) -> int:
        """Replace all corrections with an exported document.

        Raises:
            ImportFormatError: If the document is invalid; nothing changes
        """
        with ErrorContext("import corrections", context={"bytes": len(text)}):
            count = self.corrections.import_json(text)
        self.save_corrections()
        return count

    def reset(self) -> None:
        """Forget all corrections and profile statistics."""
        self.corrections.reset()
        self.profile.reset()
        self.save()
        logger.info("Learning data reset")

    # ─── Profile ───

    def domain_info(self) -> DomainInfo:
        return self.profile.domain_info()

    def ngram_stats(self) -> list[NgramEntry]:
        return self.profile.ngram_stats()

    def profile_snapshot(self) -> UserProfile:
        return self.profile.snapshot()
