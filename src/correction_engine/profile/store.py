"""Owned, thread-safe user profile."""

from __future__ import annotations

from collections import deque
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from correction_engine.errors import ImportFormatError
from correction_engine.locale import DEFAULT_LOCALE, LocaleRules
from correction_engine.locking import ReadWriteLock
from correction_engine.logging import get_logger
from correction_engine.profile.analytics import (
    detect_domain,
    extract_frequent_words,
    extract_ngrams,
    merge_frequent_words,
    merge_ngrams,
    score_domains,
)
from correction_engine.profile.models import (
    DOMAIN_EXPLANATIONS,
    Domain,
    DomainInfo,
    NgramEntry,
    UserProfile,
)

logger = get_logger(__name__)

SCHEMA_VERSION = 1


class ProfileStore:
    """User profile plus the recent transcripts used for domain detection.

    Recent history is kept newest first and bounded to ``history_size``.
    """

    def __init__(
        self,
        profile: UserProfile | None = None,
        history: list[str] | None = None,
        locale: LocaleRules | None = None,
        history_size: int = 100,
    ):
        self._lock = ReadWriteLock()
        self._locale = locale or DEFAULT_LOCALE
        self._profile = profile or UserProfile()
        self._history: deque[str] = deque(history or [], maxlen=history_size)

    @property
    def locale(self) -> LocaleRules:
        return self._locale

    def _absorb_text(self, text: str) -> None:
        # Caller holds the write lock
        profile = self._profile
        profile.ngrams = merge_ngrams(profile.ngrams, extract_ngrams(text))
        profile.frequent_words = merge_frequent_words(
            profile.frequent_words, extract_frequent_words(text, self._locale)
        )

    def record_transcription(self, text: str) -> int:
        """Fold a processed transcript into the profile.

        Updates n-grams, frequent words and the recent history, re-detects
        the domain and counts the transcription.

        Returns:
            The new total transcription count
        """
        with self._lock.write():
            self._absorb_text(text)
            self._history.appendleft(text)

            previous = self._profile.domain
            self._profile.domain = detect_domain(list(self._history), self._locale)
            if self._profile.domain != previous:
                logger.info(
                    f"Domain changed: {previous.value} -> {self._profile.domain.value}"
                )

            self._profile.total_transcriptions += 1
            return self._profile.total_transcriptions

    def record_edit(self, text: str) -> None:
        """Fold user-edited text into n-grams and frequent words."""
        with self._lock.write():
            self._absorb_text(text)

    def increment_corrections(self, amount: int = 1) -> None:
        with self._lock.write():
            self._profile.total_corrections += amount

    def snapshot(self) -> UserProfile:
        """Detached copy of the profile."""
        with self._lock.read():
            return self._profile.model_copy(deep=True)

    def history(self) -> list[str]:
        with self._lock.read():
            return list(self._history)

    def ngram_stats(self) -> list[NgramEntry]:
        with self._lock.read():
            return [entry.model_copy() for entry in self._profile.ngrams]

    def domain_info(self) -> DomainInfo:
        """Current domain with live keyword scores and an explanation."""
        with self._lock.read():
            domain = self._profile.domain
            history = list(self._history)

        return DomainInfo(
            detected=domain,
            scores=score_domains(history, self._locale),
            explanation=DOMAIN_EXPLANATIONS[domain],
        )

    def reset(self) -> None:
        """Forget all statistics and history."""
        with self._lock.write():
            self._profile = UserProfile()
            self._history.clear()

    def to_document(self) -> dict[str, Any]:
        """Detached, JSON-ready snapshot of profile and history."""
        with self._lock.read():
            document = self._profile.model_dump(mode="json")
            document["recent_texts"] = list(self._history)
        document["version"] = SCHEMA_VERSION
        return document

    @classmethod
    def from_document(
        cls,
        document: Any,
        locale: LocaleRules | None = None,
        history_size: int = 100,
    ) -> "ProfileStore":
        """Rebuild a profile store from ``to_document`` output.

        Raises:
            ImportFormatError: If the document is not a valid profile
        """
        if not isinstance(document, dict):
            raise ImportFormatError("Profile document must be an object")

        data = {k: v for k, v in document.items() if k not in ("version", "recent_texts")}
        history = document.get("recent_texts") or []
        try:
            profile = UserProfile.model_validate(data)
        except PydanticValidationError as e:
            raise ImportFormatError(f"Invalid profile document: {e}") from e
        if not isinstance(history, list):
            raise ImportFormatError("Profile 'recent_texts' must be a list")

        return cls(
            profile=profile,
            history=[str(text) for text in history],
            locale=locale,
            history_size=history_size,
        )

    @property
    def domain(self) -> Domain:
        with self._lock.read():
            return self._profile.domain
