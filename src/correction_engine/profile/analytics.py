"""Pure functions computing profile statistics from transcript text."""

from __future__ import annotations

from typing import Iterable, Sequence

from correction_engine.locale import DEFAULT_LOCALE, LocaleRules
from correction_engine.profile.models import DOMAIN_PRIORITY, Domain, NgramEntry
from correction_engine.text.words import fold_case

MAX_HISTORY_TEXTS = 100
DOMAIN_THRESHOLD = 5.0
MAX_NGRAMS = 500
MAX_FREQUENT_WORDS = 50
MIN_FREQUENT_WORD_LENGTH = 4


def recency_weight(index: int) -> float:
    """Weight of the ``index``-th most recent text."""
    if index < 10:
        return 3.0
    if index < 30:
        return 2.0
    return 1.0


def score_domains(
    history: Sequence[str],
    locale: LocaleRules | None = None,
) -> dict[Domain, float]:
    """Keyword scores per domain over the most recent texts.

    Each text counts the distinct domain keywords it contains, weighted by
    how recent it is. ``history`` is ordered newest first; only the first
    100 texts are considered.
    """
    locale = locale or DEFAULT_LOCALE
    keywords = {
        domain: locale.domain_keywords.get(domain.value, ()) for domain in DOMAIN_PRIORITY
    }
    scores = {domain: 0.0 for domain in DOMAIN_PRIORITY}

    for index, text in enumerate(history[:MAX_HISTORY_TEXTS]):
        weight = recency_weight(index)
        words = set(fold_case(text).split())
        for domain, domain_keywords in keywords.items():
            hits = sum(1 for keyword in domain_keywords if keyword in words)
            scores[domain] += hits * weight

    return scores


def detect_domain(history: Sequence[str], locale: LocaleRules | None = None) -> Domain:
    """Classify recent transcripts into a subject domain.

    Returns ``Domain.GENERAL`` unless some domain scores at least 5.
    """
    scores = score_domains(history, locale)
    best = max(scores.values(), default=0.0)
    if best < DOMAIN_THRESHOLD:
        return Domain.GENERAL
    for domain in DOMAIN_PRIORITY:
        if scores[domain] == best:
            return domain
    return Domain.GENERAL


def extract_ngrams(text: str) -> list[tuple[str, int]]:
    """Count lowercase bigrams and trigrams in ``text``.

    Single-character tokens are dropped before windows are formed.

    Returns:
        ``(ngram, count)`` pairs in order of first occurrence
    """
    words = [fold_case(w) for w in text.split() if len(w) > 1]
    counts: dict[str, int] = {}
    for size in (2, 3):
        for start in range(len(words) - size + 1):
            ngram = " ".join(words[start : start + size])
            counts[ngram] = counts.get(ngram, 0) + 1
    return list(counts.items())


def merge_ngrams(
    existing: Iterable[NgramEntry],
    new: Iterable[tuple[str, int]],
    limit: int = MAX_NGRAMS,
) -> list[NgramEntry]:
    """Add new counts to an n-gram list and keep the most frequent.

    The sort is stable, so equally frequent n-grams keep their order.
    """
    merged = {entry.ngram: entry.count for entry in existing}
    for ngram, count in new:
        merged[ngram] = merged.get(ngram, 0) + count

    ordered = sorted(merged.items(), key=lambda item: item[1], reverse=True)
    return [NgramEntry(ngram=ngram, count=count) for ngram, count in ordered[:limit]]


def extract_frequent_words(text: str, locale: LocaleRules | None = None) -> list[str]:
    """Lowercase content words of ``text`` (longer than three characters)."""
    locale = locale or DEFAULT_LOCALE
    words = []
    for word in text.split():
        if len(word) < MIN_FREQUENT_WORD_LENGTH:
            continue
        word = fold_case(word)
        if not locale.is_stopword(word):
            words.append(word)
    return words


def merge_frequent_words(
    existing: Iterable[str],
    words: Iterable[str],
    limit: int = MAX_FREQUENT_WORDS,
) -> list[str]:
    """Rank words by frequency, giving each already-listed word one count.

    Returns:
        At most ``limit`` words, most frequent first
    """
    counts: dict[str, int] = {}
    for word in existing:
        counts[word] = counts.get(word, 0) + 1
    for word in words:
        counts[word] = counts.get(word, 0) + 1

    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ordered[:limit]]
