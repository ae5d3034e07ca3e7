"""Learn corrections by comparing text before and after an edit.

Two paths feed the correction store:

* ``learn_from_diff`` compares a transcript with the user's edited version
  and also infers stem-level corrections from suffixed word pairs.
* ``learn_pipeline_corrections`` compares raw recognizer output with the
  pipeline's output so fixes the pipeline made are remembered as well.

Both only accept near-miss spellings (edit distance 1 or 2) between
non-stop-words of at least three characters.
"""

from __future__ import annotations

from typing import NamedTuple

from correction_engine.locale import DEFAULT_LOCALE, LocaleRules
from correction_engine.logging import get_logger
from correction_engine.text.distance import align, edit_distance
from correction_engine.text.words import fold_case

logger = get_logger(__name__)

MIN_WORD_LENGTH = 3
MAX_EDIT_DISTANCE = 2

_EDGE_PUNCTUATION = ".,!?\"'"


class LearnedCorrections(NamedTuple):
    """Correction pairs extracted from one edit."""

    direct: list[tuple[str, str]]
    stem: list[tuple[str, str]]


def is_stopword(word: str, locale: LocaleRules | None = None) -> bool:
    return (locale or DEFAULT_LOCALE).is_stopword(fold_case(word))


def _paired_tokens(before: list[str], after: list[str]) -> list[tuple[str, str]]:
    """Pair tokens positionally when counts match, else by alignment."""
    if len(before) == len(after):
        return list(zip(before, after))
    return [(b, a) for b, a in align(before, after) if b is not None and a is not None]


def _is_near_miss(before: str, after: str) -> bool:
    return 0 < edit_distance(before, after) <= MAX_EDIT_DISTANCE


def learn_from_diff(
    original: str,
    edited: str,
    locale: LocaleRules | None = None,
) -> LearnedCorrections:
    """Extract correction pairs from a transcript and its edited version.

    Tokens are lowercased whitespace-separated words. A pair yields a direct
    correction when its words differ by one or two edits. When both words
    carry the same suffix and only their stems differ slightly, the stem
    pair is reported as well so other inflections can be fixed later.

    Args:
        original: Text as transcribed
        edited: Text as corrected by the user
        locale: Rules for stop-words and suffix stripping

    Returns:
        Direct and stem-level ``(wrong, right)`` pairs in order of discovery
    """
    locale = locale or DEFAULT_LOCALE
    original_words = [fold_case(w) for w in original.split()]
    edited_words = [fold_case(w) for w in edited.split()]

    learned = LearnedCorrections(direct=[], stem=[])
    for before, after in _paired_tokens(original_words, edited_words):
        _process_pair(before, after, locale, learned)

    if learned.direct or learned.stem:
        logger.debug(
            "Learned corrections from edit",
            extra={"direct": len(learned.direct), "stem": len(learned.stem)},
        )
    return learned


def _process_pair(
    before: str,
    after: str,
    locale: LocaleRules,
    learned: LearnedCorrections,
) -> None:
    if before == after or len(before) < MIN_WORD_LENGTH:
        return
    if locale.is_stopword(before) or locale.is_stopword(after):
        return

    if _is_near_miss(before, after):
        learned.direct.append((before, after))

    before_stem, before_suffix = locale.strip_suffixes(before)
    after_stem, after_suffix = locale.strip_suffixes(after)
    if not before_suffix or before_suffix != after_suffix or before_stem == after_stem:
        return
    if len(before_stem) < MIN_WORD_LENGTH or not _is_near_miss(before_stem, after_stem):
        return

    known = {wrong for wrong, _ in learned.direct} | {wrong for wrong, _ in learned.stem}
    if before_stem not in known:
        learned.stem.append((before_stem, after_stem))


def learn_pipeline_corrections(
    before: str,
    after: str,
    locale: LocaleRules | None = None,
) -> list[tuple[str, str]]:
    """Extract near-miss word fixes the pipeline made to a transcript.

    Surrounding punctuation is ignored so that a sentence-final period added
    by the pipeline does not hide a spelling fix on the last word.
    """
    locale = locale or DEFAULT_LOCALE
    before_words = [fold_case(w) for w in before.split()]
    after_words = [fold_case(w) for w in after.split()]

    corrections = []
    for raw_before, raw_after in _paired_tokens(before_words, after_words):
        b = raw_before.strip(_EDGE_PUNCTUATION)
        a = raw_after.strip(_EDGE_PUNCTUATION)
        if len(b) < MIN_WORD_LENGTH or not a or b == a:
            continue
        if locale.is_stopword(b) or locale.is_stopword(a):
            continue
        if _is_near_miss(b, a):
            corrections.append((b, a))
    return corrections
