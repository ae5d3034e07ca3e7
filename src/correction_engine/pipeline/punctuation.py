"""Sentence punctuation and connective commas."""

from __future__ import annotations

from correction_engine.locale import LocaleRules
from correction_engine.text.words import fold_case

SENTENCE_ENDINGS = ".!?"

# Unpunctuated tails at least this long are split at connectives
LONG_RUN_WORDS = 15
MIN_WORDS_AFTER_MARKER = 3

# Characters that may follow a connective for it to count as a whole word
_WORD_END = " ,.?!"


def ends_with_punctuation(text: str) -> bool:
    return text.endswith(tuple(SENTENCE_ENDINGS))


def ensure_ending_punctuation(text: str) -> str:
    """Trim ``text`` and add a period unless it already ends a sentence."""
    trimmed = text.strip()
    if not trimmed or ends_with_punctuation(trimmed):
        return trimmed
    return trimmed + "."


def heuristic_split(text: str, markers: tuple[str, ...]) -> list[str]:
    """Split a long unpunctuated run before connective words.

    Each marker is tried once, in order, against the part of the text not
    yet split off. A split is only made when at least three words follow
    the marker; the marker starts the next part.

    Returns:
        The parts, or ``[text]`` if no split was made
    """
    parts: list[str] = []
    remaining = text

    for marker in markers:
        pos = fold_case(remaining).find(marker)
        if pos < 0:
            continue
        after = remaining[pos + len(marker) :]
        if len(after.split()) < MIN_WORDS_AFTER_MARKER:
            continue
        before = remaining[:pos].strip()
        if before:
            parts.append(before)
        remaining = remaining[pos:]

    if remaining.strip():
        parts.append(remaining.strip())

    if len(parts) <= 1:
        return [text]
    return parts


def is_decimal_point(text: str, i: int) -> bool:
    """True when ``text[i]`` separates digits, as in "3.5" or "1,000"."""
    return (
        text[i] in ".,"
        and 0 < i < len(text) - 1
        and text[i - 1].isdigit()
        and text[i + 1].isdigit()
    )


def split_into_sentences(text: str, locale: LocaleRules | None = None) -> list[str]:
    """Split text after every '.', '!' or '?', keeping the marks.

    A trailing unpunctuated run of 15 or more words is further split at the
    locale's connective markers.
    """
    sentences: list[str] = []
    current: list[str] = []

    for i, ch in enumerate(text):
        current.append(ch)
        if ch in SENTENCE_ENDINGS and not is_decimal_point(text, i):
            sentences.append("".join(current))
            current = []

    tail = "".join(current)
    if tail.strip():
        markers = locale.split_markers if locale is not None else ()
        if markers and len(tail.split()) >= LONG_RUN_WORDS:
            sentences.extend(heuristic_split(tail, markers))
        else:
            sentences.append(tail)

    return sentences


def insert_comma_before_word(text: str, word: str) -> str:
    """Put a comma before each whole-word occurrence of a connective.

    Occurrences already preceded by a comma are left alone.
    """
    lower = fold_case(text)

    search = " " + word
    parts: list[str] = []
    last_end = 0
    idx = lower.find(search)

    while idx >= 0:
        end = idx + len(search)
        if end >= len(text) or text[end] in _WORD_END:
            parts.append(text[last_end:idx])
            if not text[last_end:idx].rstrip().endswith(","):
                parts.append(",")
            parts.append(text[idx:end])
            last_end = end
        idx = lower.find(search, idx + 1)

    parts.append(text[last_end:])
    return "".join(parts)


def insert_comma_before_phrase(text: str, phrase: str) -> str:
    """Put a comma before the first occurrence of a multi-word connective."""
    lower = fold_case(text)

    idx = lower.find(" " + phrase)
    if idx < 0 or text[:idx].rstrip().endswith(","):
        return text
    return text[:idx] + "," + text[idx:]


def add_commas(text: str, locale: LocaleRules) -> str:
    for word in locale.comma_words:
        text = insert_comma_before_word(text, word)
    for phrase in locale.comma_phrases:
        text = insert_comma_before_phrase(text, phrase)
    return text


def sentence_terminator(sentence: str, locale: LocaleRules) -> str:
    """Pick '?', '!' or '.' for an unpunctuated sentence."""
    words = sentence.lower().split()
    if not words:
        return "."
    if words[-1] in locale.question_suffixes:
        return "?"
    if words[0] in locale.question_words:
        return "?"
    if words[0] in locale.exclamation_words:
        return "!"
    return "."


def punctuate_sentence(sentence: str, locale: LocaleRules, auto_comma: bool = True) -> str:
    """Terminate one sentence and add connective commas.

    Sentences that already end in punctuation only get commas.
    """
    trimmed = sentence.strip()
    if not trimmed:
        return ""

    if not ends_with_punctuation(trimmed):
        trimmed += sentence_terminator(trimmed, locale)
    if auto_comma:
        trimmed = add_commas(trimmed, locale)
    return trimmed


def _has_sentence_rules(locale: LocaleRules) -> bool:
    return bool(locale.question_words or locale.question_suffixes or locale.comma_words)


def add_punctuation(
    text: str,
    locale: LocaleRules,
    auto_comma: bool = True,
    paragraph_break: bool = False,
) -> str:
    """Punctuate every sentence of ``text``.

    Locales without sentence rules only get a closing period per sentence.

    Args:
        text: Text to punctuate
        locale: Rules for question/exclamation detection and commas
        auto_comma: Insert commas before connectives
        paragraph_break: Join sentences with newlines instead of spaces

    Returns:
        The punctuated text
    """
    if not text:
        return text

    rich = _has_sentence_rules(locale)
    parts = []
    for sentence in split_into_sentences(text, locale):
        if not sentence.strip():
            continue
        if rich:
            parts.append(punctuate_sentence(sentence, locale, auto_comma))
        else:
            parts.append(ensure_ending_punctuation(sentence))

    return ("\n" if paragraph_break else " ").join(parts)
