"""Unicode-aware whole-word matching and case handling.

Word boundaries are decided on letters, not on ``\\b``: apostrophes belong
to the word (Turkish attaches suffixes with them, "Ali'nin"), and accented
letters such as "ç" must stop "ok" from matching inside "çok".
"""

from __future__ import annotations

from typing import Callable

APOSTROPHES = ("'", "’")


def is_word_char(ch: str) -> bool:
    """True for characters that continue a word."""
    return ch.isalpha() or ch in APOSTROPHES


def _fold(ch: str) -> str:
    # One char in, one char out, so match offsets stay valid ("İ" -> "i")
    lowered = ch.lower()
    return lowered[0] if lowered else ch


def fold_case(text: str) -> str:
    """Lowercase ``text`` without changing its length, so offsets line up."""
    return "".join(_fold(c) for c in text)


def upper_char(ch: str, dotted_i: bool = False) -> str:
    """Uppercase a single character.

    Args:
        ch: Character to convert
        dotted_i: Use Turkic mapping ("i" -> "İ", "ı" -> "I")

    Returns:
        The uppercase character (first char of a multi-char mapping)
    """
    if dotted_i:
        if ch == "i":
            return "İ"
        if ch == "ı":
            return "I"
    upper = ch.upper()
    return upper[0] if upper else ch


def match_case(original: str, replacement: str, dotted_i: bool = False) -> str:
    """Carry the capitalization of ``original`` over to ``replacement``.

    Only a leading capital is transferred; the rest of the replacement is
    kept as written so proper nouns like "İstanbul" survive.
    """
    if not original or not replacement:
        return replacement
    if original[0].isupper():
        return upper_char(replacement[0], dotted_i) + replacement[1:]
    return replacement


def replace_whole_word(
    text: str,
    word: str,
    replacement: str,
    skip: Callable[[str], bool] | None = None,
    dotted_i: bool = False,
) -> str:
    """Replace case-insensitive whole-word occurrences of ``word``.

    Args:
        text: Text to search
        word: Word to find (any case)
        replacement: Text to put in its place
        skip: Predicate on the matched text; matches it accepts are left alone
        dotted_i: Use Turkic case mapping when capitalizing the replacement

    Returns:
        The rewritten text
    """
    if not word or not text:
        return text

    target = [_fold(c) for c in word]
    size = len(target)
    length = len(text)
    parts: list[str] = []
    last_end = 0
    i = 0

    while i <= length - size:
        if [_fold(c) for c in text[i : i + size]] != target:
            i += 1
            continue

        end = i + size
        before_ok = i == 0 or not is_word_char(text[i - 1])
        after_ok = end >= length or not is_word_char(text[end])
        matched = text[i:end]

        if not (before_ok and after_ok) or (skip is not None and skip(matched)):
            i += 1
            continue

        parts.append(text[last_end:i])
        parts.append(match_case(matched, replacement, dotted_i))
        last_end = end
        i = end

    if not parts:
        return text

    parts.append(text[last_end:])
    return "".join(parts)
