"""Dictionary-driven word replacement stages."""

from __future__ import annotations

from typing import Mapping

from correction_engine.locale import LocaleRules
from correction_engine.text.words import replace_whole_word

__all__ = [
    "apply_locale_corrections",
    "apply_user_corrections",
    "fix_locale_chars",
    "replace_whole_word",
]


def fix_locale_chars(text: str, locale: LocaleRules) -> str:
    """Restore accented letters on short, unambiguous words ("gul" -> "gül").

    Loanwords are never touched, neither as table entries nor as matches.
    """
    for wrong, right in locale.char_fixes:
        if locale.is_loanword(wrong):
            continue
        text = replace_whole_word(
            text, wrong, right, skip=locale.is_loanword, dotted_i=locale.dotted_i
        )
    return text


def apply_locale_corrections(
    text: str,
    locale: LocaleRules,
    preserve_loanwords: bool = True,
) -> str:
    """Apply the locale's built-in dictionary of common misspellings.

    Args:
        text: Text to correct
        locale: Rules carrying the correction dictionary
        preserve_loanwords: Skip entries and matches that are loanwords

    Returns:
        The corrected text
    """
    skip = locale.is_loanword if preserve_loanwords else None
    for wrong, right in locale.word_corrections:
        if preserve_loanwords and locale.is_loanword(wrong):
            continue
        text = replace_whole_word(text, wrong, right, skip=skip, dotted_i=locale.dotted_i)
    return text


def apply_user_corrections(
    text: str,
    corrections: Mapping[str, str],
    dotted_i: bool = False,
) -> str:
    """Apply learned corrections, longest key first.

    Longer keys go first so a multi-word or longer entry wins over a key it
    contains; ties are broken alphabetically for a stable result.
    """
    if not corrections:
        return text
    for wrong in sorted(corrections, key=lambda w: (-len(w), w)):
        text = replace_whole_word(text, wrong, corrections[wrong], dotted_i=dotted_i)
    return text
