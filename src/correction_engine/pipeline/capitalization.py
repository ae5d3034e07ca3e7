"""Sentence-initial capitalization."""

from __future__ import annotations

from correction_engine.pipeline.punctuation import is_decimal_point
from correction_engine.text.words import upper_char

_SENTENCE_BREAKS = ".!?\n"


def fix_capitalization(text: str, dotted_i: bool = False) -> str:
    """Capitalize the first letter of the text and of every sentence.

    A sentence starts after '.', '!', '?' or a newline. With ``dotted_i``
    the Turkic mapping is used, so "iyi" becomes "İyi".
    """
    chars = []
    capitalize_next = True
    for i, ch in enumerate(text):
        if capitalize_next and ch.isalpha():
            chars.append(upper_char(ch, dotted_i))
            capitalize_next = False
            continue
        chars.append(ch)
        if ch in _SENTENCE_BREAKS and not is_decimal_point(text, i):
            capitalize_next = True
    return "".join(chars)
