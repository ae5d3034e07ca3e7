"""Numerals to words.

Recognizers often write small spoken numbers as digits, including when a
case suffix is attached ("10un" for "onun"). Suffixed numerals up to 100
and bare numerals up to 10 are spelled out; a numeral followed by a unit
("5 kilo", "2024 yılında") keeps its digits.
"""

from __future__ import annotations

import re

from correction_engine.locale import LocaleRules

# Digits not glued to a preceding letter, an optional apostrophe and an
# optional letter suffix. Decimal and grouped numbers are captured whole.
_NUMERAL = re.compile(r"(?<![^\W\d_])([0-9]+(?:[.,][0-9]+)*)(['’]?)([^\W\d_]*)")

MAX_SUFFIXED = 100
MAX_STANDALONE = 10


def _next_word(text: str, pos: int) -> str:
    words = text[pos:].split(maxsplit=1)
    return words[0] if words else ""


def normalize_numbers(text: str, locale: LocaleRules) -> str:
    """Spell out small numerals using the locale's number words.

    Args:
        text: Text to rewrite
        locale: Rules providing number words and unit words

    Returns:
        Text with eligible numerals replaced
    """
    if not locale.number_words:
        return text

    def replace(match: re.Match) -> str:
        digits, apostrophe, suffix = match.groups()
        if not digits.isdigit():
            return match.group(0)

        value = int(digits)
        if suffix and value <= MAX_SUFFIXED:
            word = locale.number_to_words(value)
            if word:
                return word + suffix

        if not suffix and value <= MAX_STANDALONE and not apostrophe:
            word = locale.number_to_words(value)
            if word and not locale.is_unit(_next_word(text, match.end())):
                return word

        return match.group(0)

    return _NUMERAL.sub(replace, text)
