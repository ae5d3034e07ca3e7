"""Locale rule sets.

Every language-specific word list the engine consults lives on a
``LocaleRules`` instance, so the learning engine, profile analytics and the
pipeline stay language-agnostic and a new locale is a new data module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class LocaleRules:
    """Word lists and tables for one recognizer language.

    Attributes:
        code: Language code the rules apply to ("tr", "en", ...)
        stopwords: Function words never learned as corrections or counted
            as frequent words
        suffixes: Inflectional suffixes stripped to find a word's stem,
            tried longest first
        char_fixes: Short ASCII mis-renderings mapped to the accented word
        word_corrections: Built-in dictionary of common recognizer spellings
        loanwords: Foreign words that must never be "repaired"
        number_words: Spelled-out forms of 0-10, the tens and 100
        unit_words: Words after which a numeral stays in digits
        question_suffixes: Sentence-final particles that make a question
        question_words: Sentence-initial words that make a question
        exclamation_words: Sentence-initial words that make an exclamation
        comma_words: Connectives that get a comma in front of them
        comma_phrases: Multi-word connectives that get a comma in front
        split_markers: Connectives at which a long unpunctuated run is split
        domain_keywords: Keyword buckets used by the domain classifier,
            keyed by domain name
        dotted_i: Language distinguishes dotted and dotless i
    """

    code: str
    stopwords: frozenset[str] = frozenset()
    suffixes: tuple[str, ...] = ()
    char_fixes: tuple[tuple[str, str], ...] = ()
    word_corrections: tuple[tuple[str, str], ...] = ()
    loanwords: frozenset[str] = frozenset()
    number_words: Mapping[int, str] = field(default_factory=dict)
    unit_words: tuple[str, ...] = ()
    question_suffixes: frozenset[str] = frozenset()
    question_words: frozenset[str] = frozenset()
    exclamation_words: frozenset[str] = frozenset()
    comma_words: tuple[str, ...] = ()
    comma_phrases: tuple[str, ...] = ()
    split_markers: tuple[str, ...] = ()
    domain_keywords: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    dotted_i: bool = False

    def is_stopword(self, word: str) -> bool:
        return word in self.stopwords

    def is_loanword(self, word: str) -> bool:
        return word.lower() in self.loanwords

    def is_unit(self, word: str) -> bool:
        """True when ``word`` is, or starts with, a unit word ("lira", "yılında")."""
        lower = word.lower()
        return any(lower == unit or lower.startswith(unit) for unit in self.unit_words)

    def strip_suffixes(self, word: str) -> tuple[str, str]:
        """Split a word into ``(stem, suffix)``.

        An apostrophe marks the suffix boundary explicitly ("Ali'nin").
        Otherwise the longest known suffix is removed, as long as at least
        two characters of stem remain. Words with no recognizable suffix
        come back as ``(word, "")``.
        """
        for mark in ("'", "’"):
            pos = word.find(mark)
            if pos > 0:
                return word[:pos], word[pos:]

        for suffix in self.suffixes:
            if word.endswith(suffix) and len(word) - len(suffix) >= 2:
                return word[: -len(suffix)], suffix

        return word, ""

    def number_to_words(self, n: int) -> str | None:
        """Spell out 0-100; compounds below 100 are "tens ones".

        Returns None when the number is out of range or the locale has no
        number words.
        """
        if n in self.number_words:
            return self.number_words[n]

        if 10 < n < 100:
            tens, ones = (n // 10) * 10, n % 10
            if ones == 0:
                return None
            tens_word = self.number_to_words(tens)
            ones_word = self.number_to_words(ones)
            if tens_word and ones_word:
                return f"{tens_word} {ones_word}"

        return None
