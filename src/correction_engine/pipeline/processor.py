"""Text normalization pipeline.

Raw recognizer output goes through these stages, in order:

1. Hallucination filter (whole transcript may be rejected)
2. Numerals to words
3. Accent restoration on short words
4. Built-in locale correction dictionary
5. User's learned corrections
6. Punctuation and connective commas
7. Sentence capitalization
8. Spacing around punctuation

Stages 2-4 only do work for locales that ship the corresponding tables.
Running the pipeline on its own output returns that output unchanged.
"""

from __future__ import annotations

from typing import Mapping, NamedTuple

from correction_engine.config import PipelineOptions
from correction_engine.corrections.learning import learn_pipeline_corrections
from correction_engine.locale import LocaleRules, get_locale
from correction_engine.logging import get_logger
from correction_engine.pipeline.capitalization import fix_capitalization
from correction_engine.pipeline.hallucination import filter_hallucinations
from correction_engine.pipeline.numbers import normalize_numbers
from correction_engine.pipeline.punctuation import add_punctuation
from correction_engine.pipeline.replace import (
    apply_locale_corrections,
    apply_user_corrections,
    fix_locale_chars,
)
from correction_engine.pipeline.spacing import normalize_spacing

logger = get_logger(__name__)


class PipelineResult(NamedTuple):
    """Processed text and the word fixes the pipeline made to it."""

    text: str
    learned: list[tuple[str, str]]


class TextPipeline:
    """Configurable normalizer for recognizer transcripts."""

    def __init__(self, options: PipelineOptions | None = None):
        self.options = options or PipelineOptions()

    def process(
        self,
        text: str,
        language: str | None = None,
        corrections: Mapping[str, str] | None = None,
    ) -> str:
        """Normalize one transcript.

        Args:
            text: Raw recognizer output
            language: Recognizer language code; selects locale rules
            corrections: Learned ``wrong -> right`` map to apply

        Returns:
            Normalized text, or "" if the transcript was rejected
        """
        return self._run(text.strip(), get_locale(language), corrections)

    def process_and_learn(
        self,
        text: str,
        language: str | None = None,
        corrections: Mapping[str, str] | None = None,
    ) -> PipelineResult:
        """Normalize a transcript and report near-miss fixes it made."""
        locale = get_locale(language)
        processed = self._run(text.strip(), locale, corrections)
        learned = learn_pipeline_corrections(text, processed, locale) if processed else []
        return PipelineResult(processed, learned)

    def _run(
        self,
        text: str,
        locale: LocaleRules,
        corrections: Mapping[str, str] | None,
    ) -> str:
        options = self.options
        if not text:
            return text

        if options.hallucination_filter:
            text = filter_hallucinations(text)
            if not text:
                return text

        if locale.number_words:
            text = normalize_numbers(text, locale)

        if locale.char_fixes:
            text = fix_locale_chars(text, locale)

        if options.locale_repair and locale.word_corrections:
            text = apply_locale_corrections(text, locale, options.preserve_loanwords)

        if corrections:
            text = apply_user_corrections(text, corrections, dotted_i=locale.dotted_i)

        if options.auto_punctuation:
            text = add_punctuation(
                text,
                locale,
                auto_comma=options.auto_comma,
                paragraph_break=options.paragraph_break,
            )

        if options.auto_capitalization:
            text = fix_capitalization(text, dotted_i=locale.dotted_i)

        return normalize_spacing(text)
