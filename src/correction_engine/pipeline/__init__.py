"""Text normalization pipeline for recognizer output."""

from correction_engine.config import PipelineOptions
from correction_engine.pipeline.capitalization import fix_capitalization
from correction_engine.pipeline.hallucination import filter_hallucinations, is_hallucination
from correction_engine.pipeline.numbers import normalize_numbers
from correction_engine.pipeline.processor import PipelineResult, TextPipeline
from correction_engine.pipeline.punctuation import (
    add_punctuation,
    heuristic_split,
    insert_comma_before_phrase,
    insert_comma_before_word,
    split_into_sentences,
)
from correction_engine.pipeline.replace import (
    apply_locale_corrections,
    apply_user_corrections,
    fix_locale_chars,
    replace_whole_word,
)
from correction_engine.pipeline.spacing import normalize_spacing

__all__ = [
    "PipelineOptions",
    "PipelineResult",
    "TextPipeline",
    "add_punctuation",
    "apply_locale_corrections",
    "apply_user_corrections",
    "filter_hallucinations",
    "fix_capitalization",
    "fix_locale_chars",
    "heuristic_split",
    "insert_comma_before_phrase",
    "insert_comma_before_word",
    "is_hallucination",
    "normalize_numbers",
    "normalize_spacing",
    "replace_whole_word",
    "split_into_sentences",
]
