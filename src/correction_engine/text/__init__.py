"""Text primitives shared by the learning engine and the pipeline."""

from correction_engine.text.distance import align, edit_distance, similarity_ratio
from correction_engine.text.words import (
    fold_case,
    is_word_char,
    match_case,
    replace_whole_word,
)

__all__ = [
    "align",
    "edit_distance",
    "similarity_ratio",
    "fold_case",
    "is_word_char",
    "match_case",
    "replace_whole_word",
]
