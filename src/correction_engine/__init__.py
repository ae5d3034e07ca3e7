"""Correction Engine - adaptive correction and normalization for speech transcripts.

Learns a user's recurring recognition mistakes from their edits and applies
the trusted ones to new transcripts:
1. Correction store: learned word fixes with a confidence-driven lifecycle
2. Text pipeline: hallucination filtering, numerals, accents, punctuation
3. Profile: frequent words, n-grams and domain for recognizer priming prompts
"""

__version__ = "0.1.0"
