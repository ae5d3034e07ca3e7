"""User profile models.

The profile summarizes what a user talks about: recurring phrases,
frequent content words and the subject domain their transcripts lean
towards. It feeds the recognizer priming prompt.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Domain(str, Enum):
    """Subject area inferred from recent transcripts."""

    GENERAL = "general"
    TECHNICAL = "technical"
    MEDICAL = "medical"
    LEGAL = "legal"
    BUSINESS = "business"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Tie-break order when several domains share the top score
DOMAIN_PRIORITY = (Domain.TECHNICAL, Domain.MEDICAL, Domain.LEGAL, Domain.BUSINESS)

DOMAIN_EXPLANATIONS = {
    Domain.GENERAL: "Not enough data yet, or no dominant subject area.",
    Domain.TECHNICAL: "Technical vocabulary dominates. The prompt is biased towards software terms.",
    Domain.MEDICAL: "Medical vocabulary detected. The prompt is biased towards healthcare terms.",
    Domain.LEGAL: "Legal vocabulary detected. The prompt is biased towards legal terms.",
    Domain.BUSINESS: "Business vocabulary detected. The prompt is biased towards management terms.",
}


class NgramEntry(BaseModel):
    """A lowercase 2- or 3-word sequence and how often it occurred."""

    ngram: str
    count: int = 0

    @property
    def size(self) -> int:
        """Number of words in the n-gram."""
        return len(self.ngram.split(" "))


class UserProfile(BaseModel):
    """Aggregated usage statistics for one user."""

    domain: Domain = Domain.GENERAL
    frequent_words: list[str] = Field(default_factory=list)  # Most frequent first, max 50
    ngrams: list[NgramEntry] = Field(default_factory=list)  # Descending count, max 500
    total_transcriptions: int = 0
    total_corrections: int = 0

    def bigrams(self, limit: int | None = None) -> list[str]:
        """Most frequent two-word n-grams.

        Args:
            limit: Maximum number of bigrams to return

        Returns:
            Bigram strings in descending count order
        """
        result = [entry.ngram for entry in self.ngrams if entry.size == 2]
        return result[:limit] if limit is not None else result


class DomainInfo(BaseModel):
    """Detected domain with the scores that produced it."""

    detected: Domain
    scores: dict[Domain, float]
    explanation: str
