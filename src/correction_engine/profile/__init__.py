"""User profile analytics: n-grams, frequent words and domain detection."""

from correction_engine.profile.analytics import (
    detect_domain,
    extract_frequent_words,
    extract_ngrams,
    merge_frequent_words,
    merge_ngrams,
    score_domains,
)
from correction_engine.profile.models import Domain, DomainInfo, NgramEntry, UserProfile
from correction_engine.profile.store import ProfileStore

__all__ = [
    "Domain",
    "DomainInfo",
    "NgramEntry",
    "ProfileStore",
    "UserProfile",
    "detect_domain",
    "extract_frequent_words",
    "extract_ngrams",
    "merge_frequent_words",
    "merge_ngrams",
    "score_domains",
]
