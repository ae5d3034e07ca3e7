"""English rules."""

from __future__ import annotations

from correction_engine.locale.rules import LocaleRules

STOPWORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "any",
        "can", "had", "her", "was", "one", "our", "out", "has", "his",
        "how", "its", "may", "who", "did", "get", "him", "she", "too",
        "use", "that", "with", "have", "this", "will", "your", "from",
        "they", "been", "were", "what", "when", "them", "than", "then",
        "there", "their", "which", "would", "about", "into", "just",
    }
)

QUESTION_WORDS = frozenset(
    {
        "what", "where", "when", "why", "how", "who", "which",
        "do", "does", "did", "is", "are", "can", "could",
        "would", "will", "shall",
    }
)

COMMA_WORDS = (
    "but", "however", "although", "because", "therefore",
    "moreover", "furthermore",
)

DOMAIN_KEYWORDS = {
    "technical": (
        "api", "server", "deploy", "bug", "commit", "frontend", "backend",
        "database", "code", "software", "program", "function", "variable", "class", "git",
    ),
    "medical": (
        "patient", "treatment", "medication", "doctor", "surgery", "diagnosis",
        "prescription", "hospital", "clinic", "symptom", "examination", "pressure",
    ),
    "legal": (
        "court", "lawsuit", "lawyer", "law", "attorney", "prosecutor",
        "judge", "contract", "clause", "violation", "verdict", "appeal",
    ),
    "business": (
        "meeting", "project", "report", "customer", "sales",
        "marketing", "budget", "strategy", "target", "performance", "management",
    ),
}

ENGLISH = LocaleRules(
    code="en",
    stopwords=STOPWORDS,
    question_words=QUESTION_WORDS,
    comma_words=COMMA_WORDS,
    domain_keywords=DOMAIN_KEYWORDS,
)
