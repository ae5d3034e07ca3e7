"""Rejection of recognizer hallucinations.

Speech recognizers trained on subtitled video tend to emit credits,
subscribe prompts and looping repetitions on silent or noisy audio. Such
transcripts are dropped whole rather than repaired.
"""

from __future__ import annotations

from collections import Counter

from correction_engine.logging import get_logger

logger = get_logger(__name__)

HALLUCINATION_PATTERNS = (
    "Altyazı",
    "Abone ol",
    "Beğen",
    "Subscribe",
    "Thank you",
    "thanks for watching",
    "[Müzik]",
    "(Müzik)",
    "...",
    "Altyazı M.K.",
    "AÇIK CEZAEVİ",
    "www.",
    "http",
    "Devamını izle",
    "Bir sonraki",
    "Videoyu beğen",
    "SESLİ",
    "Sessiz",
    "ABONE",
    "Amara.org",
    "subtitles",
)

# A pattern prefix only counts when little text follows it
PATTERN_SLACK = 10


def matches_known_pattern(text: str) -> str | None:
    """Return the boilerplate pattern ``text`` consists of, if any."""
    lower = text.lower()
    for pattern in HALLUCINATION_PATTERNS:
        pattern_lower = pattern.lower()
        if lower == pattern_lower:
            return pattern
        if lower.startswith(pattern_lower) and len(text) < len(pattern) + PATTERN_SLACK:
            return pattern
    return None


def detect_repetition(text: str) -> bool:
    """Detect looping words or short word patterns.

    Flags texts of six or more words with at most two distinct words, and
    texts where more than 80% of the 1-, 2- or 3-word chunks repeat the
    opening chunk (at least four times).
    """
    words = [w.lower() for w in text.split()]
    if len(words) < 4:
        return False

    if len(set(words)) <= 2 and len(words) >= 6:
        return True

    for pattern_len in range(1, 4):
        if len(words) < pattern_len * 4:
            continue
        pattern = words[:pattern_len]
        chunks = [words[i : i + pattern_len] for i in range(0, len(words), pattern_len)]
        matches = sum(1 for chunk in chunks if chunk == pattern)
        if matches / len(chunks) > 0.8 and matches >= 4:
            return True

    return False


def detect_char_repetition(text: str) -> bool:
    """Detect texts dominated by one character, like "3-3-3-3-3"."""
    clean = "".join(c for c in text if c.isalnum() or c.isspace()).strip()
    if len(clean) < 4:
        return False

    counts = Counter(c for c in clean if not c.isspace())
    total = sum(counts.values())
    if total == 0:
        return False

    return any(count / total > 0.6 and count > 4 for count in counts.values())


def has_excessive_char_repeat(text: str, limit: int = 5) -> bool:
    """True when one character repeats ``limit`` or more times in a row.

    Whitespace, hyphens and commas are ignored, so "3 3 3 3 3" counts.
    """
    consecutive = 0
    previous = None
    for ch in text:
        if ch.isspace() or ch in "-,":
            continue
        if ch == previous:
            consecutive += 1
            if consecutive >= limit:
                return True
        else:
            consecutive = 1
        previous = ch
    return False


def is_hallucination(text: str) -> bool:
    """Check a trimmed transcript against every hallucination heuristic."""
    if len(text) < 2:
        return True

    pattern = matches_known_pattern(text)
    if pattern is not None:
        logger.info(f"Hallucination filtered: {text!r}", extra={"pattern": pattern})
        return True

    if detect_repetition(text):
        logger.info(f"Repetition hallucination filtered: {text!r}")
        return True

    if detect_char_repetition(text):
        logger.info(f"Character repetition filtered: {text!r}")
        return True

    if sum(1 for c in text if c.isalpha()) < 2:
        return True

    if has_excessive_char_repeat(text):
        logger.info(f"Excessive character repeat filtered: {text!r}")
        return True

    return False


def filter_hallucinations(text: str) -> str:
    """Return the trimmed text, or an empty string if it is a hallucination."""
    trimmed = text.strip()
    if is_hallucination(trimmed):
        return ""
    return trimmed
