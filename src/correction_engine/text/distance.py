"""Edit distance and word alignment.

Character-level Levenshtein distance for comparing a recognized word with
the user's correction, and an LCS aligner for pairing up the words of two
transcripts whose lengths differ.
"""

from __future__ import annotations

import unicodedata

AlignedPair = tuple[str | None, str | None]


def edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein (edit) distance between two strings.

    The distance is the minimum number of single-character insertions,
    deletions and substitutions needed to turn one string into the other.
    Both inputs are NFC-normalized first, so a letter written with a
    combining mark counts as one unit, same as its precomposed form.

    Args:
        s1: First string
        s2: Second string

    Returns:
        Number of edits needed
    """
    s1 = unicodedata.normalize("NFC", s1)
    s2 = unicodedata.normalize("NFC", s2)

    # Keep the shorter string on the inner axis
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    current_row = [0] * (len(s2) + 1)

    for i, c1 in enumerate(s1):
        current_row[0] = i + 1

        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)

            current_row[j + 1] = min(insertions, deletions, substitutions)

        previous_row, current_row = current_row, previous_row

    return previous_row[len(s2)]


def similarity_ratio(s1: str, s2: str) -> float:
    """Normalized similarity in [0, 1]: ``1 - distance / longest length``."""
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance(s1, s2) / longest


def align(seq_a: list[str], seq_b: list[str]) -> list[AlignedPair]:
    """Align two word sequences by their longest common subsequence.

    Words are compared case-insensitively. The result walks both inputs in
    order; each element is ``(a, b)`` for a match or substitution,
    ``(None, b)`` for an insertion and ``(a, None)`` for a deletion.
    Where several LCS paths exist, a substitution is preferred over a
    separate insertion + deletion.

    Args:
        seq_a: Original words
        seq_b: Edited words

    Returns:
        Aligned word pairs
    """
    lower_a = [w.lower() for w in seq_a]
    lower_b = [w.lower() for w in seq_b]
    m, n = len(seq_a), len(seq_b)

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if lower_a[i - 1] == lower_b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    result: list[AlignedPair] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and lower_a[i - 1] == lower_b[j - 1]:
            result.append((seq_a[i - 1], seq_b[j - 1]))
            i -= 1
            j -= 1
        elif (
            i > 0
            and j > 0
            and dp[i - 1][j - 1] >= dp[i - 1][j]
            and dp[i - 1][j - 1] >= dp[i][j - 1]
        ):
            result.append((seq_a[i - 1], seq_b[j - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            result.append((None, seq_b[j - 1]))
            j -= 1
        else:
            result.append((seq_a[i - 1], None))
            i -= 1

    result.reverse()
    return result
