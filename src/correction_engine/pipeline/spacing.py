"""Spacing around punctuation."""

from __future__ import annotations

PUNCTUATION = ",.!?:;"

# After punctuation, no space is inserted before these
_NO_SPACE_BEFORE = " \n\r.!?,)\"'”"


def normalize_spacing(text: str) -> str:
    """Tidy spaces around punctuation marks.

    Spaces before ``, . ! ? : ;`` are removed and one space is added after
    them unless the text ends, a line ends or another closing mark follows.
    Runs of spaces collapse to one; newlines are kept. Digits on both sides
    of a mark ("3,5", "1.000") are left joined.
    """
    out: list[str] = []
    length = len(text)

    for i, ch in enumerate(text):
        if ch in PUNCTUATION and out:
            while out and out[-1] == " ":
                out.pop()
            out.append(ch)

            if i + 1 < length:
                following = text[i + 1]
                between_digits = following.isdigit() and len(out) > 1 and out[-2].isdigit()
                if following not in _NO_SPACE_BEFORE and not between_digits:
                    out.append(" ")
            continue

        if ch == " " and out and out[-1] == " ":
            continue

        out.append(ch)

    return "".join(out)
