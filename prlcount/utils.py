"""Cross-cutting helpers: comment stripping, rounding, number formatting."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

# A % after an even run of backslashes (\\ is a line break) starts a comment
# that runs to the end of the line.
COMMENT_RE = re.compile(r"(?<!\\)((?:\\\\)*)%[^\n]*")
LINE_BREAK_RE = re.compile(r"\r\n|[\n\r\v\f\x85\u2028\u2029]")


def strip_comments(text: str) -> str:
    """Remove LaTeX comments, keeping escaped ``\\%`` characters."""
    return COMMENT_RE.sub(r"\1", text)


def remove_line_breaks(text: str) -> str:
    return LINE_BREAK_RE.sub("", text)


def round_half_up(value: float, places: int = 3) -> float:
    """Round *value* to *places* decimals, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_words(value: float) -> str:
    """Render a word-equivalent count: integers plain, halves with one decimal."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"
