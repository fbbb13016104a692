"""Displayed-math line counting and table row counting."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .config import CountConfig
from .models import MathCount, TableCount

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

MATH_ENV_RE = re.compile(
    r"\\begin\{((?:equation|align|alignat|flalign|gather|multline|eqnarray)\*?)\}"
    r"(.*?)\\end\{\1\}",
    re.DOTALL,
)
DOUBLE_DOLLAR_RE = re.compile(r"\$\$(.*?)\$\$", re.DOTALL)
# \\[2pt] is a row break with spacing, not a display delimiter
BRACKET_DISPLAY_RE = re.compile(r"(?<!\\)\\\[(.*?)(?<!\\)\\\]", re.DOTALL)
LINE_BREAK_RE = re.compile(r"\\\\")

TABULAR_RE = re.compile(
    r"\\begin\{(tabular\*?|tabularx)\}(.*?)\\end\{\1\}",
    re.DOTALL,
)
ROW_END_RE = re.compile(r"\\\\|\\tabularnewline\b")
TRAILING_RULE_RE = re.compile(r"\\(?:hline|toprule|midrule|bottomrule)\s*\Z")
TRAILING_ROW_END_RE = re.compile(
    r"(?:\\\\\*?(?:\[[^\]]*\])?|\\tabularnewline)\s*\Z"
)


# ---------------------------------------------------------------------------
# Displayed math
# ---------------------------------------------------------------------------


def count_displayed_math(text: str, config: Optional[CountConfig] = None) -> MathCount:
    """Count displayed equation lines in *text*.

    Each block environment contributes one line plus one per ``\\\\``; every
    ``$$...$$`` and ``\\[...\\]`` pair contributes exactly one line.
    """
    config = config or CountConfig()
    result = MathCount(weight=config.math_line_weight)

    for match in MATH_ENV_RE.finditer(text):
        result.environments += 1
        result.lines += len(LINE_BREAK_RE.findall(match.group(2))) + 1

    for pattern in (DOUBLE_DOLLAR_RE, BRACKET_DISPLAY_RE):
        found = len(pattern.findall(text))
        result.delimited += found
        result.lines += found

    log.debug(
        "Displayed math: %s environments, %s delimited, %s lines",
        result.environments,
        result.delimited,
        result.lines,
    )
    return result


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def count_table_rows(body: str) -> int:
    """Rows in one tabular body.

    Every ``\\\\`` or ``\\tabularnewline`` starts a new row except the one that
    closes the last row; a closing horizontal rule likewise adds nothing.
    """
    rows = len(ROW_END_RE.findall(body))
    if TRAILING_RULE_RE.search(body):
        rows -= 1
    if TRAILING_ROW_END_RE.search(body):
        rows -= 1
    return rows + 1


def count_tables(text: str, config: Optional[CountConfig] = None) -> TableCount:
    config = config or CountConfig()
    result = TableCount(
        table_weight=config.table_weight,
        row_weight=config.table_row_weight,
    )
    for match in TABULAR_RE.finditer(text):
        rows = count_table_rows(match.group(2))
        result.tables += 1
        result.rows += rows
        log.debug("Table %s: %s rows", result.tables, rows)
    return result
