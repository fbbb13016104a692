"""Configuration objects and publisher constants for the length estimate."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Publisher weights
# ---------------------------------------------------------------------------

MATH_LINE_WEIGHT = 16
TABLE_WEIGHT = 13
TABLE_ROW_WEIGHT = 6.5
WORD_LIMIT = 3750

# Image formula: ceil(IMAGE_SCALE / ar + offset); double-column figures use
# half the aspect ratio.
IMAGE_SCALE = 150
SINGLE_COLUMN_OFFSET = 20
DOUBLE_COLUMN_OFFSET = 40

# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------

LATEX_COMMAND = "pdflatex"
TEXCOUNT_COMMAND = "texcount"
COMPILE_TIMEOUT_S = 120.0
COUNT_TIMEOUT_S = 60.0

EXCLUDED_SECTIONS = ("abstract", "acknowledgments")

# texcount -sum weights: text, headers, captions, header count, float count,
# inline math, displayed math
TEXCOUNT_SUM_WEIGHTS = (1, 1, 1, 0, 0, 1, 0)


@dataclass
class CountConfig:
    """Weights, limits and tool settings used by one estimate run."""

    math_line_weight: float = MATH_LINE_WEIGHT
    table_weight: float = TABLE_WEIGHT
    table_row_weight: float = TABLE_ROW_WEIGHT
    word_limit: int = WORD_LIMIT
    compile_timeout: float = COMPILE_TIMEOUT_S
    count_timeout: float = COUNT_TIMEOUT_S
    latex_command: str = LATEX_COMMAND
    texcount_command: str = TEXCOUNT_COMMAND
    excluded_sections: tuple[str, ...] = EXCLUDED_SECTIONS
