"""PRL length estimate for LaTeX manuscripts.

Public API -- all symbols that tests and external code import live here.
Internally the code is split across focused submodules; this file
re-exports the stable public surface so ``from prlcount import X`` works.
"""

from .config import (
    MATH_LINE_WEIGHT,
    TABLE_ROW_WEIGHT,
    TABLE_WEIGHT,
    WORD_LIMIT,
    CountConfig,
)
from .counting import count_displayed_math, count_table_rows, count_tables
from .errors import (
    CompilationFailedError,
    CompilationTimeoutError,
    CounterUnavailableError,
    ImageNotMatchedError,
    LengthCountError,
    SectionNotFoundError,
    SourceNotFoundError,
    UnparseableOutputError,
)
from .estimate import estimate_document, estimate_length
from .images import (
    aspect_ratio,
    estimate_images,
    find_figures,
    image_word_equivalent,
    match_image,
    parse_log_images,
)
from .models import (
    CountBreakdown,
    Figure,
    ImageRecord,
    ImageReport,
    LogImage,
    MathCount,
    TableCount,
    TexDocument,
    TextCount,
)
from .report import aggregate, breakdown_to_dict, render_images, render_report
from .sources import load_document, resolve_source, run_pdflatex
from .text import (
    abstract_length,
    build_texcount_options,
    count_text_words,
    extract_abstract,
    parse_sum_count,
    run_texcount,
    write_rules_file,
)
from .utils import format_words, round_half_up, strip_comments

__all__ = [
    # Config
    "CountConfig",
    "MATH_LINE_WEIGHT",
    "TABLE_WEIGHT",
    "TABLE_ROW_WEIGHT",
    "WORD_LIMIT",
    # Errors
    "LengthCountError",
    "SourceNotFoundError",
    "CompilationFailedError",
    "CompilationTimeoutError",
    "SectionNotFoundError",
    "CounterUnavailableError",
    "UnparseableOutputError",
    "ImageNotMatchedError",
    # Models
    "TexDocument",
    "TextCount",
    "MathCount",
    "TableCount",
    "LogImage",
    "Figure",
    "ImageRecord",
    "ImageReport",
    "CountBreakdown",
    # Utils
    "strip_comments",
    "round_half_up",
    "format_words",
    # Sources
    "resolve_source",
    "run_pdflatex",
    "load_document",
    # Text
    "extract_abstract",
    "abstract_length",
    "write_rules_file",
    "build_texcount_options",
    "run_texcount",
    "parse_sum_count",
    "count_text_words",
    # Math and tables
    "count_displayed_math",
    "count_table_rows",
    "count_tables",
    # Images
    "parse_log_images",
    "find_figures",
    "match_image",
    "aspect_ratio",
    "image_word_equivalent",
    "estimate_images",
    # Report
    "aggregate",
    "render_images",
    "render_report",
    "breakdown_to_dict",
    # Pipeline
    "estimate_document",
    "estimate_length",
]
