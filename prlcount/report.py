"""Aggregation of the weighted contributions and the plain-text report."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Optional

from .models import CountBreakdown, ImageReport, MathCount, TableCount, TextCount
from .utils import format_words

TEXT_HEADER = "Words in text, headers and equations"
IMAGES_HEADER = "Images"
WARNINGS_HEADER = "Warnings"
TOTAL_HEADER = "Total word count (words + equations + images)"
NO_IMAGES_LINE = "The file doesn't contain images."


def aggregate(
    source: str,
    text: TextCount,
    abstract_chars: Optional[int],
    math: MathCount,
    tables: TableCount,
    images: ImageReport,
    *,
    word_limit: int,
    warnings: Optional[list[str]] = None,
) -> CountBreakdown:
    """Sum every contribution into one breakdown; the abstract is not counted."""
    total = (
        text.total
        + math.word_equivalents
        + tables.word_equivalents
        + images.total
    )
    return CountBreakdown(
        source=source,
        text=text,
        abstract_chars=abstract_chars,
        math=math,
        tables=tables,
        images=images,
        total=total,
        word_limit=word_limit,
        warnings=[*(warnings or []), *images.warnings],
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _section(title: str) -> list[str]:
    return [title, "-" * len(title)]


def render_images(images: ImageReport) -> list[str]:
    """Image table grouped by figure, column widths fitted to the filenames."""
    lines = _section(IMAGES_HEADER)
    if not images.has_images:
        lines.append(NO_IMAGES_LINE)
        return lines

    width = max(len("File name"), *(len(r.filename) for r in images.records))
    header = (
        f"{'File name':<{width + 2}}  {'Aspect ratio (W/H)':>18}  "
        f"{'Est. word count':>15}  Two-column"
    )
    lines.append(header)
    lines.append("-" * len(header))
    for ordinal, records in images.by_figure().items():
        lines.append(f"Figure {ordinal}")
        for r in records:
            column = "yes" if r.two_column else "no"
            if r.warning:
                lines.append(
                    f"  {r.filename:<{width}}  {'-':>18}  {0:>15d}  {column}"
                    f"  ({r.warning})"
                )
            else:
                lines.append(
                    f"  {r.filename:<{width}}  {r.aspect_ratio:>18.3f}  "
                    f"{r.words:>15d}  {column}"
                )
    lines.append("")
    lines.append(f"Total word count for images: {images.total}")
    return lines


def render_report(breakdown: CountBreakdown) -> str:
    lines = [""]
    lines += _section(TEXT_HEADER)
    if breakdown.text.summary:
        lines.append(breakdown.text.summary.rstrip("\n"))
    if breakdown.abstract_chars is None:
        lines.append("Abstract length: not found")
    else:
        lines.append(f"Abstract length: {breakdown.abstract_chars} characters")
    lines.append("")

    math = breakdown.math
    lines.append(
        f"Number of displayed math lines: {math.lines} "
        f"({format_words(math.word_equivalents)} words at "
        f"{format_words(math.weight)} per line)"
    )
    lines.append("")

    tables = breakdown.tables
    lines.append(f"Number of tables: {tables.tables}")
    lines.append(
        f"Table rows: {tables.rows} ({format_words(tables.word_equivalents)} words)"
    )
    lines.append("")

    lines += render_images(breakdown.images)
    lines.append("")

    if breakdown.warnings:
        lines += _section(WARNINGS_HEADER)
        lines += [f"- {w}" for w in breakdown.warnings]
        lines.append("")

    difference = breakdown.word_limit - breakdown.total
    if breakdown.over_limit:
        verdict = f"over by {format_words(-difference)}"
    else:
        verdict = f"{format_words(difference)} remaining"
    lines.append(f"Advisory limit: {breakdown.word_limit} words ({verdict})")
    lines.append("")

    lines.append(TOTAL_HEADER)
    lines.append(format_words(breakdown.total))
    return "\n".join(lines) + "\n"


def breakdown_to_dict(breakdown: CountBreakdown) -> dict[str, Any]:
    """JSON-serialisable view of a breakdown, including derived totals."""
    return {
        "source": breakdown.source,
        "text_words": breakdown.text.total,
        "abstract_chars": breakdown.abstract_chars,
        "displayed_math": {
            **asdict(breakdown.math),
            "word_equivalents": breakdown.math.word_equivalents,
        },
        "tables": {
            **asdict(breakdown.tables),
            "word_equivalents": breakdown.tables.word_equivalents,
        },
        "images": {
            "records": [asdict(r) for r in breakdown.images.records],
            "total": breakdown.images.total,
        },
        "warnings": list(breakdown.warnings),
        "word_limit": breakdown.word_limit,
        "total": breakdown.total,
    }
