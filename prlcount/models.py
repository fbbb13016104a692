"""Shared data models for the length estimate."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class TexDocument:
    """A loaded manuscript: comment-stripped source plus its compilation log."""

    path: Path
    text: str
    log: str
    log_path: Optional[Path] = None
    compiled: bool = False

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class TextCount:
    """Words in text, headers, captions and inline math, as reported by texcount."""

    total: int
    summary: str = ""


@dataclass
class MathCount:
    environments: int = 0
    delimited: int = 0
    lines: int = 0
    weight: float = 0

    @property
    def word_equivalents(self) -> float:
        return self.lines * self.weight


@dataclass
class TableCount:
    tables: int = 0
    rows: int = 0
    table_weight: float = 0
    row_weight: float = 0

    @property
    def word_equivalents(self) -> float:
        return self.tables * self.table_weight + self.rows * self.row_weight


@dataclass
class LogImage:
    """One ``<use ...>`` entry from the log with its requested size in pt."""

    token: str
    width: float
    height: float


@dataclass
class Figure:
    """A figure environment and the images it includes, in document order."""

    ordinal: int
    two_column: bool
    filenames: list[str] = field(default_factory=list)


@dataclass
class ImageRecord:
    """Estimate for one ``\\includegraphics`` inside a figure.

    Records carrying a ``warning`` contribute zero words.
    """

    figure: int
    filename: str
    two_column: bool = False
    token: Optional[str] = None
    width: float = 0.0
    height: float = 0.0
    aspect_ratio: float = 0.0
    words: int = 0
    warning: Optional[str] = None


@dataclass
class ImageReport:
    records: list[ImageRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(r.words for r in self.records)

    @property
    def has_images(self) -> bool:
        return bool(self.records)

    def by_figure(self) -> dict[int, list[ImageRecord]]:
        grouped: dict[int, list[ImageRecord]] = {}
        for record in self.records:
            grouped.setdefault(record.figure, []).append(record)
        return grouped


@dataclass
class CountBreakdown:
    """All weighted contributions for one manuscript plus the grand total."""

    source: str
    text: TextCount
    abstract_chars: Optional[int]
    math: MathCount
    tables: TableCount
    images: ImageReport
    total: float
    word_limit: int
    warnings: list[str] = field(default_factory=list)

    @property
    def over_limit(self) -> bool:
        return self.total > self.word_limit
