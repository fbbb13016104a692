"""Image word-equivalents from figure environments and pdflatex log sizes.

The publisher's guide estimates a figure's length from its aspect ratio::

    words = ceil(150 / aspect_ratio + 20)            single-column figure
    words = ceil(150 / (0.5 * aspect_ratio) + 40)    double-column figure*

pdflatex records every included graphic in its log, e.g.::

    <use fig1.pdf>
    Package pdftex.def Info: fig1.pdf used on input line 313.
    (pdftex.def)             Requested size: 221.3985pt x 120.16223pt.

The ``<use>`` tokens and the requested sizes appear in the same order, so the
two lists are paired by position. Each ``\\includegraphics`` in the source is
then looked up in that list by filename.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Optional

from .config import DOUBLE_COLUMN_OFFSET, IMAGE_SCALE, SINGLE_COLUMN_OFFSET
from .errors import ImageNotMatchedError
from .models import Figure, ImageRecord, ImageReport, LogImage, TexDocument
from .utils import round_half_up

log = logging.getLogger(__name__)

USE_RE = re.compile(r"<use (.*?)>")
REQUESTED_SIZE_RE = re.compile(r"Requested size:\s*([\d.]+)pt\s*x\s*([\d.]+)pt")
FIGURE_RE = re.compile(r"\\begin\{figure(\*?)\}(.*?)\\end\{figure\*?\}", re.DOTALL)
INCLUDEGRAPHICS_RE = re.compile(
    r"\\includegraphics\*?\s*(?:\[[^\]]*\])?\s*\{([^}]*)\}", re.DOTALL
)
PAGE_SUFFIX_RE = re.compile(r",\s*page\s*\d+\s*$")


# ---------------------------------------------------------------------------
# Compilation log
# ---------------------------------------------------------------------------


def _clean_token(token: str) -> str:
    token = PAGE_SUFFIX_RE.sub("", token.strip())
    return token.strip('"')


def parse_log_images(log_text: str) -> tuple[list[LogImage], list[str]]:
    """Pair ``<use>`` tokens with requested sizes; return (images, warnings)."""
    tokens = [_clean_token(t) for t in USE_RE.findall(log_text)]
    sizes = [(float(w), float(h)) for w, h in REQUESTED_SIZE_RE.findall(log_text)]
    warnings: list[str] = []
    if len(tokens) != len(sizes):
        msg = (
            f"Compilation log lists {len(tokens)} images but {len(sizes)} "
            "requested sizes; unpaired entries were ignored"
        )
        log.warning(msg)
        warnings.append(msg)
    images = [
        LogImage(token=token, width=width, height=height)
        for token, (width, height) in zip(tokens, sizes)
    ]
    return images, warnings


# ---------------------------------------------------------------------------
# Source
# ---------------------------------------------------------------------------


def find_figures(text: str) -> list[Figure]:
    """Figure environments in document order with their included filenames."""
    figures = []
    for ordinal, match in enumerate(FIGURE_RE.finditer(text), start=1):
        filenames = [
            name.strip() for name in INCLUDEGRAPHICS_RE.findall(match.group(2))
        ]
        figures.append(
            Figure(
                ordinal=ordinal,
                two_column=match.group(1) == "*",
                filenames=filenames,
            )
        )
    return figures


def match_image(
    filename: str, images: list[LogImage]
) -> tuple[LogImage, Optional[str]]:
    """Find the first log entry whose token contains *filename*.

    Returns the entry and a warning when several different files matched.
    """
    needle = filename[2:] if filename.startswith("./") else filename
    candidates = [image for image in images if needle and needle in image.token]
    if not candidates:
        raise ImageNotMatchedError(f"{filename} not found in the compilation log")

    distinct = list(dict.fromkeys(image.token for image in candidates))
    warning = None
    if len(distinct) > 1:
        warning = (
            f"{filename} matches several log entries ({', '.join(distinct)}); "
            f"using {candidates[0].token}"
        )
    return candidates[0], warning


# ---------------------------------------------------------------------------
# Formula
# ---------------------------------------------------------------------------


def aspect_ratio(width: float, height: float) -> float:
    """Width over height, rounded half-up to three decimals."""
    if width <= 0 or height <= 0:
        raise ImageNotMatchedError(f"invalid requested size {width}pt x {height}pt")
    ratio = round_half_up(width / height, 3)
    if ratio <= 0:
        raise ImageNotMatchedError(
            f"aspect ratio of {width}pt x {height}pt rounds to {ratio}"
        )
    return ratio


def image_word_equivalent(ratio: float, two_column: bool = False) -> int:
    if two_column:
        return math.ceil(IMAGE_SCALE / (0.5 * ratio) + DOUBLE_COLUMN_OFFSET)
    return math.ceil(IMAGE_SCALE / ratio + SINGLE_COLUMN_OFFSET)


def estimate_images(document: TexDocument) -> ImageReport:
    """Estimate every image included inside a figure environment.

    Images that cannot be matched to the log are kept as zero-word records
    carrying a warning so the remaining images are still estimated.
    """
    log_images, warnings = parse_log_images(document.log)
    report = ImageReport(warnings=warnings)

    for figure in find_figures(document.text):
        for filename in figure.filenames:
            record = ImageRecord(
                figure=figure.ordinal,
                filename=filename,
                two_column=figure.two_column,
            )
            try:
                entry, ambiguity = match_image(filename, log_images)
                record.token = entry.token
                record.width = entry.width
                record.height = entry.height
                record.aspect_ratio = aspect_ratio(entry.width, entry.height)
                record.words = image_word_equivalent(
                    record.aspect_ratio, figure.two_column
                )
            except ImageNotMatchedError as exc:
                record.words = 0
                record.warning = str(exc)
                log.warning("Figure %s: %s", figure.ordinal, exc)
                report.warnings.append(f"Figure {figure.ordinal}: {exc}")
            else:
                if ambiguity:
                    log.warning("Figure %s: %s", figure.ordinal, ambiguity)
                    report.warnings.append(f"Figure {figure.ordinal}: {ambiguity}")
            report.records.append(record)

    if log_images and not report.records:
        msg = (
            f"Compilation log lists {len(log_images)} images but none is "
            "included inside a figure environment"
        )
        log.warning(msg)
        report.warnings.append(msg)

    log.info("Images: %s estimated, %s words", len(report.records), report.total)
    return report
