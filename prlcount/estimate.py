"""End-to-end length estimate for a single manuscript."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from .config import CountConfig
from .counting import count_displayed_math, count_tables
from .errors import SectionNotFoundError
from .images import estimate_images
from .models import CountBreakdown, TexDocument
from .report import aggregate
from .sources import Compiler, load_document
from .text import Counter, abstract_length, count_text_words

log = logging.getLogger(__name__)


def estimate_document(
    document: TexDocument,
    config: Optional[CountConfig] = None,
    counter: Optional[Counter] = None,
) -> CountBreakdown:
    """Run every extractor over a loaded document and aggregate the results.

    A missing abstract only degrades the report. texcount failures propagate,
    since the text count dominates the total.
    """
    config = config or CountConfig()
    warnings: list[str] = []

    t0 = time.perf_counter()
    text = count_text_words(document, config, counter=counter)
    log.info("Text count completed in %.2fs", time.perf_counter() - t0)

    try:
        abstract_chars: Optional[int] = abstract_length(document.text)
    except SectionNotFoundError as exc:
        log.warning("Abstract not found: %s", exc)
        warnings.append(f"Abstract not found: {exc}")
        abstract_chars = None

    math = count_displayed_math(document.text, config)
    tables = count_tables(document.text, config)

    t1 = time.perf_counter()
    images = estimate_images(document)
    log.info("Image estimate completed in %.2fs", time.perf_counter() - t1)

    breakdown = aggregate(
        document.name,
        text,
        abstract_chars,
        math,
        tables,
        images,
        word_limit=config.word_limit,
        warnings=warnings,
    )
    log.info(
        "Estimate for %s: %s word-equivalents (limit %s)",
        document.name,
        breakdown.total,
        breakdown.word_limit,
    )
    return breakdown


def estimate_length(
    identifier: str | Path,
    config: Optional[CountConfig] = None,
    *,
    compiler: Optional[Compiler] = None,
    counter: Optional[Counter] = None,
) -> CountBreakdown:
    """Load *identifier* (with or without ``.tex``) and estimate its length."""
    config = config or CountConfig()
    document = load_document(identifier, config, compiler=compiler)
    return estimate_document(document, config, counter=counter)
