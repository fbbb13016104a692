"""Abstract extraction and texcount-based word counting."""

from __future__ import annotations

import logging
import re
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional

from .config import (
    COUNT_TIMEOUT_S,
    EXCLUDED_SECTIONS,
    TEXCOUNT_COMMAND,
    TEXCOUNT_SUM_WEIGHTS,
    CountConfig,
)
from .errors import CounterUnavailableError, SectionNotFoundError, UnparseableOutputError
from .models import TexDocument, TextCount
from .utils import remove_line_breaks

log = logging.getLogger(__name__)

ABSTRACT_RE = re.compile(r"\\begin\{abstract\}(.*?)\\end\{abstract\}", re.DOTALL)
SUM_COUNT_RE = re.compile(r"Sum\s+count:\s+(\d+)")
RULES_FILE_NAME = "tcrules"

# counter(source_path, options) -> summary text
Counter = Callable[[Path, list[str]], str]


# ---------------------------------------------------------------------------
# Abstract
# ---------------------------------------------------------------------------


def extract_abstract(text: str) -> str:
    """Return the body of the first abstract environment in *text*."""
    match = ABSTRACT_RE.search(text)
    if match is None:
        raise SectionNotFoundError("No \\begin{abstract}...\\end{abstract} found")
    return match.group(1)


def abstract_length(text: str) -> int:
    """Character count of the abstract, ignoring line breaks."""
    return len(remove_line_breaks(extract_abstract(text)))


# ---------------------------------------------------------------------------
# texcount
# ---------------------------------------------------------------------------


def write_rules_file(
    directory: Path, sections: tuple[str, ...] = EXCLUDED_SECTIONS
) -> Path:
    """Write a texcount rule file that gives *sections* zero weight."""
    path = directory / RULES_FILE_NAME
    path.write_text(
        "\n".join(f"%group {name} 0 0" for name in sections) + "\n",
        encoding="utf-8",
    )
    return path


def build_texcount_options(rules_path: Path) -> list[str]:
    weights = ",".join(str(w) for w in TEXCOUNT_SUM_WEIGHTS)
    return [f"-opt={rules_path}", "-utf8", f"-sum={weights}"]


def run_texcount(
    source_path: Path,
    options: list[str],
    *,
    timeout: float = COUNT_TIMEOUT_S,
    executable: str = TEXCOUNT_COMMAND,
) -> str:
    """Run texcount on *source_path* and return its summary output."""
    cmd = [executable, source_path.name, *options]
    log.debug("run_texcount: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=source_path.parent,
            check=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise CounterUnavailableError(
            f"{executable} not found; install TeXcount to count words"
        ) from exc
    except subprocess.CalledProcessError as exc:
        raise CounterUnavailableError(
            f"{executable} exited with status {exc.returncode}: {(exc.stderr or '').strip()}"
        ) from exc
    except (subprocess.TimeoutExpired, OSError) as exc:
        raise CounterUnavailableError(f"Could not run {executable}: {exc}") from exc
    return completed.stdout


def parse_sum_count(summary: str) -> int:
    """Extract the ``Sum count: N`` figure from texcount output."""
    match = SUM_COUNT_RE.search(summary)
    if match is None:
        raise UnparseableOutputError("texcount output has no 'Sum count' line")
    return int(match.group(1))


def count_text_words(
    document: TexDocument,
    config: Optional[CountConfig] = None,
    counter: Optional[Counter] = None,
) -> TextCount:
    """Count words in text, headers, captions and inline math.

    Displayed math is left out here; it is weighted per line separately. The
    comment-stripped source and the rule file are written to a scratch
    directory so nothing lands beside the manuscript.
    """
    config = config or CountConfig()
    if counter is None:

        def counter(src: Path, options: list[str]) -> str:
            return run_texcount(
                src,
                options,
                timeout=config.count_timeout,
                executable=config.texcount_command,
            )

    with tempfile.TemporaryDirectory(prefix="texprlcount-") as tmpdir:
        workdir = Path(tmpdir)
        source_copy = workdir / document.path.name
        source_copy.write_text(document.text, encoding="utf-8")
        rules = write_rules_file(workdir, config.excluded_sections)
        summary = counter(source_copy, build_texcount_options(rules))

    total = parse_sum_count(summary)
    log.info("texcount: %s words in text, headers, captions and inline math", total)
    return TextCount(total=total, summary=summary)
