"""Manuscript discovery and compilation-log loading."""

from __future__ import annotations

import logging
import subprocess
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional

from .config import COMPILE_TIMEOUT_S, LATEX_COMMAND, CountConfig
from .errors import (
    CompilationFailedError,
    CompilationTimeoutError,
    SourceNotFoundError,
)
from .models import TexDocument
from .utils import strip_comments

log = logging.getLogger(__name__)

TEX_SUFFIX = ".tex"

# compiler(source_path, output_dir) -> (exit_status, log_text)
Compiler = Callable[[Path, Path], tuple[int, str]]


# ---------------------------------------------------------------------------
# Local filesystem
# ---------------------------------------------------------------------------


def resolve_source(identifier: str | Path) -> Path:
    """Return the ``.tex`` path for *identifier*, with or without its suffix."""
    path = Path(identifier).expanduser()
    if path.suffix != TEX_SUFFIX:
        path = path.with_name(path.name + TEX_SUFFIX)
    if not path.is_file():
        raise SourceNotFoundError(f"The file {path} doesn't exist")
    return path.resolve()


def _read_log(path: Path) -> str:
    # pdflatex writes logs in whatever encoding the input used
    return path.read_text(encoding="utf-8", errors="replace")


# ---------------------------------------------------------------------------
# pdflatex
# ---------------------------------------------------------------------------


def run_pdflatex(
    source_path: Path,
    output_dir: Path,
    *,
    timeout: float = COMPILE_TIMEOUT_S,
    executable: str = LATEX_COMMAND,
) -> tuple[int, str]:
    """Compile *source_path* into *output_dir*; return (exit_status, log_text)."""
    cmd = [
        executable,
        "-interaction=nonstopmode",
        f"-output-directory={output_dir}",
        source_path.name,
    ]
    log.debug("run_pdflatex: %s (cwd=%s)", " ".join(cmd), source_path.parent)
    try:
        completed = subprocess.run(
            cmd,
            cwd=source_path.parent,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        partial = output_dir / f"{source_path.stem}.log"
        raise CompilationTimeoutError(
            f"{executable} did not finish within {timeout:.0f}s",
            log_text=_read_log(partial) if partial.exists() else "",
        ) from exc
    except OSError as exc:
        raise CompilationFailedError(f"Could not run {executable}: {exc}") from exc

    log_file = output_dir / f"{source_path.stem}.log"
    log_text = _read_log(log_file) if log_file.exists() else completed.stdout
    return completed.returncode, log_text


def load_document(
    identifier: str | Path,
    config: Optional[CountConfig] = None,
    compiler: Optional[Compiler] = None,
) -> TexDocument:
    """Load a manuscript and its compilation log.

    The log is read from ``<name>.log`` beside the source. When it is absent the
    source is compiled into a scratch directory, which is removed afterwards
    whether or not compilation succeeded.
    """
    config = config or CountConfig()
    source_path = resolve_source(identifier)
    text = strip_comments(source_path.read_text(encoding="utf-8", errors="replace"))

    log_path = source_path.with_suffix(".log")
    if log_path.is_file():
        log.info("Using compilation log %s", log_path)
        return TexDocument(
            path=source_path,
            text=text,
            log=_read_log(log_path),
            log_path=log_path,
        )

    if compiler is None:

        def compiler(src: Path, out: Path) -> tuple[int, str]:
            return run_pdflatex(
                src,
                out,
                timeout=config.compile_timeout,
                executable=config.latex_command,
            )

    log.info("%s not found, compiling %s ...", log_path.name, source_path.name)
    t0 = time.perf_counter()
    with tempfile.TemporaryDirectory(prefix="texprlcount-") as tmpdir:
        status, log_text = compiler(source_path, Path(tmpdir))
    log.info("Compilation finished in %.2fs (status=%s)", time.perf_counter() - t0, status)

    if status != 0:
        raise CompilationFailedError(
            "LaTeX compilation failed. Check input .tex file.",
            log_text=log_text,
        )
    return TexDocument(path=source_path, text=text, log=log_text, compiled=True)
