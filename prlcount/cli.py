"""CLI entrypoint for the PRL length estimate.

Usage:
    texprlcount paper.tex
    texprlcount paper                      # suffix is optional
    texprlcount paper --json
    texprlcount paper --compile-timeout 300 --verbose
    texprlcount paper --math-line-weight 12 --word-limit 3500
"""

from __future__ import annotations

import argparse
import json
import logging
from logging.handlers import RotatingFileHandler
import sys
import time
from pathlib import Path

from .config import COMPILE_TIMEOUT_S, MATH_LINE_WEIGHT, WORD_LIMIT, CountConfig
from .errors import CompilationFailedError, LengthCountError

log = logging.getLogger(__name__)


def _setup_logging(
    *,
    verbose: bool,
    detailed_logging: bool,
    log_file: Path | None,
) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    root_level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(root_level)

    console_fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    detailed_fmt = (
        "%(asctime)s | %(levelname)-8s | %(name)s | "
        "%(filename)s:%(lineno)d | %(message)s"
    )
    formatter = logging.Formatter(
        detailed_fmt if detailed_logging else console_fmt,
        "%Y-%m-%d %H:%M:%S",
    )

    # stdout carries the report
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(root_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    resolved_log_file = log_file
    if resolved_log_file is None and detailed_logging:
        resolved_log_file = Path("texprlcount.log")

    if resolved_log_file is not None:
        resolved_log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            resolved_log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(detailed_fmt, "%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texprlcount",
        description=(
            "Estimate the length of a LaTeX manuscript following the PRL "
            "length guide (text, displayed math, tables and figures)."
        ),
    )
    parser.add_argument(
        "document",
        nargs="?",
        help="Manuscript to measure, with or without the .tex suffix",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the breakdown as JSON instead of the text report",
    )
    parser.add_argument(
        "--compile-timeout",
        type=float,
        default=COMPILE_TIMEOUT_S,
        help=f"Seconds to wait for pdflatex when no .log exists (default: {COMPILE_TIMEOUT_S:.0f})",
    )
    parser.add_argument(
        "--math-line-weight",
        type=float,
        default=MATH_LINE_WEIGHT,
        help=f"Word-equivalents per displayed equation line (default: {MATH_LINE_WEIGHT})",
    )
    parser.add_argument(
        "--word-limit",
        type=int,
        default=WORD_LIMIT,
        help=f"Advisory length limit shown in the report (default: {WORD_LIMIT})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--detailed-logging",
        action="store_true",
        help="Enable detailed logging (file/line, rotating log file)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional log file path (default: ./texprlcount.log in detailed mode)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return _build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Estimate one manuscript and print the report."""
    from .estimate import estimate_length
    from .report import breakdown_to_dict, render_report

    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.document is None:
        parser.print_usage(sys.stdout)
        return

    _setup_logging(
        verbose=args.verbose,
        detailed_logging=args.detailed_logging,
        log_file=args.log_file,
    )

    config = CountConfig(
        math_line_weight=args.math_line_weight,
        word_limit=args.word_limit,
        compile_timeout=args.compile_timeout,
    )

    t0 = time.perf_counter()
    try:
        breakdown = estimate_length(args.document, config)
    except CompilationFailedError as exc:
        if exc.log_text:
            sys.stdout.write(exc.log_text)
            if not exc.log_text.endswith("\n"):
                sys.stdout.write("\n")
        log.error("%s", exc)
        sys.exit(1)
    except LengthCountError as exc:
        log.error("%s", exc)
        sys.exit(1)
    log.info("Finished in %.2fs", time.perf_counter() - t0)

    if args.json:
        sys.stdout.write(json.dumps(breakdown_to_dict(breakdown), indent=2) + "\n")
    else:
        sys.stdout.write(render_report(breakdown))
    sys.stdout.flush()


if __name__ == "__main__":
    main()
