"""Exceptions raised while estimating a manuscript's length."""

from __future__ import annotations


class LengthCountError(Exception):
    """Base class for every error raised by the estimator."""


class SourceNotFoundError(LengthCountError):
    """The ``.tex`` source could not be located."""


class CompilationFailedError(LengthCountError):
    """No usable compilation log could be produced.

    ``log_text`` carries the compiler's own output so callers can show it.
    """

    def __init__(self, message: str, log_text: str = "") -> None:
        super().__init__(message)
        self.log_text = log_text


class CompilationTimeoutError(CompilationFailedError):
    """The compiler did not finish within the configured timeout."""


class SectionNotFoundError(LengthCountError):
    """A delimited section (e.g. the abstract) is missing."""


class CounterUnavailableError(LengthCountError):
    """The word-counting tool could not be run."""


class UnparseableOutputError(LengthCountError):
    """The word-counting tool's summary lacks the expected figure."""


class ImageNotMatchedError(LengthCountError):
    """An included image has no usable entry in the compilation log."""
