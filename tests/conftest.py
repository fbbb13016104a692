"""Shared fixtures for the length-estimate test suite.

A small REVTeX-style manuscript and a matching pdflatex log are written to a
temporary directory. texcount and pdflatex are replaced by fakes, so the suite
runs without a TeX installation.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Configure verbose logging for test debugging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
    force=True,
)
log = logging.getLogger("conftest")

ABSTRACT_LINES = ["a" * 40, "b" * 40, "c" * 40]

SAMPLE_TEX = (
    r"""\documentclass[prl,twocolumn]{revtex4-2}
\begin{document}
\title{A short letter}
\begin{abstract}
"""
    + "\n".join(ABSTRACT_LINES)
    + r"""
\end{abstract}
\maketitle
Body text with an inline $x$ equation and 50\% of the words. % not counted
\begin{equation}
E = mc^2
\end{equation}
\begin{align}
x &= 1 \\
y &= 2 \\
z &= 3
\end{align}
$$ e^{i\pi} + 1 = 0 $$
\[ F = ma \]
\begin{table}
\begin{tabular}{cc}
\hline
a & b \\
c & d \\
\hline
\end{tabular}
\end{table}
\begin{figure}
\includegraphics[width=\columnwidth]{fig1}
\caption{Single column.}
\end{figure}
\begin{figure*}
\includegraphics{fig2.pdf}
\caption{Double column.}
\end{figure*}
\begin{acknowledgments}
We thank everyone.
\end{acknowledgments}
\end{document}
"""
)

SAMPLE_LOG = """This is pdfTeX, Version 3.141592653-2.6-1.40.25 (TeX Live 2023)
<fig1.pdf, id=12, 200.0pt x 100.0pt>
File: fig1.pdf Graphic file (type pdf)
<use fig1.pdf>
Package pdftex.def Info: fig1.pdf  used on input line 27.
(pdftex.def)             Requested size: 200.0pt x 100.0pt.
<fig2.pdf, id=13, 300.0pt x 100.0pt>
File: fig2.pdf Graphic file (type pdf)
<use fig2.pdf>
Package pdftex.def Info: fig2.pdf  used on input line 31.
(pdftex.def)             Requested size: 300.0pt x 100.0pt.
 )
Output written on letter.pdf (4 pages, 120000 bytes).
"""

TEXCOUNT_SUMMARY = """File: letter.tex
Encoding: utf8
Sum count: 1000
Words in text: 950
Words in headers: 3
Words in float captions: 4
Number of headers: 0
Number of floats/tables/figures: 3
Number of math inlines: 43
Number of math displayed: 4
"""

# 1000 text + 6 math lines * 16 + (13 + 2 * 6.5) + (95 + 140)
SAMPLE_TOTAL = 1357


@pytest.fixture
def tex_dir(tmp_path: Path) -> Path:
    """Directory holding letter.tex and its compilation log."""
    (tmp_path / "letter.tex").write_text(SAMPLE_TEX, encoding="utf-8")
    (tmp_path / "letter.log").write_text(SAMPLE_LOG, encoding="utf-8")
    return tmp_path


@pytest.fixture
def tex_without_log(tmp_path: Path) -> Path:
    path = tmp_path / "letter.tex"
    path.write_text(SAMPLE_TEX, encoding="utf-8")
    return path


@pytest.fixture
def fake_counter():
    """texcount stand-in that records each call and returns a fixed summary."""
    calls: list[dict] = []

    def _counter(source_path: Path, options: list[str]) -> str:
        rules = next(o for o in options if o.startswith("-opt="))[len("-opt="):]
        calls.append(
            {
                "source": source_path,
                "options": list(options),
                "text": source_path.read_text(encoding="utf-8"),
                "rules": Path(rules).read_text(encoding="utf-8"),
            }
        )
        return TEXCOUNT_SUMMARY

    _counter.calls = calls
    return _counter
