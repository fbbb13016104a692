"""CLI shim -- delegates to prlcount.cli.main().

Usage:
    python texprlcount.py paper.tex
    python texprlcount.py paper --json
"""

from prlcount.cli import main

if __name__ == "__main__":
    main()
