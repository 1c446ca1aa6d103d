"""Module entrypoint for running formatcleaner as ``python -m formatcleaner``."""

from __future__ import annotations

from formatcleaner.cli import main


if __name__ == "__main__":
    main()
