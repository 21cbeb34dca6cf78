"""Allow ``python -m pagesim``."""

from pagesim.cli import run

run()
