"""Trace source — the page-reference string a simulation replays.

A trace file is plain text: decimal integers separated by any amount
of whitespace or newlines, no header, no footer.  Each token is one
page reference.

The loaded trace is a tuple, so it is index-addressable (the Optimal
policy looks ahead by position) and immutable (several runs can share
one trace without copying or locking).
"""

import re
from pathlib import Path
from typing import TypeAlias

from pagesim.errors import TraceFormatError

Trace: TypeAlias = tuple[int, ...]

# Optional minus sign, then ASCII digits only.
_DECIMAL = re.compile(r"-?[0-9]+")


def parse_trace(text: str) -> Trace:
    """Parse whitespace-separated integers into a trace.

    Args:
        text: The raw trace text.  Empty or blank text is a valid,
            empty trace.

    Returns:
        The page references in order.

    Raises:
        TraceFormatError: If a token is not a decimal integer.

    """
    pages: list[int] = []
    for position, token in enumerate(text.split()):
        if not _DECIMAL.fullmatch(token):
            raise TraceFormatError(token, position)
        pages.append(int(token))
    return tuple(pages)


def load_trace(path: str | Path) -> Trace:
    """Read and parse a trace file.

    The file is read in one go and closed before parsing starts.

    Raises:
        OSError: If the file cannot be opened or read, or is not
            valid UTF-8 text.
        TraceFormatError: If the file contains a non-integer token.

    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"Trace {path} is not valid UTF-8 text"
        raise OSError(msg) from e
    return parse_trace(text)
