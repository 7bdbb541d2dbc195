"""
Source buffer helpers

The document being preprocessed is an ordinary str. Every resolved directive
produces a new value by replacing an offset range; these helpers do that
surgery and translate offsets into line numbers for diagnostics.
"""

import re
from typing import Iterable, Tuple

Edit = Tuple[int, int, str]

WHITESPACE = re.compile(r'\s+')


def spans_replace(text: str, edits: Iterable[Edit]) -> str:
    """
    Apply (start, end, replacement) edits to text.

    Edits are applied by descending start offset, so the offsets of edits
    not yet applied stay valid while the text changes length. Spans must not
    overlap.

    Example:
        >>> spans_replace("a.x{1}b.y{2}", [(1, 6, "X"), (7, 12, "Y")])
        'aXbY'
    """
    for start, end, replacement in sorted(edits, key=lambda edit: edit[0], reverse=True):
        text = text[:start] + replacement + text[end:]
    return text


def line_at(text: str, offset: int) -> int:
    """1-based line number of offset in text"""
    return 1 + text.count('\n', 0, offset)


def whitespace_collapse(text: str) -> str:
    """Replace every run of whitespace with a single space"""
    return WHITESPACE.sub(' ', text)


def braces_count(text: str) -> Tuple[int, int]:
    """Return the number of '{' and '}' characters in text"""
    return text.count('{'), text.count('}')
