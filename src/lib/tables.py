r"""
Tabular text -> markup converter

Backs the .import_table{path} directive. Input is plain text where '&'
separates the items of a row and '$' separates rows; either can be written
literally as '\&' or '\$'. A trailing separator before end of input is
optional.

Example:
    name & age $
    Ada & 36 $

converts to:

    table{row{text{name }text{ age }}row{text{ Ada }text{ 36 }}}
"""

from typing import List

from pygments.lexer import RegexLexer
from pygments.token import Punctuation, Other

from .buffer import whitespace_collapse
from .escapes import EscapeGuard, TABLE

NextItem = Punctuation.NextItem
NextRow = Punctuation.NextRow


class TableLexer(RegexLexer):
    """Lexer for '&' / '$' separated tabular text"""

    name = 'vvsml table'
    aliases = ['vvsml-table']
    filenames = []

    tokens = {
        'root': [
            (r'&', NextItem),
            (r'\$', NextRow),
            (r'[^&$]+', Other),
        ],
    }


def rows_split(text: str) -> List[List[str]]:
    """
    Split protected tabular text into rows of raw items

    Whitespace-only leftovers (e.g. the newline after a final '$') do not
    create items.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    accum = ""

    for _, kind, value in TableLexer().get_tokens_unprocessed(text):
        if kind is NextItem:
            row.append(accum)
            accum = ""
        elif kind is NextRow:
            # a trailing '&' is not needed for the last item of a row
            if accum.strip():
                row.append(accum)
            accum = ""
            rows.append(row)
            row = []
        else:
            accum += value

    if accum.strip():
        row.append(accum)
    if row:
        rows.append(row)

    return rows


def table_convert(text: str, path: str = "<table>") -> str:
    """
    Convert tabular text to a table{row{text{...}...}...} markup snippet

    Args:
        text: Tabular source text
        path: Path of the table file, for diagnostics

    Returns:
        Markup snippet with whitespace runs collapsed to single spaces
    """
    guard = EscapeGuard(TABLE, path)
    rows = rows_split(guard.protect(text))

    out = "table{"
    for row in rows:
        out += "row{"
        for item in row:
            out += f"text{{{item}}}"
        out += "}"
    out += "}"

    return whitespace_collapse(guard.deprotect(out))
