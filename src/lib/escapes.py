r"""
Escape protection

Literal characters that would confuse a later stage (a brace in running text,
a dot in front of a directive keyword) are written with a backslash in source:
``\{``, ``\}``, ``\.``, ``\\``. protect() swaps each escape for an opaque
10-character protected code before any directive or tag is lexed, and
deprotect() swaps the codes back once the HTML has been rendered.

Protected codes look like ``@#':[;:LB]``. They contain none of the characters
the lexers care about, so braces hidden inside them are never counted as
structure.

Two schemes exist:
    DOCUMENT - the markup itself (strict: unsupported escapes are fatal)
    TABLE    - tabular text read by .import_table{} (lenient)
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from .buffer import spans_replace, line_at
from .errors import DirectiveError
from .log import LOG

ESCAPE_MARKER = re.compile(r'\\[\s\S]?')
PROTECTED_CODE = re.compile(r"@#':\[;:[A-Z][A-Z0-9_]\]")

# Single private-use characters standing in for protected codes while regex
# substitutions run (Supplementary Private Use Area-B).
SENTINEL_BASE = 0x10FF00


def code_make(tag: str) -> str:
    """
    Build the protected code for a two-letter tag.

    Example:
        >>> code_make("LB")
        "@#':[;:LB]"
    """
    return f"@#':[;:{tag}]"


@dataclass(frozen=True)
class EscapeScheme:
    """
    A character -> protected code table

    Attributes:
        name: Scheme name used in log output
        codes: Mapping from escapable character to its protected code
        strict: Whether unsupported or dangling escapes are fatal
    """
    name: str
    codes: Dict[str, str]
    strict: bool = True
    chars: Dict[str, str] = field(init=False, repr=False, compare=False)
    sentinels: Dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'chars', {code: ch for ch, code in self.codes.items()})
        object.__setattr__(self, 'sentinels', {
            code: chr(SENTINEL_BASE + index) for index, code in enumerate(self.codes.values())
        })


DOCUMENT = EscapeScheme(
    name="document",
    codes={
        '{': code_make("LB"),
        '}': code_make("RB"),
        '\\': code_make("BS"),
        '.': code_make("P_"),
        '@': code_make("AT"),
        ']': code_make("RK"),
    },
)

TABLE = EscapeScheme(
    name="table",
    codes={
        '&': code_make("AS"),
        '$': code_make("DS"),
    },
    strict=False,
)


class EscapeGuard:
    r"""
    Reversible protection of escaped characters

    Example:
        >>> guard = EscapeGuard()
        >>> guard.protect(r"Hi \{there\}")
        "Hi @#':[;:LB]there@#':[;:RB]"
        >>> guard.deprotect(guard.protect(r"Hi \{there\}"))
        'Hi {there}'
    """

    def __init__(self, scheme: EscapeScheme = DOCUMENT, path: str = "<input>") -> None:
        self.scheme = scheme
        self.path = path

    def protect(self, text: str) -> str:
        """
        Replace every escape marker with its protected code

        Markers are located in document order and replaced back-to-front.

        Raises:
            DirectiveError: (strict schemes) for a backslash at end of input or
                            a backslash before an unsupported character
        """
        edits = []
        for match in ESCAPE_MARKER.finditer(text):
            escaped = match.group()[1:]
            if not escaped:
                if self.scheme.strict:
                    raise DirectiveError(
                        "escaping inescapable character", self.path, line_at(text, match.start())
                    )
                continue

            code = self.scheme.codes.get(escaped)
            if code is None:
                if self.scheme.strict:
                    raise DirectiveError(
                        f"{escaped} cannot be escaped", self.path, line_at(text, match.start())
                    )
                continue

            edits.append((match.start(), match.end(), code))

        if edits:
            LOG(f"Protected {len(edits)} {self.scheme.name} escape(s)", level=3)
        return spans_replace(text, edits)

    def deprotect(self, text: str) -> str:
        """
        Replace every protected code with the character it stands for

        Sequences shaped like a protected code but unknown to this scheme are
        deleted.
        """
        edits = []
        for match in PROTECTED_CODE.finditer(text):
            ch: Optional[str] = self.scheme.chars.get(match.group())
            if ch is None:
                LOG(f"Dropping unknown protected sequence {match.group()}", level=3)
                ch = ""
            edits.append((match.start(), match.end(), ch))

        return spans_replace(text, edits)

    def shield(self, text: str) -> str:
        """
        Protect raw characters directly (no escape marker needed)

        Used on text produced from decoded data, which must not introduce
        structure of its own.

        Example:
            >>> EscapeGuard().shield("{")
            "@#':[;:LB]"
        """
        return ''.join(self.scheme.codes.get(ch, ch) for ch in text)

    def mask(self, text: str) -> str:
        """
        Swap every protected code of this scheme for a one-character sentinel

        Regular expressions run over masked text can neither split nor alter
        a code; unmask() restores them.

        Example:
            >>> guard = EscapeGuard()
            >>> guard.unmask(guard.mask("@#':[;:LB]")) == "@#':[;:LB]"
            True
        """
        return PROTECTED_CODE.sub(
            lambda match: self.scheme.sentinels.get(match.group(), match.group()), text
        )

    def unmask(self, text: str) -> str:
        """Swap sentinels left by mask() back to their protected codes"""
        return text.translate({ord(sentinel): code for code, sentinel in self.scheme.sentinels.items()})
