"""
Compiler diagnostics

Every fatal condition in vvsml is raised as a subclass of VvsmlError carrying
the diagnostic fields (kind, file, line, message). The core never prints or
exits; only the driver in __main__ turns a VvsmlError into a message and a
non-zero exit status.
"""

from typing import Optional


class VvsmlError(Exception):
    """
    Base class for all vvsml diagnostics

    Attributes:
        kind: Short category name (e.g. "directive", "parse")
        file: Source path the diagnostic refers to
        line: 1-based line number, or None when no position applies
        message: Human-readable description
    """

    kind = "error"

    def __init__(self, message: str, file: str = "<input>", line: Optional[int] = None) -> None:
        self.file = file
        self.line = line
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.file} - {self.message}"
        return f"{self.file}:{self.line} - {self.message}"


class UsageError(VvsmlError):
    """Raised by the driver for bad command-line usage"""
    kind = "usage"


class SourceReadError(VvsmlError):
    """Raised when the source document cannot be read"""
    kind = "source"


class DirectiveError(VvsmlError):
    """Raised for malformed directives, escapes and brace imbalance"""
    kind = "directive"


class ParseError(VvsmlError):
    """Raised when a token is not acceptable to the current production"""
    kind = "parse"


class CodeGenError(VvsmlError):
    """Raised when the code generator is handed an invalid tree"""
    kind = "codegen"
