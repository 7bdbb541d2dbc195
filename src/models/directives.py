"""
Directive specification and metadata models

Defines the closed set of preprocessor directives, the preprocessing family
each belongs to, and the structures the registry and preprocessor exchange.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List, Tuple


class DirectiveCategory(Enum):
    """
    Preprocessing families, one pipeline stage each

    Declaration order is the order in which the stages run.
    """
    MACRO = "macro"              # .define_macro{}{}, .macro{}
    INCLUDE = "include"          # .include{}
    TABLE = "table"              # .import_table{}
    LINK = "link"                # .link{}{}
    FORMAT = "format"            # .format{}{}
    UNICODE = "unicode"          # .unicode{}
    REPLACE = "replace"          # .replace_all{}{}


class DirectiveKind(Enum):
    """
    Every directive the preprocessor understands

    The value is the keyword as written in source, without its leading dot.
    """
    DEFINE_MACRO = "define_macro"
    MACRO = "macro"
    INCLUDE = "include"
    LINK = "link"
    FORMAT = "format"
    UNICODE = "unicode"
    REPLACE_ALL = "replace_all"
    IMPORT_TABLE = "import_table"

    @property
    def keyword(self) -> str:
        """Keyword as it appears in source (e.g. '.define_macro')"""
        return f".{self.value}"


@dataclass
class Directive:
    """
    One directive occurrence located in a source buffer

    Attributes:
        kind: Which directive this is
        start: Offset of the keyword's leading dot
        end: Offset just past the closing brace of the last argument
        args: Raw (still protected) text of each block argument
        line_number: 1-based line of the keyword in the buffer it was found in
    """
    kind: DirectiveKind
    start: int
    end: int
    args: Tuple[str, ...]
    line_number: int


@dataclass
class DirectiveSpec:
    """
    Specification for a preprocessor directive

    Attributes:
        kind: Directive this spec describes
        category: Pipeline stage that resolves it
        arity: Number of block arguments following the keyword
        description: Human-readable description
        handler: Resolution function (directive, run) -> replacement text
        examples: Example usage strings
        requires_resolved_args: Whether the handler must wait until no directive
            remains inside its arguments
    """
    kind: DirectiveKind
    category: DirectiveCategory
    arity: int
    description: str
    handler: Callable
    examples: List[str] = field(default_factory=list)
    requires_resolved_args: bool = False

    @property
    def keyword(self) -> str:
        return self.kind.keyword
