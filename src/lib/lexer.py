"""
Lexers for vvsml markup

Two independent token vocabularies are defined as Pygments RegexLexers:

- DirectiveLexer: preprocessor keywords (.define_macro, .macro, .include,
  .link, .format, .unicode, .replace_all, .import_table) and braces
- DocumentLexer: document tags (main, chapter, section, subsection, text,
  list, ordered_list, table, row) and braces

Anything else lexes as Whitespace or Other and is treated as noise by the
consumers. TokenStream wraps either lexer's output with the cursor operations
the preprocessor and parser need, including nested block reading with an
explicit depth counter.

Token types:
- Token.Directive.*: one per DirectiveKind (e.g. Token.Directive.DefineMacro)
- Token.Tag.*: one per tagged NodeKind (e.g. Token.Tag.OrderedList)
- Punctuation.BlockStart / Punctuation.BlockEnd: '{' and '}'
"""

import re
from typing import Any, Dict, List, Optional, Type

from pygments.lexer import RegexLexer
from pygments.token import Token, Punctuation, Whitespace, Other

from ..models.directives import DirectiveKind
from ..models.parser import TokenMatch, BlockSpan, NodeKind
from .buffer import line_at
from .errors import VvsmlError, DirectiveError


def tokenName_make(name: str) -> str:
    """'ORDERED_LIST' -> 'OrderedList'"""
    return ''.join(part.capitalize() for part in name.split('_'))


BlockStart = Punctuation.BlockStart
BlockEnd = Punctuation.BlockEnd

DIRECTIVE_TOKENS: Dict[DirectiveKind, Any] = {
    kind: getattr(Token.Directive, tokenName_make(kind.name)) for kind in DirectiveKind
}

TAG_TOKENS: Dict[NodeKind, Any] = {
    kind: getattr(Token.Tag, tokenName_make(kind.name)) for kind in NodeKind if kind.value
}

DIRECTIVE_KINDS: Dict[Any, DirectiveKind] = {token: kind for kind, token in DIRECTIVE_TOKENS.items()}
TAG_KINDS: Dict[Any, NodeKind] = {token: kind for kind, token in TAG_TOKENS.items()}


class DirectiveLexer(RegexLexer):
    """
    Lexer for preprocessor directives

    Example:
        .link{home}{index.html}

    Tokens:
        .link → Token.Directive.Link
        { → Punctuation.BlockStart
        home → Other
        } → Punctuation.BlockEnd
    """

    name = 'vvsml directives'
    aliases = ['vvsml-directives']
    filenames = []

    tokens = {
        'root': [
            (r'\s+', Whitespace),
            *[(re.escape(kind.keyword) + r'(?!\w)', token) for kind, token in DIRECTIVE_TOKENS.items()],
            (r'\{', BlockStart),
            (r'\}', BlockEnd),
            (r'[^\s{}.]+', Other),
            (r'\.', Other),
        ],
    }


class DocumentLexer(RegexLexer):
    """
    Lexer for document tags

    Tags only match as whole words: "maintain" is Other, "main" is a tag.

    Example:
        main{chapter{Intro}}

    Tokens:
        main → Token.Tag.Contents
        { → Punctuation.BlockStart
        chapter → Token.Tag.Chapter
        ...
    """

    name = 'vvsml'
    aliases = ['vvsml']
    filenames = ['*.vvsml']

    tokens = {
        'root': [
            (r'\s+', Whitespace),
            *[(kind.value + r'(?!\w)', token) for kind, token in TAG_TOKENS.items()],
            (r'\{', BlockStart),
            (r'\}', BlockEnd),
            (r'\w+', Other),
            (r'[^\s\w{}]+', Other),
        ],
    }


DIRECTIVE_LEXER = DirectiveLexer()


def directives_present(text: str) -> bool:
    """True if any directive keyword occurs in text"""
    return any(
        kind in DIRECTIVE_KINDS
        for _, kind, _ in DIRECTIVE_LEXER.get_tokens_unprocessed(text)
    )


def token_describe(token: Optional[TokenMatch]) -> str:
    """Human-readable name of a token for diagnostics"""
    if token is None:
        return "end of input"
    if token.kind is BlockStart:
        return "block start"
    if token.kind is BlockEnd:
        return "block end"
    return f"'{token.text}'"


class TokenStream:
    """
    Cursor over the tokens of one source buffer

    The whole buffer is lexed once up front; offsets in every TokenMatch
    refer to that buffer.

    Args:
        lexer: DirectiveLexer or DocumentLexer instance
        source: Text to tokenize
        path: Source path for diagnostics
        error: VvsmlError subclass raised for malformed blocks
    """

    def __init__(
        self,
        lexer: RegexLexer,
        source: str,
        path: str = "<input>",
        error: Type[VvsmlError] = DirectiveError,
    ) -> None:
        self.source = source
        self.path = path
        self.error = error
        self.tokens: List[TokenMatch] = [
            TokenMatch(kind=kind, start=pos, end=pos + len(value), text=value)
            for pos, kind, value in lexer.get_tokens_unprocessed(source)
        ]
        self.index = 0

    def __iter__(self) -> 'TokenStream':
        return self

    def __next__(self) -> TokenMatch:
        if self.index >= len(self.tokens):
            raise StopIteration
        token = self.tokens[self.index]
        self.index += 1
        return token

    def line_number(self, token: Optional[TokenMatch]) -> int:
        """1-based line of token, or of end of input when token is None"""
        offset = token.start if token is not None else len(self.source)
        return line_at(self.source, offset)

    def significant_peek(self) -> Optional[TokenMatch]:
        """Next non-whitespace token without consuming it"""
        index = self.index
        while index < len(self.tokens) and self.tokens[index].kind in Whitespace:
            index += 1
        return self.tokens[index] if index < len(self.tokens) else None

    def significant_next(self) -> Optional[TokenMatch]:
        """Consume and return the next non-whitespace token"""
        for token in self:
            if token.kind not in Whitespace:
                return token
        return None

    def blockStart_expect(self, keyword: TokenMatch) -> TokenMatch:
        """
        Consume the '{' that must follow keyword (whitespace allowed between)

        Raises:
            self.error: if anything else comes next
        """
        token = self.significant_next()
        if token is None or token.kind is not BlockStart:
            raise self.error(
                f"expected block start after {keyword.text}, found {token_describe(token)}",
                self.path,
                self.line_number(token if token is not None else keyword),
            )
        return token

    def block_read(self, keyword: TokenMatch) -> BlockSpan:
        """
        Read one balanced {...} block following keyword

        Nested blocks are passed over with a depth counter, so nesting depth
        in the input never affects stack depth.

        Returns:
            BlockSpan of the block's interior

        Raises:
            self.error: on a missing '{' or a block that never closes
        """
        opening = self.blockStart_expect(keyword)
        depth = 1
        for token in self:
            if token.kind is BlockStart:
                depth += 1
            elif token.kind is BlockEnd:
                depth -= 1
                if depth == 0:
                    return BlockSpan(start=opening.end, end=token.start, stop=token.end)

        raise self.error(
            f"unterminated block after {keyword.text}", self.path, self.line_number(opening)
        )

    def text(self, span: BlockSpan) -> str:
        """Raw interior text of a block"""
        return self.source[span.start:span.end]
