"""
Parser for vvsml document markup

Transforms preprocessed markup into a document tree (DocumentNode).

Grammar:
    Root        := Contents*
    Contents    := 'main' '{' Item* '}'
    Item        := Chapter | Section | Subsection | Text | List | OrderedList | Table
    Chapter     := 'chapter' '{' rawtext '}'        (likewise section, subsection, text)
    List        := 'list' '{' Item* '}'             (likewise ordered_list)
    Table       := 'table' '{' Row* '}'
    Row         := 'row' '{' Item* '}'

Each production is one method, positioned just after its tag token. Words
between tags are noise and skipped; a brace or a tag the production does not
accept is a ParseError naming the acceptable tags, the token found and its
line.

Example:
    >>> root = Parser("main{chapter{Intro} list{text{a} text{b}}}").parse()
    >>> root.children[0].children[1].kind
    <NodeKind.LIST: 'list'>
"""

from typing import Callable, Dict, FrozenSet, Optional

from pygments.token import Other, Whitespace

from ..config import appsettings, AppSettings
from ..models.parser import DocumentNode, NodeKind, TokenMatch
from .buffer import whitespace_collapse
from .errors import ParseError
from .lexer import DocumentLexer, TokenStream, TAG_KINDS, BlockEnd, token_describe
from .log import LOG

DOCUMENT_LEXER = DocumentLexer()

ITEM_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.CHAPTER,
    NodeKind.SECTION,
    NodeKind.SUBSECTION,
    NodeKind.TEXT,
    NodeKind.LIST,
    NodeKind.ORDERED_LIST,
    NodeKind.TABLE,
})

# Which child tags each container production accepts.
ACCEPTS: Dict[NodeKind, FrozenSet[NodeKind]] = {
    NodeKind.ROOT: frozenset({NodeKind.CONTENTS}),
    NodeKind.CONTENTS: ITEM_KINDS,
    NodeKind.LIST: ITEM_KINDS,
    NodeKind.ORDERED_LIST: ITEM_KINDS,
    NodeKind.TABLE: frozenset({NodeKind.ROW}),
    NodeKind.ROW: ITEM_KINDS,
}


class Parser:
    """
    Recursive-descent parser for preprocessed vvsml markup

    Attributes:
        source: Preprocessed markup (escapes still protected)
        path: Source path for diagnostics
        settings: AppSettings (whitespace collapsing)
        stream: TokenStream over source
    """

    def __init__(
        self,
        source: str,
        path: str = "<input>",
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.source = source
        self.path = path
        self.settings = settings or appsettings
        self.stream = TokenStream(DOCUMENT_LEXER, source, path, ParseError)

        self.productions: Dict[NodeKind, Callable[[TokenMatch], DocumentNode]] = {
            NodeKind.CONTENTS: self.container_parse,
            NodeKind.CHAPTER: self.leaf_parse,
            NodeKind.SECTION: self.leaf_parse,
            NodeKind.SUBSECTION: self.leaf_parse,
            NodeKind.TEXT: self.leaf_parse,
            NodeKind.LIST: self.container_parse,
            NodeKind.ORDERED_LIST: self.container_parse,
            NodeKind.TABLE: self.container_parse,
            NodeKind.ROW: self.container_parse,
        }

    def parse(self) -> DocumentNode:
        """
        Parse the whole source into a tree rooted at a ROOT node

        Raises:
            ParseError: on a token no production accepts, or an unterminated block
        """
        root = DocumentNode(kind=NodeKind.ROOT)
        while True:
            token = self.tag_next(NodeKind.ROOT)
            if token is None:
                break
            root.child_add(self.production_run(token))

        LOG(f"Parsed {len(root.children)} main block(s)", level=2)
        return root

    def production_run(self, token: TokenMatch) -> DocumentNode:
        """Dispatch a tag token to its production"""
        return self.productions[TAG_KINDS[token.kind]](token)

    def tag_next(self, parent: NodeKind) -> Optional[TokenMatch]:
        """
        Advance to the next tag acceptable inside parent

        Returns:
            The tag token, or None at the parent's closing brace (or at end of
            input for ROOT)

        Raises:
            ParseError: for any other brace or tag, or end of input inside a block
        """
        accepted = ACCEPTS[parent]
        for token in self.stream:
            if token.kind in Whitespace or token.kind in Other:
                continue
            if TAG_KINDS.get(token.kind) in accepted:
                return token
            if token.kind is BlockEnd and parent is not NodeKind.ROOT:
                return None
            self.unexpected(accepted, token)

        if parent is not NodeKind.ROOT:
            self.unexpected(accepted, None)
        return None

    def unexpected(self, accepted: FrozenSet[NodeKind], token: Optional[TokenMatch]) -> None:
        """Raise ParseError listing the acceptable tags"""
        names = ', '.join(sorted(kind.value for kind in accepted))
        raise ParseError(
            f"expected one of {names}, found {token_describe(token)}",
            self.path,
            self.stream.line_number(token),
        )

    def leaf_parse(self, token: TokenMatch) -> DocumentNode:
        """chapter/section/subsection/text: payload is the raw block text"""
        span = self.stream.block_read(token)
        data = self.stream.text(span)
        if self.settings.collapse_whitespace:
            data = whitespace_collapse(data)
        return DocumentNode(
            kind=TAG_KINDS[token.kind],
            data=data,
            line_number=self.stream.line_number(token),
        )

    def container_parse(self, token: TokenMatch) -> DocumentNode:
        """main/list/ordered_list/table/row: parse child tags until the closing brace"""
        kind = TAG_KINDS[token.kind]
        node = DocumentNode(kind=kind, line_number=self.stream.line_number(token))
        self.stream.blockStart_expect(token)

        while True:
            child = self.tag_next(kind)
            if child is None:
                break
            node.child_add(self.production_run(child))

        LOG(f"Parsed {kind.value} with {len(node.children)} child(ren)", level=3)
        return node

