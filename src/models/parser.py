"""
Parser-specific data models

Type-safe structures shared by the lexers, the parser and the code generator.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


@dataclass
class TokenMatch:
    """
    A single lexeme located in a source buffer

    Produced by TokenStream from a Pygments lexer. ``kind`` is the Pygments
    token type (e.g. ``Token.Directive.Macro`` or ``Token.Tag.Chapter``).

    Example:
        For source "text{hi}" the first match is
        TokenMatch(kind=Token.Tag.Text, start=0, end=4, text="text")
    """
    kind: Any
    start: int
    end: int
    text: str


@dataclass
class BlockSpan:
    """
    Location of one ``{...}`` block argument

    Attributes:
        start: Offset just past the opening brace
        end: Offset of the matching closing brace
        stop: Offset just past the matching closing brace
    """
    start: int
    end: int
    stop: int


class NodeKind(Enum):
    """
    Document tree node kinds

    The value is the source tag keyword; ROOT has no keyword of its own.
    """
    ROOT = ""
    CONTENTS = "main"
    CHAPTER = "chapter"
    SECTION = "section"
    SUBSECTION = "subsection"
    TEXT = "text"
    LIST = "list"
    ORDERED_LIST = "ordered_list"
    TABLE = "table"
    ROW = "row"


class RenderShape(Enum):
    """How the code generator turns a node kind into HTML"""
    PARENTAL = "parental"    # <tag> children </tag>
    LEAF = "leaf"            # <tag>data</tag>
    WRAPPED = "wrapped"      # <outer> (<inner> child </inner>)* </outer>


# Leaf kinds carry a string payload and never have children.
LEAF_KINDS = frozenset({NodeKind.CHAPTER, NodeKind.SECTION, NodeKind.SUBSECTION, NodeKind.TEXT})

# Kinds whose direct children are each stored inside an Item.
WRAPPING_KINDS = frozenset({NodeKind.LIST, NodeKind.ORDERED_LIST, NodeKind.ROW})


@dataclass
class DocumentNode:
    """
    A node of the document tree

    Attributes:
        kind: Node kind
        data: Payload text for leaf kinds, None for containers
        children: Child nodes (Items for wrapping kinds)
        line_number: Source line of the tag (0 for the synthetic root)

    Example:
        "main{chapter{Intro}}" parses to
        DocumentNode(ROOT, children=[
            DocumentNode(CONTENTS, children=[DocumentNode(CHAPTER, data="Intro")])
        ])
    """
    kind: NodeKind
    data: Optional[str] = None
    children: List[Union['DocumentNode', 'Item']] = field(default_factory=list)
    line_number: int = 0

    def child_add(self, child: 'DocumentNode') -> None:
        """Append a child, wrapping it in an Item when this kind requires it"""
        if self.kind in WRAPPING_KINDS:
            self.children.append(Item.wrap(child))
        else:
            self.children.append(child)


@dataclass
class Item:
    """
    Implicit item container around one child of a list or row

    Rendered as <li> inside lists and <td> inside rows.
    """
    node: DocumentNode

    @classmethod
    def wrap(cls, node: Any) -> 'Item':
        if isinstance(node, Item):
            raise TypeError("node is already wrapped in an item container")
        return cls(node=node)
