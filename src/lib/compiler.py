"""
Compiler for vvsml documents

CodeGenerator renders a document tree to HTML; Compiler strings the three
stages together (preprocess -> parse -> generate) and finishes by restoring
escaped characters. Deprotection happens strictly after rendering so that
protected braces are never mistaken for structure.
"""

from typing import Dict, List, Optional, Tuple

from ..config import appsettings, AppSettings
from ..models.parser import DocumentNode, Item, NodeKind, RenderShape
from .errors import CodeGenError
from .escapes import EscapeGuard
from .log import LOG
from .parser import Parser
from .preprocessor import Preprocessor

# NodeKind -> (shape, tag, inner tag for WRAPPED)
NODE_HTML: Dict[NodeKind, Tuple[RenderShape, str, Optional[str]]] = {
    NodeKind.ROOT: (RenderShape.PARENTAL, "html", None),
    NodeKind.CONTENTS: (RenderShape.PARENTAL, "body", None),
    NodeKind.TABLE: (RenderShape.PARENTAL, "table", None),
    NodeKind.CHAPTER: (RenderShape.LEAF, "h1", None),
    NodeKind.SECTION: (RenderShape.LEAF, "h2", None),
    NodeKind.SUBSECTION: (RenderShape.LEAF, "h3", None),
    NodeKind.TEXT: (RenderShape.LEAF, "p", None),
    NodeKind.LIST: (RenderShape.WRAPPED, "ul", "li"),
    NodeKind.ORDERED_LIST: (RenderShape.WRAPPED, "ol", "li"),
    NodeKind.ROW: (RenderShape.WRAPPED, "tr", "td"),
}

_unrendered = [kind.name for kind in NodeKind if kind not in NODE_HTML]
if _unrendered:
    raise LookupError(f"no HTML rendering declared for: {', '.join(_unrendered)}")


class CodeGenerator:
    """
    Renders a document tree to HTML text

    Three shapes cover every node kind:
        parental(tag):       <tag> children </tag>
        leaf(tag):           <tag>data</tag>
        wrapped(outer, inner): <outer> (<inner> child </inner>)* </outer>
    """

    def __init__(self, path: str = "<input>") -> None:
        self.path = path

    def generate(self, root: DocumentNode) -> str:
        """
        Render a tree rooted at ROOT

        Raises:
            CodeGenError: if root is not a ROOT node
        """
        if root.kind is not NodeKind.ROOT:
            raise CodeGenError("tried to generate html from non-root node", self.path)

        parts: List[str] = []
        self.node_render(root, parts)
        LOG("Code generation complete", level=2)
        return ''.join(parts)

    def node_render(self, node: DocumentNode, parts: List[str]) -> None:
        """Append the HTML for node (and its subtree) to parts"""
        shape, tag, inner = NODE_HTML[node.kind]

        if shape is RenderShape.LEAF:
            parts.append(f"<{tag}>{node.data or ''}</{tag}>")
        elif shape is RenderShape.PARENTAL:
            parts.append(f"<{tag}>")
            for child in node.children:
                self.node_render(child, parts)
            parts.append(f"</{tag}>")
        elif shape is RenderShape.WRAPPED:
            parts.append(f"<{tag}>")
            for item in node.children:
                if not isinstance(item, Item):
                    raise CodeGenError(f"unwrapped child in {node.kind.value}", self.path, node.line_number)
                parts.append(f"<{inner}>")
                self.node_render(item.node, parts)
                parts.append(f"</{inner}>")
            parts.append(f"</{tag}>")
        else:
            raise CodeGenError(f"unknown render shape {shape}", self.path, node.line_number)


class Compiler:
    """
    Compiles a vvsml source document to HTML

    Responsibilities:
    - Resolve directives (Preprocessor)
    - Build the document tree (Parser)
    - Render HTML (CodeGenerator)
    - Restore escaped characters (EscapeGuard.deprotect)

    No file is written here; the driver owns all output.
    """

    def __init__(
        self,
        source: str,
        path: str = "<input>",
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            source: Raw vvsml source text
            path: Source path (diagnostics, relative include/table paths)
            settings: AppSettings, defaults to the appsettings singleton
        """
        self.source = source
        self.path = path
        self.settings = settings or appsettings
        self.markup: Optional[str] = None
        self.tree: Optional[DocumentNode] = None

    def compile(self) -> str:
        """
        Run all stages

        Returns:
            Final HTML

        Raises:
            VvsmlError: from whichever stage fails first; nothing partial is returned
        """
        LOG("Preprocessing...", level=1)
        self.markup = Preprocessor(self.source, self.path, self.settings).preprocess()

        LOG("Parsing...", level=1)
        self.tree = Parser(self.markup, self.path, self.settings).parse()

        LOG("Generating HTML...", level=1)
        html = CodeGenerator(self.path).generate(self.tree)

        return self.postprocess(html)

    def postprocess(self, html: str) -> str:
        """Restore protected characters in finished HTML"""
        html = EscapeGuard(path=self.path).deprotect(html)
        LOG("Postprocessing complete", level=2)
        return html


def compile_source(source: str, path: str = "<input>", settings: Optional[AppSettings] = None) -> str:
    """
    Compile vvsml source text to HTML

    Example:
        >>> compile_source("main{chapter{Intro}}")
        '<html><body><h1>Intro</h1></body></html>'
    """
    return Compiler(source, path, settings).compile()
