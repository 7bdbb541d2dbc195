"""
Code generator tests

Tests the three rendering shapes, the root precondition and the ordering of
rendering and deprotection.
"""

import pytest

from vvsml.lib.compiler import CodeGenerator, Compiler, NODE_HTML
from vvsml.lib.parser import Parser
from vvsml.lib.errors import CodeGenError
from vvsml.models.parser import DocumentNode, NodeKind, RenderShape


def render(markup):
    return CodeGenerator().generate(Parser(markup).parse())


class TestShapes:
    """Test parental, leaf and wrapped rendering"""

    def test_headings_and_text(self):
        html = render("main{chapter{C}section{S}subsection{U}text{T}}")
        assert html == "<html><body><h1>C</h1><h2>S</h2><h3>U</h3><p>T</p></body></html>"

    def test_list(self):
        html = render("main{list{text{a}text{b}}}")
        assert "<ul><li><p>a</p></li><li><p>b</p></li></ul>" in html

    def test_ordered_list(self):
        html = render("main{ordered_list{text{a}}}")
        assert "<ol><li><p>a</p></li></ol>" in html

    def test_table(self):
        html = render("main{table{row{text{a}text{b}}}}")
        assert "<table><tr><td><p>a</p></td><td><p>b</p></td></tr></table>" in html

    def test_empty_root(self):
        assert render("") == "<html></html>"

    def test_every_kind_has_a_shape(self):
        assert set(NODE_HTML) == set(NodeKind)
        for shape, tag, inner in NODE_HTML.values():
            assert (inner is not None) == (shape is RenderShape.WRAPPED)


class TestPreconditions:
    """Test invalid trees"""

    def test_non_root_rejected(self):
        with pytest.raises(CodeGenError, match="tried to generate html from non-root node"):
            CodeGenerator().generate(DocumentNode(kind=NodeKind.CONTENTS))

    def test_unwrapped_list_child_rejected(self):
        lst = DocumentNode(kind=NodeKind.LIST, children=[DocumentNode(kind=NodeKind.TEXT, data="x")])
        contents = DocumentNode(kind=NodeKind.CONTENTS, children=[lst])
        root = DocumentNode(kind=NodeKind.ROOT, children=[contents])
        with pytest.raises(CodeGenError, match="unwrapped child in list"):
            CodeGenerator().generate(root)


class TestDeprotection:
    """Test protected codes survive rendering and are restored afterwards"""

    def test_generator_leaves_codes(self):
        compiler = Compiler(r"main{text{\{}}")
        compiler.compile()
        assert "@#':[;:LB]" in CodeGenerator().generate(compiler.tree)

    def test_compiler_restores_codes(self):
        assert Compiler(r"main{text{\{}}").compile() == "<html><body><p>{</p></body></html>"

    def test_compiler_keeps_stage_results(self):
        compiler = Compiler(".define_macro{t}{text{x}}main{.macro{t}}")
        compiler.compile()
        assert compiler.markup == "main{text{x}}"
        assert compiler.tree.kind is NodeKind.ROOT
