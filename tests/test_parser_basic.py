"""
Basic parser tests - simplest cases

Tests empty source, leaf tags, noise handling and whitespace collapsing.
"""

import pytest

from vvsml.config import AppSettings
from vvsml.lib.parser import Parser
from vvsml.models.parser import DocumentNode, NodeKind


class TestEmptyAndSimple:
    """Test empty source and simplest documents"""

    def test_empty_source(self):
        """Empty string parses to a bare root"""
        root = Parser("").parse()
        assert root.kind is NodeKind.ROOT
        assert root.children == []

    def test_whitespace_only(self):
        root = Parser("   \n\n  \t  ").parse()
        assert root.children == []

    def test_empty_main(self):
        root = Parser("main{}").parse()
        assert len(root.children) == 1
        assert root.children[0].kind is NodeKind.CONTENTS
        assert root.children[0].children == []

    def test_leaf_tags(self):
        root = Parser("main{chapter{C} section{S} subsection{U} text{T}}").parse()
        contents = root.children[0]
        assert [child.kind for child in contents.children] == [
            NodeKind.CHAPTER, NodeKind.SECTION, NodeKind.SUBSECTION, NodeKind.TEXT,
        ]
        assert [child.data for child in contents.children] == ["C", "S", "U", "T"]

    def test_multiple_main_blocks(self):
        root = Parser("main{text{a}}\nmain{text{b}}").parse()
        assert len(root.children) == 2
        assert root.children[1].children[0].data == "b"

    def test_leaf_keeps_nested_braces(self):
        """Leaf payload is the raw block text, nested blocks included"""
        root = Parser("main{text{a {b} c}}").parse()
        assert root.children[0].children[0].data == "a {b} c"

    def test_tag_words_inside_leaf(self):
        root = Parser("main{text{the main text of a list}}").parse()
        assert root.children[0].children[0].data == "the main text of a list"


class TestNoise:
    """Test that words between tags are skipped"""

    def test_noise_between_tags(self):
        root = Parser("main{ junk chapter{x} more-junk }").parse()
        assert len(root.children[0].children) == 1

    def test_noise_at_top_level(self):
        root = Parser("preamble main{text{x}}").parse()
        assert len(root.children) == 1


class TestWhitespace:
    """Test payload whitespace handling"""

    def test_whitespace_collapsed(self):
        root = Parser("main{text{a \n\n   b}}").parse()
        assert root.children[0].children[0].data == "a b"

    def test_whitespace_not_stripped(self):
        root = Parser("main{text{ a }}").parse()
        assert root.children[0].children[0].data == " a "

    def test_collapse_disabled(self):
        root = Parser("main{text{a \n b}}", settings=AppSettings(collapse_whitespace=False)).parse()
        assert root.children[0].children[0].data == "a \n b"


class TestLineNumbers:
    """Test node line numbers"""

    def test_node_line_number(self):
        root = Parser("main{\n\nchapter{x}}").parse()
        assert root.children[0].line_number == 1
        assert root.children[0].children[0].line_number == 3
