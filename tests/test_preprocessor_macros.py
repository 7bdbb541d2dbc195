"""
Preprocessor macro tests

Tests textual, order-sensitive macro definition and substitution, expansion
into further directives, and the pass bound.
"""

import pytest

from vvsml.config import AppSettings
from vvsml.lib.preprocessor import Preprocessor, preprocess
from vvsml.lib.errors import DirectiveError


class TestMacroResolution:
    """Test definition and use"""

    def test_define_then_use(self, settings):
        result = preprocess(".define_macro{greet}{Hello}\n.macro{greet}", settings=settings)
        assert result.strip() == "Hello"

    def test_definition_removed(self, settings):
        assert preprocess("a.define_macro{x}{y}b", settings=settings) == "ab"

    def test_use_before_definition(self, settings):
        """No forward references"""
        with pytest.raises(DirectiveError, match="macro not defined: greet"):
            preprocess(".macro{greet} .define_macro{greet}{Hello}", settings=settings)

    def test_undefined_macro_line(self, settings):
        with pytest.raises(DirectiveError) as excinfo:
            preprocess("main{\n\n.macro{nope}}", path="doc.vvsml", settings=settings)
        assert excinfo.value.line == 3
        assert excinfo.value.file == "doc.vvsml"

    def test_redefinition_overwrites(self, settings):
        source = ".define_macro{a}{1}.macro{a}.define_macro{a}{2}.macro{a}"
        assert preprocess(source, settings=settings) == "12"

    def test_name_whitespace_ignored(self, settings):
        assert preprocess(".define_macro{ a }{1}.macro{a}", settings=settings) == "1"

    def test_body_with_braces(self, settings):
        source = ".define_macro{item}{text{x}}list{.macro{item}.macro{item}}"
        assert preprocess(source, settings=settings) == "list{text{x}text{x}}"

    def test_macro_expanding_to_macro(self, settings):
        """Bodies are expanded again on the next pass"""
        source = ".define_macro{inner}{x}.define_macro{outer}{[.macro{inner}]}.macro{outer}"
        assert preprocess(source, settings=settings) == "[x]"

    def test_macro_expanding_to_link(self, settings):
        source = ".define_macro{home}{.link{home}{/}}.macro{home}"
        assert preprocess(source, settings=settings) == '<a href="/">home</a>'

    def test_escaped_directive_not_resolved(self, settings):
        result = preprocess(r"\.macro\{x\}", settings=settings)
        assert ".macro" not in result

    def test_table_scoped_to_run(self, settings):
        """A second run does not see the first run's macros"""
        Preprocessor(".define_macro{a}{1}", settings=settings).preprocess()
        with pytest.raises(DirectiveError, match="macro not defined: a"):
            Preprocessor(".macro{a}", settings=settings).preprocess()

    def test_macros_kept_across_passes(self, settings):
        preprocessor = Preprocessor(".define_macro{a}{1}.define_macro{b}{.macro{a}}.macro{b}", settings=settings)
        assert preprocessor.preprocess() == "1"
        assert preprocessor.passes == 2
        assert preprocessor.macros == {"a": "1", "b": ".macro{a}"}


class TestPassBound:
    """Test the bound on self-referential expansion"""

    def test_self_reference_stops(self):
        settings = AppSettings(max_passes=5)
        with pytest.raises(DirectiveError, match="did not converge after 5 passes"):
            preprocess(".define_macro{a}{.macro{a}}.macro{a}", settings=settings)

    def test_no_directives_no_passes(self, settings):
        preprocessor = Preprocessor("main{text{plain}}", settings=settings)
        assert preprocessor.preprocess() == "main{text{plain}}"
        assert preprocessor.passes == 0

    def test_passes_within_bound(self):
        settings = AppSettings(max_passes=2)
        source = ".define_macro{a}{1}.define_macro{b}{.macro{a}}.macro{b}"
        assert preprocess(source, settings=settings) == "1"
