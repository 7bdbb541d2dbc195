"""
Driver pipeline tests

Tests the ProgramState stages of the command-line driver and the directive
registry's coverage of every directive kind and the --directives reference.
"""

import pytest
from pathlib import Path

from vvsml.__main__ import parser, env_check, source_read, source_compile, html_write, results_report
from vvsml.lib.directives import DirectiveRegistry
from vvsml.models import ProgramState, pipeline, DirectiveKind, DirectiveCategory


def state_make(inputdir: Path, outputdir: Path, inputFile: str = "doc.vvsml") -> ProgramState:
    return ProgramState(inputdir=inputdir, outputdir=outputdir, inputFile=inputFile)


class TestDriverPipeline:
    """Test the driver stages end to end"""

    def test_writes_output(self, tmp_path):
        (tmp_path / "doc.vvsml").write_text("main{chapter{Intro}text{Hi}}")
        outputdir = tmp_path / "out"

        state = pipeline(
            state_make(tmp_path, outputdir),
            env_check, source_read, source_compile, html_write, results_report,
        )

        output = outputdir / "index.html"
        assert output.read_text() == "<html><body><h1>Intro</h1><p>Hi</p></body></html>"
        assert state.envOK
        assert state.compileResult['output_file'] == str(output)
        assert state.documentTree is not None

    def test_missing_input_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            env_check(state_make(tmp_path, tmp_path / "out", "absent.vvsml"))
        assert excinfo.value.code == 1
        assert "error [usage]" in capsys.readouterr().err

    def test_compile_error_writes_nothing(self, tmp_path, capsys):
        (tmp_path / "doc.vvsml").write_text("main{text{.macro{nope}}}")
        outputdir = tmp_path / "out"

        with pytest.raises(SystemExit):
            pipeline(
                state_make(tmp_path, outputdir),
                env_check, source_read, source_compile, html_write, results_report,
            )

        err = capsys.readouterr().err
        assert "error [directive]" in err
        assert "doc.vvsml:1 - macro not defined: nope" in err
        assert not (outputdir / "index.html").exists()

    def test_undecodable_source_exits(self, tmp_path, capsys):
        (tmp_path / "doc.vvsml").write_bytes(b"main{text{\xff\xfe}}")

        with pytest.raises(SystemExit):
            pipeline(state_make(tmp_path, tmp_path / "out"), env_check, source_read)
        assert "error [source]" in capsys.readouterr().err


class TestDirectivesOption:
    """Test --directives prints the reference without needing --inputFile"""

    def test_prints_and_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            parser.parse_args(["--directives"])
        assert excinfo.value.code == 0
        out = capsys.readouterr().out
        assert ".import_table (1 args)" in out
        assert "Regex substitution over the rest of the document" in out


class TestDirectiveRegistry:
    """Test registry completeness"""

    def test_every_kind_registered(self):
        registry = DirectiveRegistry()
        for kind in DirectiveKind:
            assert registry.spec_get(kind).handler is not None

    def test_categories(self):
        registry = DirectiveRegistry()
        macro_kinds = {spec.kind for spec in registry.directives_listByCategory(DirectiveCategory.MACRO)}
        assert macro_kinds == {DirectiveKind.DEFINE_MACRO, DirectiveKind.MACRO}

    def test_reference_lists_every_directive(self):
        reference = DirectiveRegistry().reference_render()
        for kind in DirectiveKind:
            assert kind.keyword in reference
        assert ".define_macro{greet}{Hello}" in reference
        assert reference.index("macro") < reference.index("replace")

    def test_missing_handler_detected(self):
        registry = DirectiveRegistry()
        del registry.specs[DirectiveKind.LINK]
        with pytest.raises(LookupError, match=r"\.link"):
            registry.coverage_check()
