#!/usr/bin/env python3
"""
vvsml - document markup to HTML compiler

Compiles one vvsml source document into one HTML file.

Pipeline:
    raw source -> preprocessor (directives) -> parser (document tree)
    -> code generator (HTML) -> escape deprotection -> output file

Usage:
    vvsml inputdir/ outputdir/ --inputFile document.vvsml

Examples:
    # Basic compilation (writes outputdir/index.html)
    vvsml . output/ --inputFile notes.vvsml

    # Custom output filename, verbose
    vvsml . output/ --inputFile notes.vvsml --outputFile notes.html -vv
"""

import sys
from pathlib import Path
from argparse import Action, ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Compiler, DirectiveRegistry, VvsmlError, SourceReadError, UsageError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


class DirectivesAction(Action):
    """Print the directive reference and exit (like --version)"""

    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        print(DirectiveRegistry().reference_render())
        parser.exit()


# Define CLI arguments
parser = ArgumentParser(
    description="vvsml - compile structured document markup to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input vvsml source file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="index.html",
    type=str,
    help="Output HTML file (relative to outputdir)",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument(
    "--directives", action=DirectivesAction, help="List every directive with examples and exit"
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def diagnostic_exit(error: VvsmlError) -> None:
    """Print a diagnostic and terminate with a non-zero status"""
    print(f"error [{error.kind}] {error}", file=sys.stderr)
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source document
            - htmlOutputFile: Path of the HTML file to write
            - envOK: True if environment is valid

    Exits:
        1 if the input file does not exist
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        diagnostic_exit(UsageError(f"input file not found: {input_file}", str(input_file)))

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.htmlOutputFile = state.outputdir / state.outputFile
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source document.

    Returns:
        ProgramState with added field:
            - sourceText: Raw source text

    Exits:
        1 if the file cannot be read or decoded
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding=appsettings.source_encoding)
    except (OSError, UnicodeDecodeError) as e:
        diagnostic_exit(SourceReadError(f"cannot read source: {e}", str(state.inputSourceFile)))

    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def source_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile source text to HTML.

    Returns:
        ProgramState with added fields:
            - documentTree: Parsed document tree
            - html: Generated HTML

    Exits:
        1 on any directive, parse or code generation error
    """
    state = inputstate.copy()

    compiler = Compiler(state.sourceText or "", str(state.inputSourceFile))
    try:
        state.html = compiler.compile()
    except VvsmlError as e:
        diagnostic_exit(e)

    state.documentTree = compiler.tree
    return state


def html_write(inputstate: ProgramState) -> ProgramState:
    """
    Write generated HTML to the output file.

    Returns:
        ProgramState with added field:
            - compileResult: Dict with status, output_file, characters
    """
    state = inputstate.copy()

    if state.html is None:
        print("Error: No HTML generated", file=sys.stderr)
        sys.exit(1)

    state.htmlOutputFile.parent.mkdir(parents=True, exist_ok=True)
    state.htmlOutputFile.write_text(state.html, encoding=appsettings.output_encoding)
    LOG(f"Wrote {state.htmlOutputFile}", level=2)

    state.compileResult = {
        'status': True,
        'output_file': str(state.htmlOutputFile),
        'characters': len(state.html),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results to user (terminal pipeline stage).
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Compilation successful!", level=1)
    LOG(f"  Output: {state.compileResult['output_file']}", level=1)
    LOG(f"  Size: {state.compileResult['characters']} characters", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="vvsml - document markup compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile a vvsml document to HTML.

    Orchestrates the driver pipeline:
        1. env_check: Validate paths
        2. source_read: Read the source document
        3. source_compile: Preprocess, parse and render
        4. html_write: Write the HTML file
        5. results_report: Display results

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, source_compile, html_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
