"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from functools import reduce
from typing import Optional, Type, TypeVar, Callable, TYPE_CHECKING
from dataclasses import dataclass, field, fields

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from .parser import DocumentNode


PS = TypeVar("PS", bound="ProgramState")
T = TypeVar("T")


@dataclass
class ProgramState:
    """
    Central state container for the driver pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile
        - env_check: inputSourceFile, htmlOutputFile, envOK
        - source_read: sourceText
        - source_compile: documentTree, html
        - html_write: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source document
        outputdir: Directory receiving the generated HTML
        verbosity: Logging verbosity level (1-3)
        inputFile: Source filename (relative to inputdir)
        outputFile: Output filename (relative to outputdir)
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the source document
        htmlOutputFile: Resolved path of the HTML file to write
        sourceText: Raw source text
        documentTree: Parsed document tree
        html: Generated (deprotected) HTML
        compileResult: Results (output_file, characters, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: str = field(default="index.html")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputFile: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    documentTree: Optional["DocumentNode"] = field(default=None)
    html: Optional[str] = field(default=None)
    compileResult: Optional[dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, verbosity)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(initial_state: T, *stages: Callable[[T], T]) -> T:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (T) -> T that receives the output of the
    previous stage and returns a new value. Used both for the driver's
    ProgramState stages and for the preprocessor's text -> text stages.

    Args:
        initial_state: Starting value
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final value after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            source_compile,
            html_write,
            results_report
        )

    This is equivalent to:
        results_report(html_write(source_compile(source_read(env_check(initial_state)))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
