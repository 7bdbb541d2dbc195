"""
vvsml - document markup to HTML compiler

Compiles structured documents (chapters, sections, lists, tables) written in
a small brace-delimited markup, with directives for macros, file inclusion,
links, inline formatting, phonetic transcription, Unicode escapes, regex
rewriting and table import.
"""

__version__ = "1.0.0"

from .lib import Parser, Preprocessor, Compiler, compile_source, DirectiveRegistry, VvsmlError, LOG, state_connectToLogger

__all__ = [
    "Parser",
    "Preprocessor",
    "Compiler",
    "compile_source",
    "DirectiveRegistry",
    "VvsmlError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
