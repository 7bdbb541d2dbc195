"""
vvsml - document markup to HTML compiler

Core library: escape protection, lexers, preprocessor, parser, code generator.
"""

__version__ = "1.0.0"

from .escapes import EscapeGuard
from .preprocessor import Preprocessor
from .parser import Parser
from .compiler import Compiler, CodeGenerator, compile_source
from .directives import DirectiveRegistry
from .errors import VvsmlError, UsageError, SourceReadError, DirectiveError, ParseError, CodeGenError
from .log import LOG, WARN, state_connectToLogger

__all__ = [
    "EscapeGuard",
    "Preprocessor",
    "Parser",
    "Compiler",
    "CodeGenerator",
    "compile_source",
    "DirectiveRegistry",
    "VvsmlError",
    "UsageError",
    "SourceReadError",
    "DirectiveError",
    "ParseError",
    "CodeGenError",
    "LOG",
    "WARN",
    "state_connectToLogger",
    "__version__",
]
