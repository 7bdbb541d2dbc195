"""
Models package for vvsml

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .directives import Directive, DirectiveSpec, DirectiveKind, DirectiveCategory
from .parser import (
    TokenMatch,
    BlockSpan,
    NodeKind,
    RenderShape,
    DocumentNode,
    Item,
    LEAF_KINDS,
    WRAPPING_KINDS,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "Directive",
    "DirectiveSpec",
    "DirectiveKind",
    "DirectiveCategory",
    "TokenMatch",
    "BlockSpan",
    "NodeKind",
    "RenderShape",
    "DocumentNode",
    "Item",
    "LEAF_KINDS",
    "WRAPPING_KINDS",
]
