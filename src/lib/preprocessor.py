"""
Directive preprocessor

Resolves every directive in a raw vvsml source by repeated text rewriting,
producing clean document markup for the Parser.

The preprocessor is an ordered pipeline of stages, one per directive family:

    macros -> includes -> tables -> links -> formats -> unicode -> replacements

Each stage lexes the buffer once, resolves every occurrence of its family
left to right, and splices all replacements in back-to-front. After every
stage escapes are re-protected and brace balance is re-verified, because
substituted text (included files, macro bodies, imported tables) is inserted
raw. The pipeline reruns from the top until a scan finds no directive
keyword at all. A .format whose arguments still hold directives is left
for a later pass, so transcription only ever sees resolved text.

Example:
    >>> Preprocessor(".define_macro{greet}{Hello} text{.macro{greet}}").preprocess()
    ' text{Hello}'
"""

import re
from pathlib import Path
from typing import Callable, List, Optional, Pattern, Tuple

from ..config import appsettings, AppSettings
from ..models.directives import Directive, DirectiveCategory
from ..models.state import pipeline
from .buffer import spans_replace, braces_count
from .directives import DirectiveRegistry
from .errors import DirectiveError
from .escapes import EscapeGuard
from .lexer import TokenStream, DIRECTIVE_KINDS, DIRECTIVE_LEXER, directives_present
from .log import LOG

Stage = Callable[[str], str]


class Preprocessor:
    """
    One preprocessing run over one source document

    Attributes:
        source: Raw source text
        path: Source path, for diagnostics and relative include/table paths
        settings: AppSettings (pass bound, strict mode, encodings)
        registry: DirectiveRegistry supplying the handlers
        guard: EscapeGuard for the document scheme
        macros: Macro table for this run (name -> body)
        substitutions: Pending .replace_all{}{} substitutions for the current pass
        passes: Number of full pipeline passes run so far
    """

    def __init__(
        self,
        source: str,
        path: str = "<input>",
        settings: Optional[AppSettings] = None,
        registry: Optional[DirectiveRegistry] = None,
    ) -> None:
        self.source = source
        self.path = path
        self.settings = settings or appsettings
        self.registry = registry or DirectiveRegistry()
        self.guard = EscapeGuard(path=path)
        self.macros: dict[str, str] = {}
        self.substitutions: List[Tuple[Pattern[str], str, int]] = []
        self.passes = 0

        self.stages: List[Stage] = [
            self.stage_guard(stage) for stage in (
                self.macros_resolve,
                self.includes_resolve,
                self.tables_import,
                self.links_resolve,
                self.formats_apply,
                self.unicodes_decode,
                self.replacements_apply,
            )
        ]

    def preprocess(self) -> str:
        """
        Resolve all directives to a fixed point

        Returns:
            Markup with no directive keywords left; escaped characters are
            still protected codes

        Raises:
            DirectiveError: on any malformed or failing directive, brace
                            imbalance, or when max_passes is exceeded
        """
        buffer = self.guard.protect(self.source)
        self.braces_verify(buffer)

        while self.work_remains(buffer):
            self.passes += 1
            if self.settings.passLimit_reached(self.passes):
                raise DirectiveError(
                    f"preprocessing did not converge after {self.settings.max_passes} passes",
                    self.path,
                )
            LOG(f"Preprocessing pass {self.passes}", level=2)
            buffer = pipeline(buffer, *self.stages)

        LOG(f"Preprocessing complete after {self.passes} pass(es)", level=2)
        return buffer

    def stage_guard(self, stage: Stage) -> Stage:
        """Wrap a stage so its output is re-protected and brace-checked"""

        def guarded(buffer: str) -> str:
            buffer = self.guard.protect(stage(buffer))
            self.braces_verify(buffer)
            LOG(f"Stage {stage.__name__} done ({len(buffer)} characters)", level=3)
            return buffer

        guarded.__name__ = stage.__name__
        return guarded

    def braces_verify(self, buffer: str) -> None:
        """Raise DirectiveError unless '{' and '}' counts match"""
        left, right = braces_count(buffer)
        if left != right:
            raise DirectiveError(
                f"unbalanced braces: {left} '{{' and {right} '}}' found", self.path
            )

    def work_remains(self, buffer: str) -> bool:
        """True if any directive keyword is present in buffer"""
        return directives_present(buffer)

    def path_resolve(self, name: str) -> Path:
        """Resolve an include/table path relative to the source file's directory"""
        path = Path(name)
        if path.is_absolute():
            return path
        return Path(self.path).parent / path

    def family_resolve(self, buffer: str, category: DirectiveCategory) -> str:
        """
        Resolve every directive of one family in a single scan

        Directives are collected left to right (handlers run in document
        order, which is what makes macro lookup order-sensitive), then all
        replacements are applied back-to-front.
        """
        stream = TokenStream(DIRECTIVE_LEXER, buffer, self.path, DirectiveError)
        edits = []

        for token in stream:
            kind = DIRECTIVE_KINDS.get(token.kind)
            if kind is None:
                continue
            spec = self.registry.spec_get(kind)
            if spec.category is not category:
                continue

            mark = stream.index
            spans = [stream.block_read(token) for _ in range(spec.arity)]
            args = tuple(stream.text(span) for span in spans)
            if spec.requires_resolved_args and any(directives_present(arg) for arg in args):
                # nested directives go first; this one waits for a later pass
                stream.index = mark
                continue

            directive = Directive(
                kind=kind,
                start=token.start,
                end=spans[-1].stop,
                args=args,
                line_number=stream.line_number(token),
            )
            edits.append((directive.start, directive.end, spec.handler(directive, self)))

        if edits:
            LOG(f"Resolved {len(edits)} {category.value} directive(s)", level=2)
        return spans_replace(buffer, edits)

    def macros_resolve(self, buffer: str) -> str:
        return self.family_resolve(buffer, DirectiveCategory.MACRO)

    def includes_resolve(self, buffer: str) -> str:
        return self.family_resolve(buffer, DirectiveCategory.INCLUDE)

    def tables_import(self, buffer: str) -> str:
        return self.family_resolve(buffer, DirectiveCategory.TABLE)

    def links_resolve(self, buffer: str) -> str:
        return self.family_resolve(buffer, DirectiveCategory.LINK)

    def formats_apply(self, buffer: str) -> str:
        return self.family_resolve(buffer, DirectiveCategory.FORMAT)

    def unicodes_decode(self, buffer: str) -> str:
        return self.family_resolve(buffer, DirectiveCategory.UNICODE)

    def replacements_apply(self, buffer: str) -> str:
        """
        Remove every .replace_all{}{} and apply its substitution

        Substitutions run in document order over the buffer that remains once
        all of this pass's .replace_all directives have been removed. Protected
        codes are masked while the patterns run, so a pattern never matches
        inside one; an escaped character counts as a single character.
        """
        buffer = self.family_resolve(buffer, DirectiveCategory.REPLACE)
        substitutions, self.substitutions = self.substitutions, []
        if not substitutions:
            return buffer

        buffer = self.guard.mask(buffer)
        for pattern, replacement, line_number in substitutions:
            try:
                buffer = pattern.sub(replacement, buffer)
            except re.error as e:
                raise DirectiveError(
                    f"invalid replacement {replacement}: {e}", self.path, line_number
                )

        return self.guard.unmask(buffer)


def preprocess(source: str, path: str = "<input>", settings: Optional[AppSettings] = None) -> str:
    """Convenience wrapper: run a fresh Preprocessor over source"""
    return Preprocessor(source, path, settings).preprocess()
