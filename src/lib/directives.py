"""
Directive implementations for vvsml

Each directive handler receives the located Directive and the running
preprocessor context and returns the text that replaces the directive's span.
Uses DirectiveSpec for metadata, arity and pipeline stage.
"""

import re
from pathlib import Path
from typing import Any, Dict, List

from ..models.directives import Directive, DirectiveSpec, DirectiveKind, DirectiveCategory
from .buffer import spans_replace
from .errors import DirectiveError
from .escapes import EscapeGuard
from .lexer import TokenStream, DIRECTIVE_KINDS, DIRECTIVE_LEXER, directives_present
from .log import LOG, WARN
from .tables import table_convert
from .transcription import TRANSCRIPTIONS

HEX_CODEPOINT = re.compile(r'[0-9A-Fa-f]{1,6}')

# .format{} style letters -> HTML tag
STYLE_TAGS: Dict[str, str] = {
    'b': 'b',
    'i': 'i',
    '_': 'sub',
    '^': 'sup',
    's': 's',
}


def file_read(run: Any, directive: Directive, what: str) -> tuple[Path, str]:
    """
    Read the file named by a directive's first argument

    Args:
        run: Preprocessor run context (guard, path resolution, settings)
        directive: Directive whose first argument is the path
        what: Verb phrase for the diagnostic (e.g. "include")

    Returns:
        Tuple of (resolved path, file contents)

    Raises:
        DirectiveError: if the file cannot be read or decoded
    """
    name = run.guard.deprotect(directive.args[0]).strip()
    path = run.path_resolve(name)
    try:
        contents = path.read_text(encoding=run.settings.source_encoding)
    except (OSError, UnicodeDecodeError):
        raise DirectiveError(f"cannot {what} {name}", run.path, directive.line_number)
    LOG(f"Read {len(contents)} characters from {path}", level=2)
    return path, contents


def paths_anchor(contents: str, path: Path) -> str:
    """
    Protect an included file and pin the relative paths it names

    Relative .include{} and .import_table{} paths inside the file at path are
    rewritten to absolute paths under that file's directory, so that after
    splicing they still point next to the file that named them. Paths that
    are still being built by other directives are left alone.
    """
    guard = EscapeGuard(path=str(path))
    contents = guard.protect(contents)
    stream = TokenStream(DIRECTIVE_LEXER, contents, str(path), DirectiveError)
    edits = []

    for token in stream:
        if DIRECTIVE_KINDS.get(token.kind) not in (DirectiveKind.INCLUDE, DirectiveKind.IMPORT_TABLE):
            continue
        span = stream.block_read(token)
        arg = stream.text(span)
        if directives_present(arg):
            continue
        name = guard.deprotect(arg).strip()
        if Path(name).is_absolute():
            continue
        anchored = (path.parent.absolute() / name).as_posix()
        edits.append((span.start, span.end, guard.shield(anchored)))

    return spans_replace(contents, edits)


def format_apply(spec: str, text: str, run: Any, directive: Directive) -> str:
    """
    Apply each format specifier in spec, left to right, to text

    Style letters wrap the accumulated text in an HTML tag pair; transcription
    letters translate the accumulated text. A letter seen before is skipped
    with a warning (an error in strict mode).

    Example:
        format_apply("bi", "x", ...) -> "<i><b>x</b></i>"
    """
    seen = set()
    for ch in spec:
        if ch in seen:
            message = f"format specifier {ch} is redundant"
            if run.settings.strict_mode:
                raise DirectiveError(message, run.path, directive.line_number)
            WARN(message, run.path, directive.line_number)
            continue
        seen.add(ch)

        if ch in STYLE_TAGS:
            tag = STYLE_TAGS[ch]
            text = f"<{tag}>{text}</{tag}>"
        elif ch in TRANSCRIPTIONS:
            # transcription tables work on the literal characters, not on codes
            text = run.guard.shield(TRANSCRIPTIONS[ch].translate(run.guard.deprotect(text)))
        else:
            raise DirectiveError(f"invalid format specifier: {ch}", run.path, directive.line_number)

    return text


class DirectiveRegistry:
    """
    Registry of directive specifications and handlers

    Maps every DirectiveKind to its DirectiveSpec. Construction fails if any
    kind is left without a handler, so adding a kind to DirectiveKind without
    registering it is caught immediately.
    """

    def __init__(self) -> None:
        """Initialize the directive registry and register all built-in directives"""
        self.specs: Dict[DirectiveKind, DirectiveSpec] = {}
        self.macroDirectives_register()
        self.fileDirectives_register()
        self.markupDirectives_register()
        self.textDirectives_register()
        self.coverage_check()

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.kind] = spec

    def coverage_check(self) -> None:
        """Raise LookupError if any DirectiveKind has no registered spec"""
        missing = [kind.keyword for kind in DirectiveKind if kind not in self.specs]
        if missing:
            raise LookupError(f"no handler registered for: {', '.join(missing)}")

    def spec_get(self, kind: DirectiveKind) -> DirectiveSpec:
        """Get full directive specification by kind"""
        return self.specs[kind]

    def directives_listByCategory(self, category: DirectiveCategory) -> List[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def reference_render(self) -> str:
        """
        Directive reference, grouped by pipeline stage in run order

        Example:
            macro
              .define_macro (2 args)  Define (or redefine) a text macro
                  .define_macro{greet}{Hello}
              ...
        """
        lines: List[str] = []
        for category in DirectiveCategory:
            lines.append(category.value)
            for spec in self.directives_listByCategory(category):
                lines.append(f"  {spec.keyword} ({spec.arity} args)  {spec.description}")
                lines.extend(f"      {example}" for example in spec.examples)
        return "\n".join(lines)

    def macroDirectives_register(self) -> None:
        """Register macro definition and substitution"""

        def define_macro_handler(directive: Directive, run: Any) -> str:
            """Handle .define_macro{name}{body} - store body, remove directive"""
            name, body = directive.args
            run.macros[name.strip()] = body
            LOG(f"Defined macro {name.strip()}", level=3)
            return ""

        def macro_handler(directive: Directive, run: Any) -> str:
            """Handle .macro{name} - substitute the body defined so far"""
            name = directive.args[0].strip()
            if name not in run.macros:
                raise DirectiveError(f"macro not defined: {name}", run.path, directive.line_number)
            return run.macros[name]

        self.register(DirectiveSpec(
            kind=DirectiveKind.DEFINE_MACRO,
            category=DirectiveCategory.MACRO,
            arity=2,
            description="Define (or redefine) a text macro",
            handler=define_macro_handler,
            examples=[".define_macro{greet}{Hello}"],
        ))

        self.register(DirectiveSpec(
            kind=DirectiveKind.MACRO,
            category=DirectiveCategory.MACRO,
            arity=1,
            description="Substitute a previously defined macro",
            handler=macro_handler,
            examples=[".macro{greet}"],
        ))

    def fileDirectives_register(self) -> None:
        """Register file inclusion and table import"""

        def include_handler(directive: Directive, run: Any) -> str:
            """Handle .include{path} - substitute file contents verbatim"""
            path, contents = file_read(run, directive, "include")
            return paths_anchor(contents, path)

        def import_table_handler(directive: Directive, run: Any) -> str:
            """Handle .import_table{path} - substitute converted table markup"""
            path, contents = file_read(run, directive, "import table")
            return table_convert(contents, str(path))

        self.register(DirectiveSpec(
            kind=DirectiveKind.INCLUDE,
            category=DirectiveCategory.INCLUDE,
            arity=1,
            description="Include another file verbatim",
            handler=include_handler,
            examples=[".include{chapters/intro.vvsml}"],
        ))

        self.register(DirectiveSpec(
            kind=DirectiveKind.IMPORT_TABLE,
            category=DirectiveCategory.TABLE,
            arity=1,
            description="Import a '&'/'$' separated text table as table markup",
            handler=import_table_handler,
            examples=[".import_table{data/results.vvtab}"],
        ))

    def markupDirectives_register(self) -> None:
        """Register links and inline formatting"""

        def link_handler(directive: Directive, run: Any) -> str:
            """Handle .link{text}{url} - hyperlink"""
            text, url = directive.args
            return f'<a href="{url}">{text}</a>'

        def format_handler(directive: Directive, run: Any) -> str:
            """Handle .format{spec}{text} - inline styling and transcription"""
            spec, text = directive.args
            return format_apply(spec, text, run, directive)

        self.register(DirectiveSpec(
            kind=DirectiveKind.LINK,
            category=DirectiveCategory.LINK,
            arity=2,
            description="Hyperlink",
            handler=link_handler,
            examples=[".link{home page}{https://example.org}"],
        ))

        self.register(DirectiveSpec(
            kind=DirectiveKind.FORMAT,
            category=DirectiveCategory.FORMAT,
            arity=2,
            description="Bold/italic/sub/sup/strike styling and phonetic transcription",
            handler=format_handler,
            examples=[".format{bi}{important}", ".format{x}{h@\"loU}"],
            requires_resolved_args=True,
        ))

    def textDirectives_register(self) -> None:
        """Register unicode escapes and regex rewriting"""

        def unicode_handler(directive: Directive, run: Any) -> str:
            """Handle .unicode{hex} - decoded character"""
            arg = directive.args[0].strip()
            codepoint = int(arg, 16) if HEX_CODEPOINT.fullmatch(arg) else -1
            if codepoint < 0 or codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
                raise DirectiveError(f"invalid codepoint: {arg}", run.path, directive.line_number)
            return run.guard.shield(chr(codepoint))

        def replace_all_handler(directive: Directive, run: Any) -> str:
            """Handle .replace_all{pattern}{replacement} - queue a global substitution"""
            pattern, replacement = (run.guard.deprotect(arg) for arg in directive.args)
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise DirectiveError(f"invalid pattern {pattern}: {e}", run.path, directive.line_number)
            run.substitutions.append((compiled, replacement, directive.line_number))
            return ""

        self.register(DirectiveSpec(
            kind=DirectiveKind.UNICODE,
            category=DirectiveCategory.UNICODE,
            arity=1,
            description="Insert a character by hexadecimal codepoint",
            handler=unicode_handler,
            examples=[".unicode{3B1}"],
        ))

        self.register(DirectiveSpec(
            kind=DirectiveKind.REPLACE_ALL,
            category=DirectiveCategory.REPLACE,
            arity=2,
            description="Regex substitution over the rest of the document",
            handler=replace_all_handler,
            examples=[".replace_all{colour}{color}"],
        ))
