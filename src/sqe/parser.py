"""
SQE Directive Parser (Raw Input → Document Model).

Reads SQE source line by line and dispatches on the first token:

    title "Demo"                  document title (last one wins)
    @p "Intro"                    open / name a page
    import "shared.sqe"           recorded, not interpreted
    insert { ... } | insert text  text block
    choice [id] { ... }           single-answer question
    html { ... }                  raw markup
    css { ... }                   raw style
    js { ... }                    raw script
    f { ... }                     script rendered into a placeholder

Blank lines and lines starting with `#` or `//` are skipped. Unknown lines
are ignored and recorded as diagnostics. Brace blocks may span lines and are
extracted with sqe.block_reader.read_block; an unterminated block aborts the
whole parse.
"""

import logging
import re
import warnings
from typing import Callable, Dict, Iterable, List, Optional

from sqe.block_reader import read_block
from sqe.errors import SQEWarning
from sqe.model import (
    Document,
    Entry,
    Page,
    DocTitle,
    Import,
    Insert,
    Question,
    Diagnostic,
    UNTITLED,
)
from sqe.items import (
    parse_insert,
    parse_choose,
    parse_html,
    parse_css,
    parse_js,
    parse_function,
)


LOGGER = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"\s*([^\s{]+)(.*)$")
COMMENT_PREFIXES = ("#", "//")


class _LineStream:
    """Iterator over source lines that remembers the current line number."""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.lineno = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self.lineno += 1
        return line.rstrip("\r\n")


class _ParserState:
    """
    Accumulates entries while the source is being read.

    The open page keeps a reserved slot in `entries` so that it ends up at
    the position where it was opened, not where it was flushed.
    """

    def __init__(self, lines: _LineStream, source: Optional[str]):
        self.lines = lines
        self.source = source
        self.entries: List[Optional[Entry]] = []
        self.diagnostics: List[Diagnostic] = []
        self.page_slot: Optional[int] = None
        self.page_title = UNTITLED
        self.page_content: List[Question] = []

    def diagnose(self, line: int, message: str, warn: bool = False) -> None:
        self.diagnostics.append(Diagnostic(line=line, message=message))
        LOGGER.debug("line %d: %s", line, message)
        if warn:
            warnings.warn(f"line {line}: {message}", SQEWarning, stacklevel=4)

    def open_page(self, title: str = UNTITLED) -> None:
        self.page_slot = len(self.entries)
        self.entries.append(None)
        self.page_title = title
        self.page_content = []

    def flush_page(self) -> None:
        if self.page_slot is None:
            return
        self.entries[self.page_slot] = Page(title=self.page_title, content=tuple(self.page_content))
        self.page_slot = None
        self.page_title = UNTITLED
        self.page_content = []

    def add_question(self, question: Question) -> None:
        if self.page_slot is None:
            self.open_page()
        self.page_content.append(question)

    def finish(self) -> Document:
        self.flush_page()
        return Document(
            entries=tuple(e for e in self.entries if e is not None),
            diagnostics=tuple(self.diagnostics),
            source=self.source,
        )


def _unquote(text: str) -> str:
    """Strip surrounding whitespace and one pair of enclosing double quotes."""
    text = text.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def _read_brace_block(state: _ParserState, rest: str, lineno: int) -> Optional[str]:
    """Block body for a directive whose remainder is `rest`, or None without a brace."""
    if "{" not in rest:
        return None
    fragment = rest[rest.index("{") + 1:]
    return read_block(state.lines, fragment, start_line=lineno)


# =========================================================================
# DIRECTIVE HANDLERS
# =========================================================================


def _handle_title(state: _ParserState, rest: str, lineno: int) -> None:
    text = _unquote(rest)
    if not text:
        state.diagnose(lineno, "'title' without text", warn=True)
        return
    state.entries.append(DocTitle(text=text))


def _handle_page(state: _ParserState, rest: str, lineno: int) -> None:
    title = _unquote(rest)
    if not title:
        state.diagnose(lineno, "'@p' without title, using 'untitled'", warn=True)
        title = UNTITLED

    if state.page_slot is not None and state.page_title == UNTITLED:
        # Content declared before the first @p belongs to this page.
        state.page_title = title
        return

    state.flush_page()
    state.open_page(title)


def _handle_import(state: _ParserState, rest: str, lineno: int) -> None:
    path = _unquote(rest)
    if not path:
        state.diagnose(lineno, "'import' without path", warn=True)
        return
    state.entries.append(Import(path=path))


def _handle_insert(state: _ParserState, rest: str, lineno: int) -> None:
    block = _read_brace_block(state, rest, lineno)
    if block is not None:
        state.add_question(parse_insert(block))
        return

    words = rest.split()
    if not words:
        state.diagnose(lineno, "'insert' without content", warn=True)
        return
    state.add_question(Insert(text=" ".join(words)))


def _handle_choice(state: _ParserState, rest: str, lineno: int) -> None:
    if "{" not in rest:
        state.diagnose(lineno, "'choice' without a '{' block", warn=True)
        return

    choose_id = _unquote(rest[:rest.index("{")]) or None
    block = _read_brace_block(state, rest, lineno)
    question = parse_choose(block, id=choose_id)
    if not question.options:
        state.diagnose(lineno, "'choice' without options")
    state.add_question(question)


def _block_handler(keyword: str, parse: Callable[[str], Question]):
    """Handler for directives that take nothing but a raw brace block."""

    def handler(state: _ParserState, rest: str, lineno: int) -> None:
        block = _read_brace_block(state, rest, lineno)
        if block is None:
            state.diagnose(lineno, f"'{keyword}' without a '{{' block", warn=True)
            return
        state.add_question(parse(block))

    return handler


DIRECTIVES: Dict[str, Callable[[_ParserState, str, int], None]] = {
    "title": _handle_title,
    "@p": _handle_page,
    "import": _handle_import,
    "insert": _handle_insert,
    "choice": _handle_choice,
    "html": _block_handler("html", parse_html),
    "css": _block_handler("css", parse_css),
    "js": _block_handler("js", parse_js),
    "f": _block_handler("f", parse_function),
}


# =========================================================================
# PUBLIC API
# =========================================================================


def parse_lines(lines: Iterable[str], source: Optional[str] = None) -> Document:
    """
    Parse SQE source lines into a Document.

    Args:
        lines: Source lines, with or without line endings
        source: Optional name of the source, stored on the Document

    Returns:
        Document with entries in source order

    Raises:
        UnterminatedBlockError: If a brace block is never closed
    """
    stream = _LineStream(lines)
    state = _ParserState(stream, source)

    for line in stream:
        lineno = stream.lineno
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue

        match = _DIRECTIVE_RE.match(line)
        handler = DIRECTIVES.get(match.group(1)) if match else None
        if handler is None:
            state.diagnose(lineno, f"unrecognized directive '{stripped.split()[0]}' ignored")
            continue
        rest = match.group(2)
        handler(state, rest, lineno)

    document = state.finish()
    LOGGER.debug(
        "parsed %s: %d entries, %d pages, %d diagnostics",
        source or "<string>",
        len(document.entries),
        len(document.pages),
        len(document.diagnostics),
    )
    return document


def parse_string(text: str, source: Optional[str] = None) -> Document:
    """
    Parse SQE source text into a Document.

    Example:
        >>> doc = parse_string('@p "P1"\\ninsert Hi')
        >>> doc.pages[0].title
        'P1'
    """
    return parse_lines(text.split("\n"), source=source)


def parse_file(filepath: str) -> Document:
    """
    Parse an SQE file into a Document.

    Args:
        filepath: Path to the source file (UTF-8)

    Returns:
        Document whose `source` is the given path

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError / UnicodeDecodeError: If file can't be read
        UnterminatedBlockError: If a brace block is never closed
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"SQE file not found: {filepath}")

    return parse_string(content, source=str(filepath))


__all__ = [
    "DIRECTIVES",
    "parse_lines",
    "parse_string",
    "parse_file",
]
