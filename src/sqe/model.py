"""
Core Document Model Objects

Defines the data structures produced by the directive parser and consumed
by the code generator:
    - Entries (imports, document titles, pages)
    - Questions (inserted text, choice groups, raw markup/style/script)
    - Document (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about HTML or JavaScript output
        - Are immutable once built (frozen dataclasses, tuple fields)
        - Are fully serializable
        - Represent structure, not behavior

A Document is built once per compile, handed to exactly one generator pass
and then discarded.
"""

from abc import ABC
from dataclasses import dataclass
from typing import List, Optional, Tuple


UNTITLED = "untitled"
FALLBACK_TITLE = "Survey"
NO_QUESTION = "⚠ no question found"


class Question(ABC):
    """
    Base class for everything that can appear on a page.

    Structure only. Rendering lives in sqe.items.
    """
    pass


class Entry(ABC):
    """Base class for top-level parsed units."""
    pass


# =========================================================================
# QUESTIONS
# =========================================================================


@dataclass(frozen=True)
class Insert(Question):
    """
    Plain text shown on a page.

    Newlines in text are preserved and become explicit line breaks
    when rendered.
    """

    text: str


@dataclass(frozen=True)
class Option:
    """
    One selectable answer of a Choose question.

    Properties:
        label: Text shown next to the input
        value: Stored answer value (untyped text). Auto-numbered options
               carry their zero-based index, e.g. "0", "1".
    """

    label: str
    value: str


@dataclass(frozen=True)
class Choose(Question):
    """
    Single-answer question with labeled options.

    Example source:
        choice colour {
            Pick one
            Red >> r
            Blue >> b
        }

    Becomes:
        Choose(
            prompt="Pick one",
            options=(Option("Red", "r"), Option("Blue", "b")),
            id="colour",
        )

    Properties:
        prompt:
            Question text (first line of the block)

        options:
            Ordered Option tuple

        addons:
            Literal lines from the `.addons [ ... ]` section

        script:
            User script from `.script[...]` entries, joined by newlines.
            Runs after the generated answer wiring.

        id:
            Optional stable key for the answer map. Without it the key
            is synthesized from positions and changes when earlier
            content is added or removed.
    """

    prompt: str
    options: Tuple[Option, ...] = ()
    addons: Tuple[str, ...] = ()
    script: str = ""
    id: Optional[str] = None

    def answer_key(self, page_index: int, choose_index: int) -> str:
        """
        Key under which the answer is stored.

        Args:
            page_index: Index of the owning page among pages
            choose_index: Index of this Choose among Choose questions on the page

        Returns:
            Explicit id if set, else "<page_index>_<choose_index>"
        """
        if self.id:
            return self.id
        return f"{page_index}_{choose_index}"


@dataclass(frozen=True)
class Html(Question):
    """Raw markup, passed through without escaping."""

    raw: str


@dataclass(frozen=True)
class Css(Question):
    """Raw stylesheet text."""

    raw: str


@dataclass(frozen=True)
class Js(Question):
    """Raw script run whenever its page is entered. Result is discarded."""

    raw: str


@dataclass(frozen=True)
class Function(Question):
    """
    Script whose completion value is rendered in place.

    Unlike Js, a Function owns a placeholder on the page; whatever the
    script returns (text, a node, a list of those, or any other value)
    is shown there.
    """

    script: str


# =========================================================================
# ENTRIES
# =========================================================================


@dataclass(frozen=True)
class Import(Entry):
    """Path recorded by an `import` directive. Not interpreted."""

    path: str


@dataclass(frozen=True)
class DocTitle(Entry):
    """Document title from a `title` directive. The last one wins."""

    text: str


@dataclass(frozen=True)
class Page(Entry):
    """
    One navigable screen.

    Properties:
        title: Page heading, "untitled" until an @p directive names it
        content: Questions in source order
    """

    title: str = UNTITLED
    content: Tuple[Question, ...] = ()


@dataclass(frozen=True)
class Diagnostic:
    """
    Non-fatal finding reported while parsing.

    Properties:
        line: 1-based source line
        message: Human-readable description
    """

    line: int
    message: str


@dataclass(frozen=True)
class Document:
    """
    Root container for a parsed SQE source.

    Everything the generator emits MUST be derivable from this object alone.

    Properties:
        entries:
            Imports, titles and pages in source order. A page sits at the
            position where it was opened.

        diagnostics:
            Soft problems found while parsing (unknown directives,
            directives without content)

        source:
            Optional name of the source file

    INVARIANTS:
        - A page's index is its position among Page entries only
        - Question order inside a page matches source order
    """

    entries: Tuple[Entry, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()
    source: Optional[str] = None

    @property
    def pages(self) -> List[Page]:
        return [e for e in self.entries if isinstance(e, Page)]

    @property
    def imports(self) -> List[str]:
        return [e.path for e in self.entries if isinstance(e, Import)]

    @property
    def explicit_title(self) -> Optional[str]:
        """Text of the last DocTitle entry, or None."""
        title = None
        for entry in self.entries:
            if isinstance(entry, DocTitle):
                title = entry.text
        return title

    def effective_title(self, fallback: str = FALLBACK_TITLE) -> str:
        """
        Title of the whole document.

        Explicit title if any, else the first page's title, else fallback.
        """
        explicit = self.explicit_title
        if explicit is not None:
            return explicit
        pages = self.pages
        if pages:
            return pages[0].title
        return fallback

    @property
    def title(self) -> str:
        return self.effective_title()

    def get_page(self, title: str) -> Optional[Page]:
        """
        Retrieve the first page with the given title.

        Args:
            title: Page title

        Returns:
            Page object or None if not found
        """
        for page in self.pages:
            if page.title == title:
                return page
        return None


__all__ = [
    "UNTITLED",
    "FALLBACK_TITLE",
    "NO_QUESTION",
    "Question",
    "Entry",
    "Insert",
    "Option",
    "Choose",
    "Html",
    "Css",
    "Js",
    "Function",
    "Import",
    "DocTitle",
    "Page",
    "Diagnostic",
    "Document",
]
