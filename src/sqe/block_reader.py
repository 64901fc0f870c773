"""
Brace block extraction for SQE directives.

A directive such as `insert {`, `choice {` or `js {` opens a block that may
span many lines and may itself contain braces and quotes (JavaScript, CSS,
HTML attributes). The reader tracks:
    - nesting depth (starts at 1 for the directive's own brace)
    - quote mode: single, double or backtick, mutually exclusive
    - a one-character escape state entered by a backslash

Braces only count outside quotes. Escaped characters never change quote or
brace state. The closing brace is excluded from the result and anything after
it on the same line is discarded.
"""

from typing import Iterator, Optional

from sqe.errors import UnterminatedBlockError


QUOTES = ("'", '"', "`")


class _BlockScanner:
    """Character-level state machine used by read_block."""

    def __init__(self) -> None:
        self.depth = 1
        self.quote: Optional[str] = None
        self.escaped = False
        self.parts = []

    def feed(self, text: str) -> bool:
        """
        Consume text. Returns True once the closing brace is reached.

        Everything before the closing brace is kept, the brace and the
        rest of text are dropped.
        """
        for ch in text:
            if self.escaped:
                self.escaped = False
                self.parts.append(ch)
                continue

            if ch == "\\":
                self.escaped = True
                self.parts.append(ch)
                continue

            if self.quote is not None:
                if ch == self.quote:
                    self.quote = None
                self.parts.append(ch)
                continue

            if ch in QUOTES:
                self.quote = ch
            elif ch == "{":
                self.depth += 1
            elif ch == "}":
                self.depth -= 1
                if self.depth == 0:
                    return True

            self.parts.append(ch)

        return False

    def result(self) -> str:
        return "".join(self.parts)


def read_block(lines: Iterator[str], fragment: str = "", start_line: Optional[int] = None) -> str:
    """
    Read the body of a brace block.

    Args:
        lines: Iterator over the remaining source lines (without line endings).
               Consumed up to and including the line holding the closing brace.
        fragment: Text after the opening brace on the directive's own line
        start_line: Line number of the directive, reported on failure

    Returns:
        Enclosed text. Every fully consumed line, the initial fragment
        included, is followed by a newline; the terminating line is not.

    Raises:
        UnterminatedBlockError: If lines run out before depth reaches 0

    Example:
        >>> read_block(iter([]), ' "{" }')
        ' "{" '
    """
    scanner = _BlockScanner()

    if scanner.feed(fragment):
        return scanner.result()
    scanner.feed("\n")

    for line in lines:
        if scanner.feed(line):
            return scanner.result()
        scanner.feed("\n")

    raise UnterminatedBlockError(line=start_line)


__all__ = ["read_block", "QUOTES"]
