"""
Error types raised while compiling SQE sources.

Fatal problems (unreadable input, unterminated blocks) are exceptions and
abort the compile. Recoverable problems are reported with SQEWarning and
recorded as Diagnostic entries on the parsed Document.
"""

from typing import Optional


class SQEError(Exception):
    """Base class for all SQE errors."""
    pass


class SQEParseError(SQEError):
    """
    Raised when the source cannot be turned into a Document.

    Properties:
        kind: Short machine-readable error kind (e.g. "unterminated-block")
        line: 1-based source line where the problem starts, if known
    """

    def __init__(self, message: str, kind: str = "parse", line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind} (line {self.line}): {self.message}"


class UnterminatedBlockError(SQEParseError):
    """Raised when input ends before a brace block is closed."""

    def __init__(self, line: Optional[int] = None):
        super().__init__("unterminated block, missing closing '}'", kind="unterminated-block", line=line)


class SQECompileError(SQEError):
    """Raised when reading the input or writing the output fails."""

    def __init__(self, message: str, kind: str = "io"):
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind}: {self.args[0]}"


class SQEWarning(UserWarning):
    """Category for recoverable problems substituted with defaults."""
    pass


__all__ = [
    "SQEError",
    "SQEParseError",
    "UnterminatedBlockError",
    "SQECompileError",
    "SQEWarning",
]
