"""Exception hierarchy for coml."""

from __future__ import annotations


class ComlError(Exception):
    """Base class for every error raised by coml."""


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class ParseError(ComlError):
    """Raised when text cannot be turned into a Document.

    ``line`` is the 1-based source line, or ``None`` when the error comes
    from a bare value literal.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class EmptyInputError(ParseError):
    pass


class MalformedStatementError(ParseError):
    pass


class UnterminatedStringError(ParseError):
    pass


class MalformedListError(ParseError):
    pass


class InvalidNumberError(ParseError):
    pass


# ---------------------------------------------------------------------------
# I/O and mutation errors
# ---------------------------------------------------------------------------

class ComlIOError(ComlError):
    """The file collaborator could not read or write a path."""


class NotFoundError(ComlError):
    """A lookup or mutation target (key or table) does not exist."""


class TypeMismatchError(ComlError):
    """A mutation tried to store a different variant than the one parsed."""
