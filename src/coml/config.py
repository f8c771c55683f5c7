"""Parser options."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Knobs for :func:`coml.reader.parse`.

    ``track_quote_char``: when False, whitespace trimming flips its
    "inside string" state on either quote character, so ``'say "hi"'``
    loses the space after ``hi"``. When True, only the quote that opened
    a span can close it.

    ``skip_blank_lines``: when False, a blank line inside the body is
    treated as a statement and fails with MalformedStatementError.
    """

    track_quote_char: bool = False
    skip_blank_lines: bool = True


DEFAULT_CONFIG = ParserConfig()
