"""Line-level text helpers: string-aware whitespace trimming and field splitting."""

from __future__ import annotations

_QUOTES = ('"', "'")
_BLANKS = (" ", "\t")


def trim_preserving_strings(line: str, track_quote_char: bool = False) -> str:
    """Drop spaces and tabs that sit outside quoted spans.

    By default any quote character toggles the "inside string" state, so
    a double quote inside a single-quoted span ends the span early.
    Pass ``track_quote_char=True`` to only close a span on its opening
    quote.

        >>> trim_preserving_strings('name = "a b"')
        'name="a b"'
    """
    out: list[str] = []
    opener: str | None = None

    for ch in line:
        if ch in _QUOTES:
            if opener is None:
                opener = ch
            elif not track_quote_char or ch == opener:
                opener = None
            out.append(ch)
            continue
        if opener is None and ch in _BLANKS:
            continue
        out.append(ch)

    return "".join(out)


def split_fields(text: str, delimiter: str) -> list[str]:
    """Split *text* on *delimiter*, dropping empty pieces.

    Consecutive delimiters never produce empty fields, so
    ``split_fields("a,,b", ",")`` is ``["a", "b"]`` and splitting an
    empty string yields an empty list.
    """
    return [piece for piece in text.split(delimiter) if piece]


def is_quoted(text: str) -> bool:
    """True if *text* opens and closes with the same quote character."""
    return len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]
