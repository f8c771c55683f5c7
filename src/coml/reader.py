"""Reader: turns coml text into a Document.

The text is processed line by line. Key/value lines before the first
``[table]`` header belong to the root; every header then opens a table
block that runs until the next header or the end of input. Any bad line
aborts the whole parse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULT_CONFIG, ParserConfig
from .document import Document, EntryStore, Table
from .errors import EmptyInputError, MalformedStatementError, ParseError
from .text_utils import split_fields, trim_preserving_strings
from .values import Value, parse_value

logger = logging.getLogger(__name__)


@dataclass
class Line:
    number: int  # 1-based
    text: str    # already trimmed

    @property
    def is_comment(self) -> bool:
        return self.text.startswith("#")

    @property
    def is_header(self) -> bool:
        return self.text.startswith("[")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(text: str, config: ParserConfig | None = None) -> Document:
    """Parse *text* and return a fully populated Document.

    Raises a ParseError subclass on the first malformed line.
    """
    config = config or DEFAULT_CONFIG
    if not text or not text.strip():
        raise EmptyInputError("nothing to parse")

    lines = split_lines(text, config)
    doc = Document(source=text)

    cursor = _parse_root(lines, doc.root)
    while cursor < len(lines):
        cursor = _parse_table(lines, cursor, doc)

    logger.debug(
        "parsed %d root entries and %d tables", len(doc.root), len(doc.tables)
    )
    return doc


# ---------------------------------------------------------------------------
# Line splitting
# ---------------------------------------------------------------------------

def split_lines(text: str, config: ParserConfig = DEFAULT_CONFIG) -> list[Line]:
    """Trim each physical line and drop blank ones unless configured not to."""
    lines: list[Line] = []
    for number, raw in enumerate(text.split("\n"), 1):
        trimmed = trim_preserving_strings(
            raw.rstrip("\r"), track_quote_char=config.track_quote_char
        )
        if not trimmed and config.skip_blank_lines:
            continue
        lines.append(Line(number, trimmed))

    # A final newline is a terminator, not a blank statement.
    if lines and not lines[-1].text and text.endswith("\n"):
        lines.pop()
    return lines


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

def parse_statement(line: Line) -> tuple[str, Value]:
    """Split a ``key=value`` line and parse its value."""
    parts = split_fields(line.text, "=")
    if len(parts) != 2:
        raise MalformedStatementError(
            f"expected 'key = value', got {line.text!r}", line.number
        )
    key, literal = parts
    try:
        return key, parse_value(literal)
    except ParseError as exc:
        raise type(exc)(exc.message, line.number) from exc


def _parse_root(lines: list[Line], store: EntryStore) -> int:
    """Fill *store* up to the first header; return that header's index."""
    for index, line in enumerate(lines):
        if line.is_comment:
            continue
        if line.is_header:
            return index
        store.insert(*parse_statement(line))
    return len(lines)


def _parse_table(lines: list[Line], start: int, doc: Document) -> int:
    """Parse the table block whose header is at *start*.

    Returns the index of the next header, or ``len(lines)`` at end of input.
    """
    while start < len(lines) and lines[start].is_comment:
        start += 1
    if start >= len(lines):
        return start

    table = Table(_table_name(lines[start]))
    logger.debug("table [%s] at line %d", table.name, lines[start].number)

    cursor = start + 1
    while cursor < len(lines):
        line = lines[cursor]
        if line.is_header:
            break
        if not line.is_comment:
            table.entries.insert(*parse_statement(line))
        cursor += 1

    doc.add_table(table)
    return cursor


def _table_name(line: Line) -> str:
    text = line.text
    if len(text) < 2 or not text.endswith("]"):
        raise MalformedStatementError(f"unclosed table header {text!r}", line.number)
    name = text[1:-1]
    if not name:
        raise MalformedStatementError("empty table name", line.number)
    return name
