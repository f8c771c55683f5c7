"""Writer: canonical text for a Document."""

from __future__ import annotations

from .document import Document, EntryStore
from .values import format_value


def dumps(doc: Document) -> str:
    """Serialize *doc*.

    Root entries come first, then a blank line, then each table as a
    ``[name]`` header, its entries and a trailing blank line. Entries and
    tables are written in source order so that re-parsing the output
    reproduces it exactly.
    """
    parts: list[str] = [_format_entries(doc.root), "\n"]
    for table in doc.declared_tables():
        parts.append(f"[{table.name}]\n")
        parts.append(_format_entries(table.entries))
        parts.append("\n")
    return "".join(parts)


def _format_entries(store: EntryStore) -> str:
    return "".join(
        f"{entry.key} = {format_value(entry.value)}\n" for entry in store.declared()
    )
