"""Document: the in-memory result of parsing coml text."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator

from .errors import NotFoundError, TypeMismatchError
from .values import (
    Value,
    VBool,
    VNumber,
    VNumberList,
    VString,
    VStringList,
)

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    key: str
    value: Value


class EntryStore:
    """Ordered key → Value bindings for the root or for one table.

    Entries are kept in declaration order; iteration and lookup walk them
    newest first. Redeclaring a key replaces the old entry.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def __iter__(self) -> Iterator[Entry]:
        return reversed(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.lookup(key) is not None

    def declared(self) -> list[Entry]:
        """Entries in the order they appeared in the source."""
        return list(self._entries)

    def keys(self) -> list[str]:
        return [e.key for e in self]

    def insert(self, key: str, value: Value) -> Entry:
        for i, existing in enumerate(self._entries):
            if existing.key == key:
                logger.warning("key %r declared twice; keeping the later value", key)
                del self._entries[i]
                break
        entry = Entry(key, value)
        self._entries.append(entry)
        return entry

    def lookup(self, key: str) -> Entry | None:
        for entry in self:
            if entry.key == key:
                return entry
        return None


@dataclass
class Table:
    name: str
    entries: EntryStore = field(default_factory=EntryStore)


class Document:
    """Root entries plus named tables, with typed lookup and mutation.

    Documents are built by :func:`coml.reader.parse`; ``source`` keeps the
    text they were parsed from.
    """

    def __init__(self, source: str = "") -> None:
        self.source = source
        self.root = EntryStore()
        self._tables: list[Table] = []

    # -- Tables ---------------------------------------------------------

    @property
    def tables(self) -> list[Table]:
        """Tables newest first (lookup order)."""
        return list(reversed(self._tables))

    def declared_tables(self) -> list[Table]:
        return list(self._tables)

    def add_table(self, table: Table) -> Table:
        self._tables.append(table)
        return table

    def table(self, name: str) -> Table | None:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def table_names(self) -> list[str]:
        return [t.name for t in self.tables]

    # -- Lookup ---------------------------------------------------------

    def get(self, table: str, key: str) -> Value | None:
        """Value of *key* inside *table*; root entries are not consulted."""
        entry = self._scoped_entry(table, key)
        return entry.value if entry is not None else None

    def find(self, key: str) -> Value | None:
        """Value of *key* from the root, else from the first table holding it."""
        entry = self._find_entry(key)
        return entry.value if entry is not None else None

    def get_kv(self, key: str, table: str | None = None) -> Entry | None:
        """Locate the Entry that a setter would modify."""
        if table is None:
            return self._find_entry(key)
        return self._scoped_entry(table, key)

    def _scoped_entry(self, name: str, key: str) -> Entry | None:
        # Tables sharing a name are searched newest first.
        for table in self.tables:
            if table.name != name:
                continue
            entry = table.entries.lookup(key)
            if entry is not None:
                return entry
        return None

    def _find_entry(self, key: str) -> Entry | None:
        entry = self.root.lookup(key)
        if entry is not None:
            return entry
        for table in self.tables:
            entry = table.entries.lookup(key)
            if entry is not None:
                return entry
        return None

    # -- Typed accessors --------------------------------------------------
    #
    # All return None when the key is missing or holds another variant.

    def get_int(self, table: str, key: str) -> int | None:
        return _as_int(self.get(table, key))

    def get_float(self, table: str, key: str) -> float | None:
        return _as_float(self.get(table, key))

    def get_string(self, table: str, key: str) -> str | None:
        return _as_string(self.get(table, key))

    def get_bool(self, table: str, key: str) -> bool | None:
        return _as_bool(self.get(table, key))

    def get_list_number(self, table: str, key: str) -> list[float] | None:
        return _as_list(self.get(table, key), VNumberList)

    def get_list_string(self, table: str, key: str) -> list[str] | None:
        return _as_list(self.get(table, key), VStringList)

    def find_int(self, key: str) -> int | None:
        return _as_int(self.find(key))

    def find_float(self, key: str) -> float | None:
        return _as_float(self.find(key))

    def find_string(self, key: str) -> str | None:
        return _as_string(self.find(key))

    def find_bool(self, key: str) -> bool | None:
        return _as_bool(self.find(key))

    def find_list_number(self, key: str) -> list[float] | None:
        return _as_list(self.find(key), VNumberList)

    def find_list_string(self, key: str) -> list[str] | None:
        return _as_list(self.find(key), VStringList)

    # -- Mutation ---------------------------------------------------------

    def replace(self, key: str, value: Value, table: str | None = None) -> None:
        """Swap the stored value of *key* for *value*.

        Raises NotFoundError if the entry does not exist and
        TypeMismatchError if *value* is a different variant from the one
        currently stored. Non-finite numbers raise ValueError.
        """
        if not _is_finite(value):
            raise ValueError(f"cannot store non-finite number in {key!r}")
        entry = self.get_kv(key, table)
        if entry is None:
            where = f"table {table!r}" if table is not None else "document"
            raise NotFoundError(f"no key {key!r} in {where}")
        if type(entry.value) is not type(value):
            raise TypeMismatchError(
                f"{key!r} holds a {entry.value.kind}, not a {value.kind}"
            )
        entry.value = value

    def set_int(self, key: str, value: int, table: str | None = None) -> bool:
        return self._set(key, VNumber(float(value)), table)

    def set_float(self, key: str, value: float, table: str | None = None) -> bool:
        return self._set(key, VNumber(float(value)), table)

    def set_string(self, key: str, value: str, table: str | None = None) -> bool:
        return self._set(key, VString(str(value)), table)

    def set_bool(self, key: str, value: bool, table: str | None = None) -> bool:
        return self._set(key, VBool(bool(value)), table)

    def set_list_number(self, key: str, values, table: str | None = None) -> bool:
        return self._set(key, VNumberList([float(v) for v in values]), table)

    def set_list_string(self, key: str, values, table: str | None = None) -> bool:
        return self._set(key, VStringList([str(v) for v in values]), table)

    def _set(self, key: str, value: Value, table: str | None) -> bool:
        try:
            self.replace(key, value, table)
        except (NotFoundError, TypeMismatchError, ValueError) as exc:
            logger.debug("set refused: %s", exc)
            return False
        return True


# ---------------------------------------------------------------------------
# Variant unwrapping
# ---------------------------------------------------------------------------

def _is_finite(value: Value) -> bool:
    if isinstance(value, VNumber):
        return math.isfinite(value.value)
    if isinstance(value, VNumberList):
        return all(math.isfinite(v) for v in value.items)
    return True


def _as_int(value: Value | None) -> int | None:
    if isinstance(value, VNumber):
        return int(value.value)
    return None


def _as_float(value: Value | None) -> float | None:
    if isinstance(value, VNumber):
        return value.value
    return None


def _as_string(value: Value | None) -> str | None:
    if isinstance(value, VString):
        return value.value
    return None


def _as_bool(value: Value | None) -> bool | None:
    if isinstance(value, VBool):
        return value.value
    return None


def _as_list(value: Value | None, variant: type) -> list | None:
    if isinstance(value, variant):
        return list(value.items)
    return None
