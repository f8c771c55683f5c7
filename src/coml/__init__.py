"""Parse, query, edit and write a small TOML-like configuration format."""

from .config import ParserConfig
from .document import Document, Entry, EntryStore, Table
from .errors import (
    ComlError,
    ComlIOError,
    EmptyInputError,
    InvalidNumberError,
    MalformedListError,
    MalformedStatementError,
    NotFoundError,
    ParseError,
    TypeMismatchError,
    UnterminatedStringError,
)
from .files import load, save
from .reader import parse
from .values import (
    Value,
    VBool,
    VNumber,
    VNumberList,
    VString,
    VStringList,
    format_value,
    parse_value,
)
from .writer import dumps

__all__ = [
    "parse",
    "dumps",
    "load",
    "save",
    "parse_value",
    "format_value",
    "ParserConfig",
    "Document",
    "Entry",
    "EntryStore",
    "Table",
    "Value",
    "VBool",
    "VNumber",
    "VNumberList",
    "VString",
    "VStringList",
    "ComlError",
    "ComlIOError",
    "EmptyInputError",
    "InvalidNumberError",
    "MalformedListError",
    "MalformedStatementError",
    "NotFoundError",
    "ParseError",
    "TypeMismatchError",
    "UnterminatedStringError",
]
