"""Diagnostic dump and the ``coml`` command-line tool."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO

from .document import Document, EntryStore
from .errors import ComlIOError, ParseError
from .files import load, save
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

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Human-readable dump
# ---------------------------------------------------------------------------

def _fmt_scalar(value: Value) -> str:
    if isinstance(value, VNumber):
        return f"{value.value:.10f}"
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    return str(value)


def _fmt_entries(store: EntryStore, indented: bool) -> list[str]:
    pad = "    " if indented else ""
    item_pad = "\t" if indented else "    "
    lines: list[str] = []
    for entry in store.declared():
        value = entry.value
        if isinstance(value, VNumberList):
            lines.append(f"{pad}{entry.key}:")
            lines.extend(f"{item_pad}{i} - {v:.10f}" for i, v in enumerate(value.items))
        elif isinstance(value, VStringList):
            lines.append(f"{pad}{entry.key}:")
            lines.extend(f"{item_pad}{i} - {s}" for i, s in enumerate(value.items))
        else:
            lines.append(f"{pad}{entry.key}: {_fmt_scalar(value)}")
    return lines


def format_dump(doc: Document) -> str:
    """Root entries, a blank line, then every table with its entries."""
    lines = _fmt_entries(doc.root, indented=False)
    lines.append("")
    for table in doc.declared_tables():
        lines.append(f"Table: {table.name}")
        lines.extend(_fmt_entries(table.entries, indented=True))
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------

_SETTERS = {
    VNumber: ("set_float", lambda v: v.value),
    VString: ("set_string", lambda v: v.value),
    VBool: ("set_bool", lambda v: v.value),
    VNumberList: ("set_list_number", lambda v: v.items),
    VStringList: ("set_list_string", lambda v: v.items),
}


def _cmd_dump(args: argparse.Namespace, out: IO[str]) -> int:
    out.write(format_dump(load(args.file)))
    return 0


def _cmd_get(args: argparse.Namespace, out: IO[str]) -> int:
    doc = load(args.file)
    if args.table is None:
        value = doc.find(args.key)
    else:
        value = doc.get(args.table, args.key)
    if value is None:
        print(f"{args.key}: not found", file=sys.stderr)
        return 1
    print(format_value(value), file=out)
    return 0


def _cmd_set(args: argparse.Namespace, out: IO[str]) -> int:
    doc = load(args.file)
    value = parse_value(args.literal)
    method, payload = _SETTERS[type(value)]
    if not getattr(doc, method)(args.key, payload(value), args.table):
        print(f"{args.key}: not set (missing, or holds a different type)", file=sys.stderr)
        return 1
    return 0 if save(doc, args.output or args.file) else 1


def _cmd_fmt(args: argparse.Namespace, out: IO[str]) -> int:
    doc = load(args.file)
    return 0 if save(doc, args.output or args.file) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coml", description="Inspect and edit coml files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("dump", help="Print a readable listing of a file")
    p.add_argument("file")
    p.set_defaults(func=_cmd_dump)

    p = sub.add_parser("get", help="Print one value")
    p.add_argument("file")
    p.add_argument("key")
    p.add_argument("--table", default=None, help="Only look inside this table")
    p.set_defaults(func=_cmd_get)

    p = sub.add_parser("set", help="Change one value, keeping its type")
    p.add_argument("file")
    p.add_argument("key")
    p.add_argument("literal", help='New value as written in a file, e.g. 8080 or "\'text\'"')
    p.add_argument("--table", default=None)
    p.add_argument("-o", "--output", default=None, help="Write here instead of FILE")
    p.set_defaults(func=_cmd_set)

    p = sub.add_parser("fmt", help="Rewrite a file in canonical form")
    p.add_argument("file")
    p.add_argument("-o", "--output", default=None)
    p.set_defaults(func=_cmd_fmt)

    return parser


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, out: IO[str] | None = None) -> int:
    """``coml`` console script."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    out = out or sys.stdout
    logger.debug("coml %s %s", args.command, args.file)

    try:
        return args.func(args, out)
    except (ParseError, ComlIOError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
