"""Value types for coml, plus literal parsing and canonical encoding."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar, Union

from .errors import (
    InvalidNumberError,
    MalformedListError,
    UnterminatedStringError,
)
from .text_utils import is_quoted, split_fields

# Plain decimal literals only: no exponents, hex, inf or nan.
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


@dataclass
class VNumber:
    value: float
    kind: ClassVar[str] = "number"

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass
class VString:
    value: str
    kind: ClassVar[str] = "string"

    def __str__(self) -> str:
        return self.value


@dataclass
class VBool:
    value: bool
    kind: ClassVar[str] = "boolean"

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass
class VNumberList:
    items: list[float] = field(default_factory=list)
    kind: ClassVar[str] = "list of numbers"

    def __str__(self) -> str:
        return "[" + ", ".join(format_number(v) for v in self.items) + "]"


@dataclass
class VStringList:
    items: list[str] = field(default_factory=list)
    kind: ClassVar[str] = "list of strings"

    def __str__(self) -> str:
        return "[" + ", ".join(self.items) + "]"


Value = Union[VNumber, VString, VBool, VNumberList, VStringList]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_value(literal: str) -> Value:
    """Turn a trimmed literal into a Value.

    Dispatch order: quoted string, bracketed list, ``true``/``false``,
    then number. ``[]`` has no element to infer from and becomes an
    empty VNumberList.
    """
    if literal[:1] in ('"', "'"):
        if not is_quoted(literal):
            raise UnterminatedStringError(f"unterminated string: {literal}")
        return VString(literal[1:-1])

    if literal.startswith("["):
        return _parse_list(literal)

    if literal in ("true", "false"):
        return VBool(literal == "true")

    return VNumber(parse_number(literal))


def parse_number(token: str) -> float:
    if not _NUMBER_RE.match(token):
        raise InvalidNumberError(f"not a number: {token!r}")
    return float(token)


def _parse_list(literal: str) -> Value:
    if not literal.endswith("]") or len(literal) < 2:
        raise MalformedListError(f"list is missing its closing bracket: {literal}")

    elements = [e.strip() for e in split_fields(literal[1:-1], ",")]
    elements = [e for e in elements if e]
    if not elements:
        return VNumberList([])

    if elements[0][0] in ('"', "'"):
        items: list[str] = []
        for element in elements:
            if not is_quoted(element):
                raise MalformedListError(f"bad string element in list: {element}")
            items.append(element[1:-1])
        return VStringList(items)

    return VNumberList([parse_number(e) for e in elements])


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def format_number(value: float) -> str:
    """Whole numbers print as integers, everything else with 5 decimals.

    The whole-number check is made after rounding.
    """
    rounded = round(float(value), 5)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.5f}"


def format_value(value: Value) -> str:
    """Canonical text for *value*, as written by the serializer."""
    if isinstance(value, VNumber):
        return format_number(value.value)
    if isinstance(value, VString):
        return f'"{value.value}"'
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VNumberList):
        return _format_list(format_number(v) for v in value.items)
    if isinstance(value, VStringList):
        return _format_list(f'"{s}"' for s in value.items)
    raise TypeError(f"not a coml value: {value!r}")


def _format_list(parts) -> str:
    body = ", ".join(parts)
    if not body:
        return "[ ]"
    return f"[ {body} ]"
