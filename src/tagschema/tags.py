"""Struct tag parsing and directive interpretation.

A tag is a sequence of ``key:"value"`` entries separated by spaces, in the
same form ``reflect.StructTag`` reads. The keys understood here:

    db:"-"         field is not a column
    db:"pk"        field is the table's primary key
    db:"unique"    field joins the table's unique index
    size:"N"       column limit (bytes)
    default:"V"    column default, emitted verbatim
    column:"name"  column name override
    refer:"X"      foreign key; X (if given) becomes the column name

Other keys, such as ``json``, are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tagschema.errors import MalformedAnnotation
from tagschema.models import Column, ColumnKind, Table

_ENTRY = re.compile(r'\s*([^\s:"]+):"((?:[^"\\]|\\.)*)"')
_ESCAPE = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


@dataclass(frozen=True)
class Directive:
    key: str
    value: str


def _unescape(value: str) -> str:
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), value)


def strip_delimiters(raw: str) -> str:
    """Strip the literal's backticks, or unquote an interpreted string."""
    if len(raw) >= 2 and raw[0] == raw[-1] == "`":
        return raw[1:-1]
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return _unescape(raw[1:-1])
    return raw


def _diagnose(entry: str) -> str:
    key, sep, rest = entry.partition(":")
    if not sep or not key or " " in key or '"' in key:
        return "missing ':' separator"
    if not rest.startswith('"'):
        return f"value of {key!r} is not quoted"
    return f"unterminated value for {key!r}"


def parse_tag(raw: str) -> list[Directive]:
    """Parse a struct tag literal into directives, in written order.

    Raises MalformedAnnotation when an entry is not ``key:"value"``.
    """
    tag = strip_delimiters(raw)
    directives: list[Directive] = []
    pos = 0
    while pos < len(tag):
        if not tag[pos:].strip():
            break
        m = _ENTRY.match(tag, pos)
        if m is None:
            raise MalformedAnnotation(raw, _diagnose(tag[pos:].lstrip()))
        directives.append(Directive(m.group(1), _unescape(m.group(2))))
        pos = m.end()
    return directives


def apply_directives(
    column: Column, table: Table, directives: list[Directive]
) -> bool:
    """Apply directives left to right.

    Returns False when the field is excluded (``db:"-"``). An excluded field
    leaves the table untouched, wherever the exclusion appears in the tag.
    """
    if any(d.key == "db" and d.value == "-" for d in directives):
        return False

    for d in directives:
        if d.key == "db":
            if d.value == "pk":
                table.primary_key = column.name
            elif d.value == "unique":
                table.unique_index.append(column.name)
        elif d.key == "size":
            column.options["limit"] = d.value
        elif d.key == "default":
            column.options["default"] = d.value
        elif d.key == "column":
            # an empty override would leave the column unnamed
            if d.value:
                column.name = d.value
        elif d.key == "refer":
            column.type = ColumnKind.REFERENCES
            column.options.pop("null", None)
            if d.value:
                column.name = d.value
    return True


def interpret_tag(raw: str | None, column: Column, table: Table) -> bool:
    """Parse and apply a field's tag; a field without a tag is kept."""
    if raw is None:
        return True
    return apply_directives(column, table, parse_tag(raw))
