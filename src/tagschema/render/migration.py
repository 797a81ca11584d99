"""Rails migration rendering.

Output per table:

    create_table 'fragments', primary_key:'hidden_pk' do |t|
      t.integer :id, null:false, limit:8
      t.references :piyo, limit:8
    end
    add_index :fragments, [:id, :piyo_id], unique:true

"""

from __future__ import annotations

import io
from collections.abc import Iterable
from typing import TextIO

import structlog

from tagschema.casing import strip_id_suffix, to_snake_case
from tagschema.config import DEFAULT_PRIMARY_KEY
from tagschema.errors import UnknownTypeError
from tagschema.models import Column, Table, UnknownType

logger = structlog.get_logger(__name__)

# emitted in this order when set
OPTION_ORDER = ("null", "default", "limit")


def _header(table: Table) -> str:
    header = f"create_table '{to_snake_case(table.name)}'"
    if not table.primary_key:
        header += ", id:false"
    elif to_snake_case(table.primary_key) != DEFAULT_PRIMARY_KEY:
        header += f", primary_key:'{to_snake_case(table.primary_key)}'"
    return header + " do |t|"


def _column_line(
    table: Table, column: Column, inline_unique: str | None, strict: bool
) -> str:
    if isinstance(column.type, UnknownType):
        if strict:
            raise UnknownTypeError(table.name, column.name, column.type.native)
        logger.warning(
            "rendering column without a type",
            table=table.name,
            column=column.name,
            type=column.type.native,
        )
        kind = ""
    else:
        kind = column.type.value

    name = strip_id_suffix(column.name) if column.is_reference else column.name
    line = f"t.{kind} :{to_snake_case(name)}"
    if column.name == inline_unique:
        line += ", unique:true"
    for key in OPTION_ORDER:
        value = column.options.get(key)
        if value:
            line += f", {key}:{value}"
    return line


def write_migration(
    tables: Iterable[Table], out: TextIO, strict: bool = True
) -> None:
    """Write a migration body for every table.

    The primary key column is left to create_table. A single unique column
    gets ``unique:true`` inline; two or more become one add_index.

    With strict set, a column of unknown type raises UnknownTypeError before
    anything is written to ``out``.
    """
    chunks: list[str] = []
    for table in tables:
        inline_unique = (
            table.unique_index[0] if len(table.unique_index) == 1 else None
        )
        lines = [_header(table)]
        for column in table.columns:
            if column.name == table.primary_key:
                continue
            lines.append(
                "  " + _column_line(table, column, inline_unique, strict)
            )
        lines.append("end")
        if len(table.unique_index) > 1:
            cols = ", ".join(":" + to_snake_case(c) for c in table.unique_index)
            lines.append(
                f"add_index :{to_snake_case(table.name)}, [{cols}], unique:true"
            )
        lines.append("")
        chunks.append("\n".join(lines) + "\n")
    out.write("".join(chunks))


def migration_text(tables: Iterable[Table], strict: bool = True) -> str:
    buf = io.StringIO()
    write_migration(tables, buf, strict=strict)
    return buf.getvalue()
