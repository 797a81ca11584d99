"""Go accessor rendering: one method per column returning its name."""

from __future__ import annotations

import io
from collections.abc import Iterable
from typing import TextIO

from tagschema.casing import to_snake_case
from tagschema.models import Table

_METHOD = """func (*{table}) {name}() string {{
\treturn "{name}"
}}
"""


def write_accessors(tables: Iterable[Table], package: str, out: TextIO) -> None:
    """Write a Go file with a column-name method for every column.

    Unlike the migration, the primary key column is included.
    """
    out.write(f"package {package}\n")
    for table in tables:
        out.write(f"\n// {table.name}\n")
        for column in table.columns:
            out.write(
                _METHOD.format(table=table.name, name=to_snake_case(column.name))
            )


def accessors_text(tables: Iterable[Table], package: str) -> str:
    buf = io.StringIO()
    write_accessors(tables, package, buf)
    return buf.getvalue()
