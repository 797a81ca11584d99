from __future__ import annotations


class TagSchemaError(Exception):
    """Base class for schema extraction errors."""


class MalformedAnnotation(TagSchemaError):
    """A struct tag entry could not be parsed."""

    def __init__(self, tag: str, reason: str):
        self.tag = tag
        self.reason = reason
        super().__init__(f"malformed tag {tag!r}: {reason}")


class UnknownTypeError(TagSchemaError):
    """A column with an unmapped native type reached strict rendering."""

    def __init__(self, table: str, column: str, native: str):
        self.table = table
        self.column = column
        self.native = native
        super().__init__(
            f"{table}.{column}: no column type for Go type {native!r}"
        )
