"""Normalized column/table model shared by the scanner and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ColumnKind(str, Enum):
    """Semantic column kind, named after the migration directive."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    STRING = "string"
    BINARY = "binary"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    REFERENCES = "references"


@dataclass(frozen=True)
class UnknownType:
    """Marker for a field whose native type has no column mapping."""

    native: str

    def __str__(self) -> str:
        return self.native


@dataclass
class Column:
    """A single column extracted from a struct field."""

    type: ColumnKind | UnknownType
    name: str
    options: dict[str, str] = field(default_factory=dict)

    @property
    def is_unknown(self) -> bool:
        return isinstance(self.type, UnknownType)

    @property
    def is_reference(self) -> bool:
        return self.type is ColumnKind.REFERENCES

    @property
    def type_name(self) -> str:
        if isinstance(self.type, UnknownType):
            return self.type.native
        return self.type.value

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type_name,
            "unknown": self.is_unknown,
            "options": dict(self.options),
        }


@dataclass
class Table:
    """A table extracted from one entity struct."""

    name: str
    columns: list[Column] = field(default_factory=list)
    primary_key: str = ""
    unique_index: list[str] = field(default_factory=list)

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "primary_key": self.primary_key,
            "unique_index": list(self.unique_index),
            "columns": [c.to_dict() for c in self.columns],
        }
