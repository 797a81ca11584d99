"""Go type to column kind mapping."""

from __future__ import annotations

import structlog

from tagschema.go_syntax import TypeExpr
from tagschema.models import ColumnKind, UnknownType

logger = structlog.get_logger(__name__)

_NOT_NULL = {"null": "false"}

# simplified type name -> (kind, initial options)
SCALAR_TYPES: dict[str, tuple[ColumnKind, dict[str, str]]] = {
    "bool": (ColumnKind.BOOLEAN, _NOT_NULL),
    "int": (ColumnKind.INTEGER, {"null": "false", "limit": "8"}),
    "int64": (ColumnKind.INTEGER, {"null": "false", "limit": "8"}),
    "uint": (ColumnKind.INTEGER, {"null": "false", "limit": "8"}),
    "uint64": (ColumnKind.INTEGER, {"null": "false", "limit": "8"}),
    "int32": (ColumnKind.INTEGER, {"null": "false", "limit": "4"}),
    "uint32": (ColumnKind.INTEGER, {"null": "false", "limit": "4"}),
    "int16": (ColumnKind.INTEGER, {"null": "false", "limit": "2"}),
    "uint16": (ColumnKind.INTEGER, {"null": "false", "limit": "2"}),
    "int8": (ColumnKind.INTEGER, {"null": "false", "limit": "1"}),
    "uint8": (ColumnKind.INTEGER, {"null": "false", "limit": "1"}),
    "byte": (ColumnKind.INTEGER, {"null": "false", "limit": "1"}),
    "string": (ColumnKind.STRING, _NOT_NULL),
    "float": (ColumnKind.FLOAT, _NOT_NULL),
    "float64": (ColumnKind.FLOAT, _NOT_NULL),
    "Time": (ColumnKind.TIMESTAMP, {"null": "true", "default": "0"}),
    # database/sql nullable wrappers
    "NullBool": (ColumnKind.BOOLEAN, {}),
    "NullInt64": (ColumnKind.INTEGER, {}),
    "NullFloat64": (ColumnKind.FLOAT, {}),
    "NullString": (ColumnKind.STRING, {}),
}

# element type -> kind, for []T / [N]T
ARRAY_TYPES: dict[str, tuple[ColumnKind, dict[str, str]]] = {
    "byte": (ColumnKind.BINARY, {}),
}


def map_type(
    expr: TypeExpr,
) -> tuple[ColumnKind | UnknownType, dict[str, str]]:
    """Map a field type to its column kind and a fresh option dict.

    Unmapped types come back as UnknownType with no options; the caller
    decides whether that is fatal.
    """
    if expr.kind in ("ident", "qualified"):
        entry = SCALAR_TYPES.get(expr.name)
    elif expr.kind == "array":
        entry = ARRAY_TYPES.get(expr.name)
    else:
        entry = None

    if entry is None:
        logger.warning("unmapped field type", type=expr.source)
        return UnknownType(expr.source), {}

    kind, options = entry
    return kind, dict(options)
