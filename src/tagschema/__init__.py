from tagschema.errors import (
    MalformedAnnotation,
    TagSchemaError,
    UnknownTypeError,
)
from tagschema.go_syntax import GoParser, TypeExpr
from tagschema.models import Column, ColumnKind, Table, UnknownType
from tagschema.render import (
    accessors_text,
    migration_text,
    write_accessors,
    write_migration,
)
from tagschema.scanner import EntityScanner, ScanIssue
from tagschema.tags import Directive, apply_directives, parse_tag
from tagschema.targets import RenderTargets, open_targets, render
from tagschema.typemap import map_type

__all__ = [
    "Column",
    "ColumnKind",
    "Directive",
    "EntityScanner",
    "GoParser",
    "MalformedAnnotation",
    "RenderTargets",
    "ScanIssue",
    "Table",
    "TagSchemaError",
    "TypeExpr",
    "UnknownType",
    "UnknownTypeError",
    "accessors_text",
    "apply_directives",
    "map_type",
    "migration_text",
    "open_targets",
    "parse_tag",
    "render",
    "write_accessors",
    "write_migration",
]
