"""Entity discovery and field extraction.

The scanner walks parsed Go files, picks structs whose attached comment
carries the entity marker, and turns each exported field into a Column of a
new Table.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from tagschema.config import ENTITY_MARKER, GO_SOURCE_SUFFIX
from tagschema.errors import MalformedAnnotation
from tagschema.go_syntax import FieldDecl, GoFile, GoParser, TypeDecl
from tagschema.models import Column, Table
from tagschema.tags import interpret_tag
from tagschema.typemap import map_type

logger = structlog.get_logger(__name__)


@dataclass
class ScanIssue:
    """A field dropped because its tag could not be interpreted."""

    path: Path | None
    table: str
    field: str
    line: int
    error: MalformedAnnotation

    def __str__(self) -> str:
        where = f"line {self.line}"
        if self.path:
            where = f"{self.path}:{self.line}"
        return f"{where}: {self.table}.{self.field}: {self.error}"


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def is_entity(decl: TypeDecl) -> bool:
    return decl.is_struct and any(ENTITY_MARKER in c for c in decl.comments)


class EntityScanner:
    """Extract tables from Go sources.

    Fields with malformed tags are dropped and collected in ``issues``
    (across calls) instead of aborting the scan.
    """

    def __init__(self, parser: GoParser | None = None) -> None:
        self.parser = parser or GoParser()
        self.issues: list[ScanIssue] = []

    def scan(self, path: Path, recursive: bool = False) -> list[Table]:
        """Scan a file or every Go file in a directory.

        Missing or unreadable paths raise OSError.
        """
        if path.is_dir():
            return self.scan_directory(path, recursive=recursive)
        return self.scan_path(path)

    def scan_directory(
        self, root: Path, recursive: bool = False
    ) -> list[Table]:
        pattern = f"*{GO_SOURCE_SUFFIX}"
        if recursive:
            pattern = f"**/{pattern}"
        tables: list[Table] = []
        for path in sorted(root.glob(pattern)):
            if path.is_file():
                tables.extend(self.scan_path(path))
        logger.debug(
            "scanned directory", path=str(root), tables=len(tables)
        )
        return tables

    def scan_path(self, path: Path) -> list[Table]:
        return self.scan_file(self.parser.parse_file(path))

    def scan_source(
        self, source: bytes | str, path: Path | None = None
    ) -> list[Table]:
        return self.scan_file(self.parser.parse(source, path))

    def scan_file(self, go_file: GoFile) -> list[Table]:
        """Extract a table from every entity struct of a parsed file."""
        tables = [
            self._table(decl, go_file.path)
            for decl in go_file.types
            if is_entity(decl)
        ]
        logger.debug(
            "scanned file",
            path=str(go_file.path) if go_file.path else "<source>",
            tables=[t.name for t in tables],
        )
        return tables

    def _table(self, decl: TypeDecl, path: Path | None) -> Table:
        table = Table(name=decl.name)
        for fld in decl.fields or []:
            if fld.is_embedded:
                logger.debug(
                    "skipping embedded field",
                    table=decl.name,
                    type=fld.type.source,
                )
                continue
            for name in fld.names:
                if not is_exported(name):
                    continue
                column = self._column(table, fld, name, path)
                if column is not None:
                    table.columns.append(column)
        return table

    def _column(
        self, table: Table, fld: FieldDecl, name: str, path: Path | None
    ) -> Column | None:
        kind, options = map_type(fld.type)
        column = Column(type=kind, name=name, options=options)
        try:
            keep = interpret_tag(fld.tag, column, table)
        except MalformedAnnotation as e:
            issue = ScanIssue(path, table.name, name, fld.line, e)
            self.issues.append(issue)
            logger.warning(
                "dropping field with malformed tag",
                table=table.name,
                field=name,
                line=fld.line,
                error=str(e),
            )
            return None
        if not keep:
            logger.debug("field excluded", table=table.name, field=name)
            return None
        return column
