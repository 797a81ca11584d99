"""Generate command - write the migration and accessor files."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import structlog
import tyro

from tagschema.config import default_package
from tagschema.errors import UnknownTypeError
from tagschema.scanner import EntityScanner
from tagschema.targets import open_targets, render

logger = structlog.get_logger(__name__)


@dataclass
class Generate:
    """Generate a Rails migration (and Go column accessors) from entities."""

    path: tyro.conf.Positional[Path] = field(
        metadata={"help": "Go file, or directory of Go files, to scan"},
    )
    output: Annotated[Path | None, tyro.conf.arg(aliases=("-o",))] = field(
        default=None,
        metadata={"help": "Migration output file (default: stdout)"},
    )
    names: Annotated[Path | None, tyro.conf.arg(aliases=("-n",))] = field(
        default=None,
        metadata={"help": "Accessor output file (omitted when not given)"},
    )
    package: Annotated[str, tyro.conf.arg(aliases=("-p",))] = field(
        default_factory=default_package,
        metadata={"help": "Package name of the accessor file"},
    )
    recursive: bool = field(
        default=False,
        metadata={"help": "Also scan subdirectories"},
    )
    allow_unknown_types: bool = field(
        default=False,
        metadata={
            "help": "Emit columns of unmapped types with an empty type "
            "instead of failing"
        },
    )

    def run(self) -> int:
        """Execute the generate command."""
        scanner = EntityScanner()
        # a missing or unreadable input path is fatal
        tables = scanner.scan(self.path.resolve(), recursive=self.recursive)

        with open_targets(self.output, self.names, self.package) as targets:
            try:
                render(tables, targets, strict=not self.allow_unknown_types)
            except UnknownTypeError as e:
                print(f"error: {e}", file=sys.stderr)
                print(
                    "use --allow-unknown-types to emit it anyway",
                    file=sys.stderr,
                )
                return 1

        if scanner.issues:
            logger.warning("fields dropped", count=len(scanner.issues))
        return 0 if targets.ok else 1
