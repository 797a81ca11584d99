"""Entities command - list the tables found in Go sources."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

import tyro

from tagschema.scanner import EntityScanner


@dataclass
class Entities:
    """List entity tables, their keys and columns."""

    path: tyro.conf.Positional[Path] = field(
        metadata={"help": "Go file, or directory of Go files, to scan"},
    )
    recursive: bool = field(
        default=False,
        metadata={"help": "Also scan subdirectories"},
    )
    json: bool = field(
        default=False,
        metadata={"help": "Output as JSON"},
    )

    def run(self) -> int:
        """Execute the entities command."""
        scanner = EntityScanner()
        tables = scanner.scan(self.path.resolve(), recursive=self.recursive)

        if self.json:
            print(
                json.dumps(
                    {
                        "tables": [t.to_dict() for t in tables],
                        "issues": [str(i) for i in scanner.issues],
                    },
                    indent=2,
                )
            )
            return 0

        if not tables:
            print("no entities found", file=sys.stderr)
            return 0

        for table in tables:
            print(f"{table.name}")
            print(f"  primary key: {table.primary_key or '-'}")
            unique = ", ".join(table.unique_index) if table.unique_index else "-"
            print(f"  unique:      {unique}")
            for col in table.columns:
                opts = " ".join(f"{k}:{v}" for k, v in col.options.items())
                marker = " (unmapped)" if col.is_unknown else ""
                print(f"    {col.type_name:<12} {col.name:<24} {opts}{marker}")
            print()

        for issue in scanner.issues:
            print(f"dropped: {issue}", file=sys.stderr)
        return 0
