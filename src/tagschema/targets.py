"""Output destinations for a render run."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import structlog

from tagschema.config import DEFAULT_PACKAGE
from tagschema.errors import UnknownTypeError
from tagschema.models import Table
from tagschema.render import write_accessors, write_migration

logger = structlog.get_logger(__name__)


@dataclass
class RenderTargets:
    """Where the migration and accessor outputs go.

    A None sink means that output is not produced. ``failures`` maps an
    output name ("schema" / "accessors") to the error that kept its
    destination from opening.
    """

    schema: TextIO | None
    accessors: TextIO | None = None
    package: str = DEFAULT_PACKAGE
    failures: dict[str, OSError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def _open(
    path: Path, name: str, stack: ExitStack, failures: dict[str, OSError]
) -> TextIO | None:
    try:
        return stack.enter_context(path.open("w", encoding="utf-8"))
    except OSError as e:
        logger.error(
            "cannot open output", output=name, path=str(path), error=str(e)
        )
        failures[name] = e
        return None


@contextmanager
def open_targets(
    schema_path: Path | None = None,
    accessor_path: Path | None = None,
    package: str = DEFAULT_PACKAGE,
) -> Iterator[RenderTargets]:
    """Open file destinations, each independently of the other.

    The schema goes to stdout when no path is given. Accessors are only
    produced when a path is given.
    """
    failures: dict[str, OSError] = {}
    with ExitStack() as stack:
        schema = (
            _open(schema_path, "schema", stack, failures)
            if schema_path is not None
            else sys.stdout
        )
        accessors = (
            _open(accessor_path, "accessors", stack, failures)
            if accessor_path is not None
            else None
        )
        yield RenderTargets(
            schema=schema,
            accessors=accessors,
            package=package,
            failures=failures,
        )


def render(
    tables: Iterable[Table], targets: RenderTargets, strict: bool = True
) -> None:
    """Render tables into every available sink.

    An UnknownTypeError from the migration does not stop the accessor
    output; it is re-raised once both outputs have been attempted.
    """
    tables = list(tables)
    error: UnknownTypeError | None = None

    if targets.schema is not None:
        try:
            write_migration(tables, targets.schema, strict=strict)
        except UnknownTypeError as e:
            error = e

    if targets.accessors is not None:
        write_accessors(tables, targets.package, targets.accessors)

    if error is not None:
        raise error
