"""tagschema CLI - generate migrations from annotated Go structs.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

import sys
from typing import Annotated

import tyro

from tagschema.cli.commands.entities import Entities
from tagschema.cli.commands.generate import Generate

_Generate = Annotated[Generate, tyro.conf.subcommand("generate")]
_Entities = Annotated[Entities, tyro.conf.subcommand("entities")]

Command = _Generate | _Entities


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    # configure structlog (respects TAGSCHEMA_DEBUG env var)
    from tagschema.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="tagschema",
            description="Generate Rails migrations from annotated Go structs.",
            args=argv,
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
