"""Configuration constants and environment lookups."""

from __future__ import annotations

import os

# Environment variable names
ENV_DEBUG = "TAGSCHEMA_DEBUG"
ENV_PACKAGE = "TAGSCHEMA_PACKAGE"

# comment text that selects a struct for extraction
ENTITY_MARKER = 'db:"entity"'

GO_SOURCE_SUFFIX = ".go"

# package clause of the generated accessor file
DEFAULT_PACKAGE = "main"

# the primary key name migrations assume when none is given
DEFAULT_PRIMARY_KEY = "id"


def is_debug_enabled() -> bool:
    """Check TAGSCHEMA_DEBUG for a truthy value (true, 1, yes, on)."""
    val = os.environ.get(ENV_DEBUG, "").lower()
    return val in ("true", "1", "yes", "on")


def default_package() -> str:
    return os.environ.get(ENV_PACKAGE) or DEFAULT_PACKAGE
