from __future__ import annotations

import re

_ACRONYM_BOUNDARY = re.compile(r"(.)([A-Z][a-z]+)")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a Go identifier to lower_snake_case.

    Runs of capitals stay together, so initialisms do not get split:

        HiddenPk -> hidden_pk
        PiyoId   -> piyo_id
        UserID   -> user_id
        HTTPHost -> http_host
    """
    s1 = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    s2 = _LOWER_UPPER.sub(r"\1_\2", s1)
    return s2.lower()


def strip_id_suffix(name: str) -> str:
    """Drop a trailing ``Id`` from a reference column name."""
    if name.endswith("Id") and len(name) > 2:
        return name[:-2]
    return name
