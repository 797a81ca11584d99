from tagschema.render.accessors import accessors_text, write_accessors
from tagschema.render.migration import migration_text, write_migration

__all__ = [
    "accessors_text",
    "migration_text",
    "write_accessors",
    "write_migration",
]
