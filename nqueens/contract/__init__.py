"""Solution-set contract validation and migration."""

from .validator import (
    CURRENT_VERSION,
    SUPPORTED_VERSIONS,
    migrate_legacy_export,
    validate_solution_set,
)

__all__ = [
    "CURRENT_VERSION",
    "SUPPORTED_VERSIONS",
    "migrate_legacy_export",
    "validate_solution_set",
]
