"""
Request serializer.

Each request kind has its own builder over shared skeleton helpers; required
fields are declared in a single table checked before building.
"""

from .builders import BUILDERS, build_perm_unmerge, build_refresh, build_status_query, build_submit, build_upgrade
from .field_table import REQUIRED_FIELDS, RequiredField, check_required_fields, required_fields_for
from .generator import ConsumerCreditRequestGenerator, serialize

__all__ = [
    # Builders
    "BUILDERS",
    "build_perm_unmerge",
    "build_refresh",
    "build_status_query",
    "build_submit",
    "build_upgrade",
    # Required fields
    "REQUIRED_FIELDS",
    "RequiredField",
    "check_required_fields",
    "required_fields_for",
    # Generator
    "ConsumerCreditRequestGenerator",
    "serialize",
]
