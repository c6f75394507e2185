"""
Field validators for idform.
"""

from idform.validation.field_validators import (
    validate_curp,
    validate_letters,
    validate_rfc,
    validate_short_alphanumeric,
    validate_small_number,
)

__all__ = [
    "validate_curp",
    "validate_letters",
    "validate_rfc",
    "validate_short_alphanumeric",
    "validate_small_number",
]
