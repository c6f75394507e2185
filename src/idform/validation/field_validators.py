"""
Format validators for identification form fields.

Each validator is a pure function ``str -> ValidationResult``. They only
judge format: emptiness is handled by ``FieldSpec.validate_value``
before a validator ever runs, and no validator looks at other fields.
"""

from idform.models.validation_result import ValidationResult
from idform.validation.constants import (
    CURP_PATTERN,
    INVALID_CURP_MESSAGE,
    INVALID_RFC_MESSAGE,
    LETTERS_PATTERN,
    ONLY_LETTERS_MESSAGE,
    RFC_PATTERN,
    SHORT_ALPHANUMERIC_MESSAGE,
    SHORT_ALPHANUMERIC_PATTERN,
    SMALL_NUMBER_MESSAGE,
    SMALL_NUMBER_PATTERN,
)


def _check(matched: bool, message: str) -> ValidationResult:
    return ValidationResult.valid() if matched else ValidationResult.invalid(message)


def validate_letters(value: str) -> ValidationResult:
    """Letters only: no digits, punctuation or whitespace."""
    return _check(LETTERS_PATTERN.fullmatch(value) is not None, ONLY_LETTERS_MESSAGE)


def validate_curp(value: str) -> ValidationResult:
    """18-character CURP, case-insensitive."""
    return _check(CURP_PATTERN.fullmatch(value.upper()) is not None, INVALID_CURP_MESSAGE)


def validate_rfc(value: str) -> ValidationResult:
    """RFC with or without homoclave, case-insensitive."""
    return _check(RFC_PATTERN.fullmatch(value.upper()) is not None, INVALID_RFC_MESSAGE)


def validate_small_number(value: str) -> ValidationResult:
    """1 to 5 digits."""
    return _check(SMALL_NUMBER_PATTERN.fullmatch(value) is not None, SMALL_NUMBER_MESSAGE)


def validate_short_alphanumeric(value: str) -> ValidationResult:
    """1 to 10 letters or digits."""
    return _check(
        SHORT_ALPHANUMERIC_PATTERN.fullmatch(value) is not None,
        SHORT_ALPHANUMERIC_MESSAGE,
    )
