"""
Exceptions raised by idform.

Validation failures are not exceptions: they travel as
``ValidationResult`` values into the error tree. The classes here
signal programmer errors (misused schema paths, missing table rows).
"""


class IdFormError(Exception):
    """Base class for idform errors."""


class UnknownPathError(IdFormError, KeyError):
    """Raised when a field path is not declared in the form schema."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(path)

    def __str__(self) -> str:
        return f"Unknown field path: {self.path!r}"


class UnknownRecordError(IdFormError, KeyError):
    """Raised when a table operation names a record id that is not loaded."""

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(record_id)

    def __str__(self) -> str:
        return f"Unknown record id: {self.record_id!r}"
