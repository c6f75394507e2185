"""
Validation result model for per-field validation.

Every field validator returns one of these. A result is either valid
(empty message) or invalid with a human-readable message that goes
straight into the error tree.
"""

from pydantic import BaseModel, Field

REQUIRED_MESSAGE = "Required"


class ValidationResult(BaseModel):
    """Verdict of a single field validator."""

    is_valid: bool = Field(..., description="Whether the value passed validation")
    message: str = Field(default="", description="Human-readable error message, empty when valid")

    model_config = {"frozen": True}

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message)

    @classmethod
    def required(cls) -> "ValidationResult":
        """The verdict for an empty required field."""
        return cls(is_valid=False, message=REQUIRED_MESSAGE)

    @property
    def is_required_error(self) -> bool:
        return not self.is_valid and self.message == REQUIRED_MESSAGE

    def __bool__(self) -> bool:
        return self.is_valid
