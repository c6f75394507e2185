"""
Data models for idform.

This module contains Pydantic models for:
- Field declarations and the per-field read model
- Validation results
- Submission state
- User records for the table
"""

from idform.models.field_spec import (
    FieldSpec,
    FieldView,
    FormatValidator,
    StateOption,
)
from idform.models.submission import (
    NotificationSeverity,
    SubmissionPhase,
    SubmissionState,
)
from idform.models.user_record import (
    GeoPoint,
    UserRecord,
)
from idform.models.validation_result import (
    REQUIRED_MESSAGE,
    ValidationResult,
)

__all__ = [
    # Schema
    "FieldSpec",
    "FieldView",
    "FormatValidator",
    "StateOption",
    # Validation
    "REQUIRED_MESSAGE",
    "ValidationResult",
    # Submission
    "NotificationSeverity",
    "SubmissionPhase",
    "SubmissionState",
    # Table
    "GeoPoint",
    "UserRecord",
]
