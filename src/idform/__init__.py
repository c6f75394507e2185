"""
idform: nested form state and validation engine.

Holds an identification form (personal data + address), validates every
edit with the field's own validator, keeps a parallel error tree, and
drives a one-shot asynchronous submission with user feedback.

Simple Usage:
    from idform import FormEngine

    engine = FormEngine()
    engine.set_field("address.zipCode", "123456")
    engine.get_error("address.zipCode")
    # "Only numbers are allowed less than 5 digits"
    engine.is_submittable()     # False

Submission:
    from idform import FormEngine, HttpSubmissionSink, SubmissionLifecycle

    engine = FormEngine(lifecycle=SubmissionLifecycle(HttpSubmissionSink()))
    ...
    accepted = await engine.submit()
    engine.lifecycle.state.message

User table:
    from idform import TableStore, fetch_users

    table = TableStore()
    await table.refresh(fetch_users)
    table.toggle_sort("id")
"""

from idform.clients import HttpSubmissionSink, fetch_users
from idform.engine import FormEngine, FormSnapshot
from idform.errors import IdFormError, UnknownPathError, UnknownRecordError
from idform.models import (
    REQUIRED_MESSAGE,
    FieldSpec,
    FieldView,
    GeoPoint,
    NotificationSeverity,
    StateOption,
    SubmissionPhase,
    SubmissionState,
    UserRecord,
    ValidationResult,
)
from idform.schema import IDENTIFICATION_SCHEMA, MEXICAN_STATES, FormSchema
from idform.state import ErrorTree, NestedFormState
from idform.submission import (
    FAILURE_MESSAGE,
    SUCCESS_MESSAGE,
    SubmissionLifecycle,
)
from idform.table import TableStore

__all__ = [
    # Main interface
    "FormEngine",
    "FormSnapshot",
    "FormSchema",
    "IDENTIFICATION_SCHEMA",
    "MEXICAN_STATES",
    # State
    "ErrorTree",
    "NestedFormState",
    # Models
    "FieldSpec",
    "FieldView",
    "StateOption",
    "ValidationResult",
    "REQUIRED_MESSAGE",
    # Submission
    "SubmissionLifecycle",
    "SubmissionPhase",
    "SubmissionState",
    "NotificationSeverity",
    "SUCCESS_MESSAGE",
    "FAILURE_MESSAGE",
    "HttpSubmissionSink",
    # Table
    "TableStore",
    "UserRecord",
    "GeoPoint",
    "fetch_users",
    # Errors
    "IdFormError",
    "UnknownPathError",
    "UnknownRecordError",
]

__version__ = "0.1.0"
