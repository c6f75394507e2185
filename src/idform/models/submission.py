"""
Submission state models.

These models describe where the one-shot submission currently stands
and what feedback, if any, the user should see.
"""

from enum import Enum

from pydantic import BaseModel, Field


class SubmissionPhase(str, Enum):
    """Phases of the submission lifecycle."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class NotificationSeverity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class SubmissionState(BaseModel):
    """Snapshot of the submission lifecycle, read-only to the UI layer."""

    phase: SubmissionPhase = Field(default=SubmissionPhase.IDLE, description="Current phase")
    message: str = Field(default="", description="Feedback message shown to the user")
    severity: NotificationSeverity | None = Field(
        default=None, description="Severity of the feedback, None while nothing is shown"
    )
    attempt: int = Field(default=0, description="Number of submission attempts started so far")

    model_config = {"frozen": True}

    @property
    def is_busy(self) -> bool:
        """Whether a submission is in flight."""
        return self.phase == SubmissionPhase.SUBMITTING

    @property
    def is_open(self) -> bool:
        """Whether an outcome notification is currently visible."""
        return self.phase in (SubmissionPhase.SUCCEEDED, SubmissionPhase.FAILED)
