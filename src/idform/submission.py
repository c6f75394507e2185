"""
Submission lifecycle.

A small state machine around the single external write call:

    IDLE --submit--> SUBMITTING --success--> SUCCEEDED --dismiss/timeout--> IDLE
                                --failure--> FAILED    --dismiss/timeout--> IDLE

The write call is the only suspension point in the form's data flow.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol

from idform.config import get_config
from idform.models.submission import (
    NotificationSeverity,
    SubmissionPhase,
    SubmissionState,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "User submitted successfully!"
FAILURE_MESSAGE = "Error sending identification form."

# Async callable receiving the nested snapshot; raises on failure
SubmissionSink = Callable[[dict[str, Any]], Awaitable[Any]]
StateListener = Callable[[SubmissionState], None]


class SubmittableForm(Protocol):
    def is_submittable(self) -> bool: ...

    def snapshot(self) -> dict[str, Any]: ...


class SubmissionLifecycle:
    """
    Drives one submission attempt at a time and the feedback that follows.

    Usage:
        lifecycle = SubmissionLifecycle(HttpSubmissionSink())
        lifecycle.add_listener(lambda state: print(state.phase, state.message))
        accepted = await lifecycle.submit(engine)

    While SUBMITTING, further ``submit`` calls are refused without side
    effects. Outcome feedback is dismissed after ``display_duration_ms``
    or by ``dismiss()``. A new attempt discards any visible outcome.
    """

    def __init__(self, sink: SubmissionSink, display_duration_ms: int | None = None):
        if display_duration_ms is None:
            display_duration_ms = get_config().notification_duration_ms
        self.sink = sink
        self.display_duration_ms = display_duration_ms
        self.last_response: Any = None
        self._state = SubmissionState()
        self._listeners: list[StateListener] = []
        self._dismiss_handle: asyncio.TimerHandle | None = None

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def phase(self) -> SubmissionPhase:
        return self._state.phase

    def add_listener(self, callback: StateListener) -> None:
        """Subscribe to state transitions."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Unsubscribe from state transitions."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _transition(self, state: SubmissionState) -> None:
        self._state = state
        for callback in list(self._listeners):
            try:
                callback(state)
            except Exception as e:
                logger.warning(f"Error in submission state listener: {e}")

    async def submit(self, form: SubmittableForm) -> bool:
        """
        Run one submission attempt for ``form``.

        Returns:
            True if the attempt ran (whatever its outcome), False if it was
            refused because a submission is in flight or the form has errors.
        """
        if self._state.is_busy:
            logger.info("Submission refused: another submission is in flight")
            return False
        if not form.is_submittable():
            logger.info("Submission refused: form has validation errors")
            return False

        self._cancel_dismiss_timer()
        payload = form.snapshot()
        attempt = self._state.attempt + 1
        self.last_response = None
        self._transition(SubmissionState(phase=SubmissionPhase.SUBMITTING, attempt=attempt))

        try:
            response = await self.sink(payload)
        except asyncio.CancelledError:
            logger.warning(f"Identification form submission cancelled (attempt {attempt})")
            self._transition(SubmissionState(
                phase=SubmissionPhase.FAILED,
                message=FAILURE_MESSAGE,
                severity=NotificationSeverity.ERROR,
                attempt=attempt,
            ))
            self._schedule_dismiss()
            raise
        except Exception as e:
            logger.error(f"Error sending identification form (attempt {attempt}): {type(e).__name__}: {e}")
            self._transition(SubmissionState(
                phase=SubmissionPhase.FAILED,
                message=FAILURE_MESSAGE,
                severity=NotificationSeverity.ERROR,
                attempt=attempt,
            ))
        else:
            logger.info(f"Identification form submitted (attempt {attempt})")
            logger.debug(f"Server response: {response}")
            self.last_response = response
            self._transition(SubmissionState(
                phase=SubmissionPhase.SUCCEEDED,
                message=SUCCESS_MESSAGE,
                severity=NotificationSeverity.SUCCESS,
                attempt=attempt,
            ))

        self._schedule_dismiss()
        return True

    def dismiss(self) -> None:
        """Close the outcome notification and return to IDLE."""
        self._cancel_dismiss_timer()
        if not self._state.is_open:
            return
        self._transition(SubmissionState(attempt=self._state.attempt))

    def _schedule_dismiss(self) -> None:
        loop = asyncio.get_running_loop()
        self._dismiss_handle = loop.call_later(self.display_duration_ms / 1000, self.dismiss)

    def _cancel_dismiss_timer(self) -> None:
        if self._dismiss_handle is not None:
            self._dismiss_handle.cancel()
            self._dismiss_handle = None
