"""
Form engine.

This is the main entry point for editing a form: one generic
``set_field`` drives every field through the schema table, keeping
values and validation messages in lock-step.
"""

import logging
from typing import TYPE_CHECKING, Any, Mapping

from idform.models.field_spec import FieldView
from idform.schema import IDENTIFICATION_SCHEMA, FormSchema
from idform.state import ErrorTree, NestedFormState

if TYPE_CHECKING:
    from idform.submission import SubmissionLifecycle

logger = logging.getLogger(__name__)

# Nested record sent to the submission sink
FormSnapshot = dict[str, Any]


class FormEngine:
    """
    Owns the form values and their error tree.

    Usage:
        engine = FormEngine()
        engine.set_field("userInfo.curp", "XXXX")
        engine.get_error("userInfo.curp")   # "Invalid CURP"
        engine.is_submittable()             # False

        # With a submission lifecycle attached
        engine = FormEngine(lifecycle=SubmissionLifecycle(HttpSubmissionSink()))
        await engine.submit()

    Every write to a value is immediately followed by re-validating that
    path, and only that path. Not thread-safe: edits are expected from a
    single event loop.
    """

    def __init__(
        self,
        schema: FormSchema = IDENTIFICATION_SCHEMA,
        lifecycle: "SubmissionLifecycle | None" = None,
    ):
        self.schema = schema
        self.lifecycle = lifecycle
        self._values = NestedFormState(schema.paths)
        self._errors = ErrorTree(schema.paths)
        self._load_defaults()

    def _load_defaults(self) -> None:
        for spec in self.schema:
            self._values[spec.path] = spec.default_value
            self._errors[spec.path] = spec.validate_value(spec.default_value).message

    def set_field(self, path: str, raw_value: str) -> None:
        """
        Write ``raw_value`` to ``path`` and re-validate that path.

        Raises:
            UnknownPathError: If ``path`` is not declared in the schema.
        """
        spec = self.schema.spec(path)
        result = spec.validate_value(raw_value)
        self._values[path] = raw_value
        self._errors[path] = result.message
        logger.debug(f"set_field {path}: {'valid' if result else result.message}")

    def get_value(self, path: str) -> str:
        return self._values[path]

    def get_error(self, path: str) -> str:
        return self._errors[path]

    @property
    def values(self) -> Mapping[str, str]:
        """Read-only view of the current values, keyed by path."""
        return self._values.flat

    @property
    def errors(self) -> Mapping[str, str]:
        """Read-only view of the current messages, keyed by path."""
        return self._errors.flat

    def is_submittable(self) -> bool:
        """True iff no path currently holds an error message."""
        return not self._errors.has_errors()

    @property
    def submit_disabled(self) -> bool:
        """Whether the submit trigger should be disabled right now."""
        busy = self.lifecycle is not None and self.lifecycle.state.is_busy
        return busy or not self.is_submittable()

    def snapshot(self) -> FormSnapshot:
        """Current values rebuilt into the nested record shape."""
        return self._values.to_nested()

    def reset(self) -> None:
        """Restore every path to its default and re-validate it."""
        self._load_defaults()
        logger.debug("Form reset to defaults")

    def field_view(self, path: str) -> FieldView:
        spec = self.schema.spec(path)
        error = self._errors[path]
        return FieldView(
            path=path,
            label=spec.label,
            value=self._values[path],
            error=error,
            has_error=bool(error),
            required=spec.required,
            widget=spec.widget,
            options=spec.options,
        )

    def field_views(self) -> list[FieldView]:
        return [self.field_view(path) for path in self.schema.paths]

    async def submit(self) -> bool:
        """
        Hand the current snapshot to the attached lifecycle.

        Returns:
            True if a submission attempt ran, False if it was refused.

        Raises:
            RuntimeError: If no lifecycle is attached.
        """
        if self.lifecycle is None:
            raise RuntimeError("No submission lifecycle attached to this form")
        return await self.lifecycle.submit(self)
