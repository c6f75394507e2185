"""
User table store.

Holds the fetched user records and the table interactions: sorting,
editing and deleting rows. Edits made here are only type-checked; unlike the
identification form, no format validation runs on this path.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, Literal

from idform.errors import UnknownRecordError
from idform.models.user_record import UserRecord

logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]
SORTABLE_KEYS = ("id", "name", "email", "website")
UserSource = Callable[[], Awaitable[Iterable[UserRecord]]]


class TableStore:
    """In-memory list of user records with sort, edit and delete."""

    def __init__(self, rows: Iterable[UserRecord] | None = None):
        self._rows: list[UserRecord] = list(rows or [])
        self.loading = rows is None
        self.sort_key = "id"
        self.sort_direction: SortDirection = "asc"
        self.edit_target: int | None = None

    @property
    def rows(self) -> list[UserRecord]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def load(self, records: Iterable[UserRecord]) -> None:
        self._rows = list(records)
        self.edit_target = None
        self.loading = False

    async def refresh(self, source: UserSource) -> None:
        """
        Load rows from ``source``.

        A failing source is logged and leaves the table empty; the
        loading flag is cleared either way.
        """
        self.loading = True
        try:
            records = await source()
        except Exception as e:
            logger.error(f"Error fetching data: {type(e).__name__}: {e}")
            self._rows = []
        else:
            self._rows = list(records)
            logger.info(f"Loaded {len(self._rows)} user records")
        finally:
            self.edit_target = None
            self.loading = False

    def sort_by(self, key: str, direction: SortDirection = "asc") -> list[UserRecord]:
        """Stable sort on ``key``'s natural ordering."""
        if direction not in ("asc", "desc"):
            raise ValueError(f"Unknown sort direction: {direction!r}. Use 'asc' or 'desc'.")
        if key not in SORTABLE_KEYS:
            raise ValueError(f"Unknown sort key: {key!r}")
        self.sort_key = key
        self.sort_direction = direction
        self._rows.sort(key=lambda row: getattr(row, key), reverse=direction == "desc")
        return self.rows

    def toggle_sort(self, key: str = "id") -> list[UserRecord]:
        """Flip between ascending and descending, like clicking a column header."""
        direction: SortDirection = "desc" if self.sort_direction == "asc" else "asc"
        return self.sort_by(key, direction)

    def _index_of(self, record_id: int) -> int:
        for i, row in enumerate(self._rows):
            if row.id == record_id:
                return i
        raise UnknownRecordError(record_id)

    def get(self, record_id: int) -> UserRecord:
        return self._rows[self._index_of(record_id)]

    def begin_edit(self, record_id: int) -> UserRecord:
        """Mark a row as the edit target and return a copy to edit."""
        row = self.get(record_id)
        self.edit_target = record_id
        return row.model_copy(deep=True)

    def cancel_edit(self) -> None:
        self.edit_target = None

    def replace(self, record_id: int, patch: dict[str, Any]) -> UserRecord:
        """
        Merge ``patch`` into the matching row.

        Keys that are not record fields, and ``id`` itself, are ignored.
        Values are only type-checked against the record model; no format
        validation runs. A value of the wrong type raises
        ``pydantic.ValidationError`` and leaves the row unchanged.
        """
        index = self._index_of(record_id)
        update = {k: v for k, v in patch.items() if k in UserRecord.model_fields and k != "id"}
        updated = UserRecord.model_validate({**self._rows[index].model_dump(), **update})
        self._rows[index] = updated
        return updated

    def save_edit(self, patch: dict[str, Any]) -> UserRecord:
        """Merge ``patch`` into the edit target and finish editing."""
        if self.edit_target is None:
            raise RuntimeError("No row is being edited")
        updated = self.replace(self.edit_target, patch)
        self.edit_target = None
        return updated

    def remove(self, record_id: int) -> None:
        """Delete the matching row; missing ids are ignored."""
        self._rows = [row for row in self._rows if row.id != record_id]
        if self.edit_target == record_id:
            self.edit_target = None
