"""
Flat-keyed trees holding form values and validation messages.

Both trees are keyed by the schema's dotted paths and can be rebuilt
into the nested record shape (``{"userInfo": {...}, "address": {...}}``).
They are owned by ``FormEngine``; nothing else writes to them.
"""

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from idform.errors import UnknownPathError


def nest(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild a nested dict from dotted paths, preserving key order."""
    nested: dict[str, Any] = {}
    for path, value in flat.items():
        *parents, leaf = path.split(".")
        node = nested
        for key in parents:
            node = node.setdefault(key, {})
        node[leaf] = value
    return nested


class FieldTree:
    """
    Mapping from a fixed set of paths to string leaves.

    Every declared path always has an entry; writes to any other path
    raise ``UnknownPathError``.
    """

    def __init__(self, paths: Iterable[str], initial: Mapping[str, str] | None = None):
        initial = initial or {}
        self._leaves: dict[str, str] = {path: initial.get(path, "") for path in paths}

    def __contains__(self, path: object) -> bool:
        return path in self._leaves

    def __len__(self) -> int:
        return len(self._leaves)

    def __getitem__(self, path: str) -> str:
        try:
            return self._leaves[path]
        except KeyError:
            raise UnknownPathError(path) from None

    def __setitem__(self, path: str, value: str) -> None:
        if path not in self._leaves:
            raise UnknownPathError(path)
        self._leaves[path] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._leaves!r})"

    @property
    def flat(self) -> Mapping[str, str]:
        """Read-only live view of the leaves."""
        return MappingProxyType(self._leaves)

    def to_nested(self) -> dict[str, Any]:
        return nest(self._leaves)


class NestedFormState(FieldTree):
    """Current raw value per field path."""


class ErrorTree(FieldTree):
    """Latest validation message per field path ('' means no error)."""

    def has_errors(self) -> bool:
        return any(message != "" for message in self._leaves.values())
