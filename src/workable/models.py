# src/workable/models.py
"""
Read-only view over job records exactly as they come back from the Workable API.

Notes:
- Workable speaks snake_case (`full_title`, `created_at`, ...).
- Templates and callers like UpperCamelCase (`FullTitle`, `CreatedAt`).
- `WorkableResult.get("FullTitle")` translates one into the other, and nested
  objects come back wrapped again so `get("Location.City")` just works.
- Nothing here ever writes to the wrapped data.
"""

from __future__ import annotations
import copy
import re
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


_UPPER = re.compile(r"[A-Z]")


def snake_case(name: str) -> str:
    """
    `FullTitle` -> `full_title`.

    Purely mechanical: put an underscore before every capital letter, drop a
    leading underscore, lower-case everything. (So `ID` becomes `i_d`.)
    """
    return _UPPER.sub(r"_\g<0>", name).lstrip("_").lower()


class WorkableResult:
    """
    Wraps one JSON object from the API.

    - Scalars and lists are returned as-is.
    - Nested objects are returned as a new WorkableResult.
    - Unknown fields return None instead of raising.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        # own copy all the way down: cached results must not change under callers
        self._data: Dict[str, Any] = copy.deepcopy(dict(data or {}))

    def get(self, name: str) -> Any:
        """Look up a field by its display name; dots walk into nested objects."""
        value: Any = self
        for part in name.split("."):
            if not isinstance(value, WorkableResult):
                return None
            value = value._field(part)
        return value

    def _field(self, name: str) -> Any:
        value = self._data.get(snake_case(name))
        if isinstance(value, Mapping):
            return WorkableResult(value)
        if isinstance(value, list):
            return copy.deepcopy(value)
        return value

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only snapshot; writes to nested values never reach the wrapper."""
        return MappingProxyType(copy.deepcopy(self._data))

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkableResult):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"WorkableResult({self._data!r})"
