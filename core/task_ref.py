"""Tagged task reference: a todo is addressed either by id or by title."""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ById:
    id: int

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class ByTitle:
    title: str

    def __str__(self) -> str:
        return self.title


TaskRef = Union[ById, ByTitle]


def parse_task_ref(value: Any) -> TaskRef:
    """Map a raw tool argument onto a reference.

    Only real integers address ids. Numeric-looking strings stay titles, so
    "3" fuzzy-matches "3 apples" instead of task #3.
    """
    if isinstance(value, (ById, ByTitle)):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return ById(value)
    if isinstance(value, float) and value.is_integer():
        return ById(int(value))
    return ByTitle(str(value if value is not None else ""))


__all__ = ["ById", "ByTitle", "TaskRef", "parse_task_ref"]
