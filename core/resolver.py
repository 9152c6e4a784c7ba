"""Resolve a task reference against a list of todos.

Ids match exactly. Titles try a case-insensitive exact match first and then
fall back to substring ("fuzzy") matching, which must be unambiguous:
"haircut" finds "haircut at 10am", while "buy" with both "Buy Milk" and
"Buy groceries" open is an error listing both candidates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .task_ref import ById, ByTitle, TaskRef, parse_task_ref
from .todo import Todo


@dataclass
class ResolveResult:
    todo: Optional[Todo] = None
    error: Optional[str] = None
    matches: List[Todo] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.todo is not None


def ambiguous_message(matches: Sequence[Todo]) -> str:
    titles = ", ".join(m.title for m in matches)
    return f"Error: Multiple matches ({titles}). Be more specific."


def _resolve_by_id(todos: Sequence[Todo], ref: ById) -> ResolveResult:
    for todo in todos:
        if todo.id == ref.id:
            return ResolveResult(todo=todo, matches=[todo])
    return ResolveResult()


def _resolve_by_title(todos: Sequence[Todo], ref: ByTitle) -> ResolveResult:
    needle = ref.title.strip().lower()
    if not needle:
        return ResolveResult()
    for todo in todos:
        if todo.title.lower() == needle:
            return ResolveResult(todo=todo, matches=[todo])

    matches = [t for t in todos if needle in t.title.lower()]
    if len(matches) == 1:
        return ResolveResult(todo=matches[0], matches=matches)
    if len(matches) > 1:
        return ResolveResult(error=ambiguous_message(matches), matches=matches)
    return ResolveResult()


def resolve_todo(todos: Sequence[Todo], ref: TaskRef | int | str) -> ResolveResult:
    """Find the todo addressed by ``ref``. Pure: no mutation, no I/O."""
    ref = parse_task_ref(ref)
    if isinstance(ref, ById):
        return _resolve_by_id(todos, ref)
    if isinstance(ref, ByTitle):
        return _resolve_by_title(todos, ref)
    raise TypeError(f"Unsupported task reference: {ref!r}")


__all__ = ["ResolveResult", "resolve_todo", "ambiguous_message"]
