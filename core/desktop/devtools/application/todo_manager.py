"""Application-level todo service: add, complete, list and format.

Every operation re-reads ``todos`` from the store and writes the whole array
back, so several calls issued by the agent within one turn compose without
lost updates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from application.ports import StateStore
from config import get_state_path
from core import (
    Todo,
    TaskRef,
    default_app_state,
    parse_task_ref,
    resolve_todo,
    todos_from_state,
    todos_to_state,
)
from core.desktop.devtools.interface.constants import (
    DONE_GLYPH,
    OPEN_GLYPH,
    TODO_ADDED,
    TODO_COMPLETED,
    TODO_DUPLICATE,
    TODO_EMPTY_TITLE,
    TODO_LIST_EMPTY,
    TODO_LIST_HEADER,
    TODO_NOT_FOUND,
    TODO_REACTIVATED,
)
from infrastructure.file_state_store import FileStateStore


logger = logging.getLogger("todo_assistant.todos")


def _next_id(todos: List[Todo]) -> int:
    return max((t.id for t in todos), default=0) + 1


class TodoManager:
    def __init__(
        self,
        state_path: Optional[Path] = None,
        store: Optional[StateStore] = None,
    ):
        if store is None:
            store = FileStateStore(state_path or get_state_path(), default_app_state())
        self.store: StateStore = store

    def _save_todos(self, todos: List[Todo]) -> None:
        self.store.update({"todos": todos_to_state(todos)})

    def _with_list(self, message: str) -> str:
        return f"{message}\n\n{self.format()}"

    def get(self) -> List[Todo]:
        """Fresh todos from the latest state."""
        return todos_from_state(self.store.get())

    def list(self) -> List[Dict[str, str]]:
        return [{"task": t.title, "status": t.status} for t in self.get()]

    def format(self) -> str:
        # sorted() is stable: relative order inside open/complete buckets is kept
        todos = sorted(self.get(), key=lambda t: t.completed)
        lines = [f"{DONE_GLYPH if t.completed else OPEN_GLYPH} {t.title}" for t in todos]
        body = "\n".join(lines) or TODO_LIST_EMPTY
        return f"{TODO_LIST_HEADER}\n\n{body}"

    def add(self, item: str) -> str:
        todos = self.get()
        title = (item or "").strip()
        if not title:
            return TODO_EMPTY_TITLE

        if any(t.matches_title(title) and not t.completed for t in todos):
            return self._with_list(TODO_DUPLICATE.format(title=title))

        # re-adding a finished item brings it back instead of duplicating the row
        done = next((t for t in todos if t.matches_title(title) and t.completed), None)
        if done is not None:
            done.completed = False
            self._save_todos(todos)
            logger.debug("Reactivated todo #%s %r", done.id, done.title)
            return self._with_list(TODO_REACTIVATED.format(title=title))

        todo = Todo(id=_next_id(todos), title=title, completed=False)
        self._save_todos(todos + [todo])
        logger.debug("Added todo #%s %r", todo.id, todo.title)
        return self._with_list(TODO_ADDED.format(title=title))

    def complete(self, id_or_title: TaskRef | int | str) -> str:
        """Mark a todo complete. Also backs the "remove" intent: nothing is ever deleted."""
        todos = self.get()
        result = resolve_todo(todos, parse_task_ref(id_or_title))

        if result.error:
            return result.error
        if result.todo is None:
            return TODO_NOT_FOUND

        todo = result.todo
        todo.completed = True
        self._save_todos(todos)
        logger.debug("Completed todo #%s %r", todo.id, todo.title)
        return self._with_list(TODO_COMPLETED.format(title=todo.title))


__all__ = ["TodoManager"]
