"""Todo items and the persisted application state document.

The state document is plain JSON:

    {
        "todos": [{"id": 1, "title": "Buy Milk", "completed": false}],
        "conversation": [{"role": "user", "content": "add milk"}]
    }

Todos are never deleted, only toggled between open and complete.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal


logger = logging.getLogger("todo_assistant.todos")

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

STATUS_OPEN = "open"
STATUS_COMPLETE = "complete"


@dataclass
class Todo:
    id: int
    title: str
    completed: bool = False

    @property
    def status(self) -> str:
        return STATUS_COMPLETE if self.completed else STATUS_OPEN

    def matches_title(self, title: str) -> bool:
        """Case-insensitive title equality used for dedup and exact lookup."""
        return self.title.lower() == (title or "").strip().lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for storage."""
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        """Deserialize from dictionary."""
        return cls(
            id=int(data.get("id", 0)),
            title=str(data.get("title", "")),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class ConvoMessage:
    role: Literal["user", "assistant"]
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConvoMessage":
        role = data.get("role", ROLE_USER)
        return cls(
            role=ROLE_ASSISTANT if role == ROLE_ASSISTANT else ROLE_USER,
            content=str(data.get("content", "")),
        )


DEFAULT_APP_STATE: Dict[str, List[Dict[str, Any]]] = {
    "todos": [],
    "conversation": [],
}


def default_app_state() -> Dict[str, List[Dict[str, Any]]]:
    """Fresh copy of the empty state document."""
    return copy.deepcopy(DEFAULT_APP_STATE)


def todos_from_state(state: Dict[str, Any]) -> List[Todo]:
    """Build fresh Todo objects from the raw ``todos`` field."""
    todos: List[Todo] = []
    for item in state.get("todos") or []:
        if not isinstance(item, dict):
            logger.warning("Skipping malformed todo row: %r", item)
            continue
        try:
            todos.append(Todo.from_dict(item))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping malformed todo row %r: %s", item, exc)
    return todos


def todos_to_state(todos: List[Todo]) -> List[Dict[str, Any]]:
    return [todo.to_dict() for todo in todos]


__all__ = [
    "Todo",
    "ConvoMessage",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "STATUS_OPEN",
    "STATUS_COMPLETE",
    "DEFAULT_APP_STATE",
    "default_app_state",
    "todos_from_state",
    "todos_to_state",
]
