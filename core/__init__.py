from .todo import (
    Todo,
    ConvoMessage,
    ROLE_USER,
    ROLE_ASSISTANT,
    STATUS_OPEN,
    STATUS_COMPLETE,
    DEFAULT_APP_STATE,
    default_app_state,
    todos_from_state,
    todos_to_state,
)
from .task_ref import ById, ByTitle, TaskRef, parse_task_ref
from .resolver import ResolveResult, resolve_todo, ambiguous_message

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
    # References
    "ById",
    "ByTitle",
    "TaskRef",
    "parse_task_ref",
    # Resolution
    "ResolveResult",
    "resolve_todo",
    "ambiguous_message",
]
