"""Tools the chat agent can call, and their dispatch onto TodoManager.

Every tool returns a string (what the model sees). Expected failures such as
an unknown tool or malformed arguments come back as ``Error: ...`` text so the
model can correct itself.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

from core.desktop.devtools.application.todo_manager import TodoManager


_ID_OR_TITLE_SCHEMA: Dict[str, Any] = {
    "type": ["number", "string"],
    "description": "Task ID (number) or title (string). Fuzzy: \"haircut\" matches \"haircut at 10am\".",
}


_TOOL_SPECS: Dict[str, Dict[str, Any]] = {
    "add_todo": {
        "description": (
            "Add an item to the todo list.\n"
            'Use when the user says: "add X", "create X", "new task X", etc.\n'
            'IMPORTANT: Call ONCE PER ITEM. For "add rice cereal milk" make 3 separate calls with item '
            '"rice", "cereal", "milk". Never pass multiple items in one call.'
        ),
        "schema": {
            "type": "object",
            "properties": {"item": {"type": "string", "description": "Title of the single item to add."}},
            "required": ["item"],
        },
    },
    "remove_task": {
        "description": (
            "Remove or clear a task from the list. Marks it complete (does not delete).\n"
            'Use when the user says: "remove X", "clear X", "delete X", "get rid of X".\n'
            'IMPORTANT: Call this tool ONCE PER ITEM. For "remove rice milk and sugar" make 3 separate calls: '
            'remove_task("rice"), remove_task("milk"), remove_task("sugar"). Never pass multiple items in one call.'
        ),
        "schema": {
            "type": "object",
            "properties": {"idOrTitle": _ID_OR_TITLE_SCHEMA},
            "required": ["idOrTitle"],
        },
    },
    "complete_task": {
        "description": (
            "Mark a task as done/complete.\n"
            'Use when the user says: "complete X", "finish X", "done with X", "mark X done".\n'
            'IMPORTANT: Call this tool ONCE PER ITEM. For "complete rice milk sugar" make 3 separate calls. '
            "Never pass multiple items in one call."
        ),
        "schema": {
            "type": "object",
            "properties": {"idOrTitle": _ID_OR_TITLE_SCHEMA},
            "required": ["idOrTitle"],
        },
    },
    "list_todos": {
        "description": "Get all tasks. Returns raw JSON array.\nUse when the user wants raw data.",
        "schema": {"type": "object", "properties": {}, "required": []},
    },
    "format_list": {
        "description": (
            'Get a formatted display of all tasks. Returns string with one task per line: "⬜ Task" (open) '
            'or "✅ Task" (done).\n'
            'Use when the user says: "list", "show my tasks", "what\'s on my list", "display tasks", etc.'
        ),
        "schema": {"type": "object", "properties": {}, "required": []},
    },
}

# Any of these producing output ends the run with that output.
STOP_AT_TOOLS = ("add_todo", "remove_task", "complete_task", "list_todos", "format_list")


def _require(arguments: Dict[str, Any], key: str) -> Any:
    if key not in arguments or arguments[key] is None:
        raise ValueError(f"missing argument '{key}'")
    return arguments[key]


TOOL_HANDLERS: Dict[str, Callable[[TodoManager, Dict[str, Any]], str]] = {
    "add_todo": lambda manager, args: manager.add(str(_require(args, "item"))),
    "remove_task": lambda manager, args: manager.complete(_require(args, "idOrTitle")),
    "complete_task": lambda manager, args: manager.complete(_require(args, "idOrTitle")),
    "list_todos": lambda manager, args: json.dumps(manager.list(), ensure_ascii=False, indent=2),
    "format_list": lambda manager, args: manager.format(),
}


def get_tool_definitions() -> List[Dict[str, Any]]:
    """Return tool definitions in the chat-completions function format."""
    tools: List[Dict[str, Any]] = []
    for name in STOP_AT_TOOLS:
        spec = _TOOL_SPECS[name]
        tools.append(
            {
                "type": "function",
                "function": {
                    "name": name,
                    "description": spec["description"],
                    "parameters": spec["schema"],
                },
            }
        )
    return tools


def parse_arguments(raw: Optional[str | Dict[str, Any]]) -> Dict[str, Any]:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return raw
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("arguments must be an object")
    return data


def dispatch_tool(manager: TodoManager, name: str, raw_arguments: Optional[str | Dict[str, Any]] = None) -> str:
    """Run one tool call against the manager and return its text output."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return f"Error: Unknown tool: {name}"
    try:
        arguments = parse_arguments(raw_arguments)
        return handler(manager, arguments)
    except ValueError as exc:
        return f"Error: Invalid arguments for {name}: {exc}"


__all__ = [
    "STOP_AT_TOOLS",
    "TOOL_HANDLERS",
    "get_tool_definitions",
    "parse_arguments",
    "dispatch_tool",
]
