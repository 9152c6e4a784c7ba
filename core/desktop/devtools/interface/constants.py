"""Interface-level constants for the todo assistant CLI."""

from core.desktop.devtools.interface.constants_i18n import LANG_PACK  # noqa: F401

OPEN_GLYPH = "⬜"
DONE_GLYPH = "✅"

# Registry replies are part of the tool contract the model reads; they stay
# English whatever the UI language is.
TODO_LIST_HEADER = "Here are your tasks:"
TODO_LIST_EMPTY = "(no tasks)"
TODO_ADDED = "Added: {title}"
TODO_DUPLICATE = 'warning: ⚠️  Item already "{title}" exists.'
TODO_REACTIVATED = 'warning: ⚠️  The completed item "{title}" already exists. I went ahead and activated it again!'
TODO_COMPLETED = "Completed: {title}"
TODO_NOT_FOUND = "Error: Task not found."
TODO_EMPTY_TITLE = "Error: Task title is empty."

EXIT_WORDS = ("exit", "quit")
TEST_ERROR_DIRECTIVE = "test error"

DEFAULT_MAX_TURNS = 10
PROMPT_BOX_WIDTH = 50

ASSISTANT_NAME = "Todo List Assistant"

ASSISTANT_INSTRUCTIONS = """You are my helpful assistant. Help manage tasks using the tools.
Only claim success when a tool actually returns success. Prefer format_list over list_todos for display.

When the user asks to add, remove, or complete MULTIPLE items (e.g. "add rice cereal milk" or "remove rice milk and sugar"):
- Call add_todo, remove_task, or complete_task SEPARATELY for EACH item.
- Never combine multiple items in one tool call (e.g. never pass "rice milk" as a single idOrTitle).
"""
