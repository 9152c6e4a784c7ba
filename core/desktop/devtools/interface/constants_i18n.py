"""Language packs for user-facing strings."""

from typing import Dict

LANG_PACK: Dict[str, Dict[str, str]] = {
    "en": {
        # Chat surface
        "CHAT_BANNER": " ===== Todo List Assistant ===== ",
        "CHAT_HINT": "Type 'exit' or 'quit' or submit an empty message to end.",
        "CHAT_GOODBYE": "Goodbye!",
        "CHAT_THINKING": "Thinking...",
        "CHAT_ERROR": "Error: {message}",
        "CHAT_TEST_ERROR": "Test error",
        "CHAT_NO_API_KEY": "OpenAI API key missing. Set OPENAI_API_KEY or api_key in {path}.",
        "PROMPT_LABEL": "prompt",
        # Bubble titles
        "BUBBLE_USER": "👤 You",
        "BUBBLE_ASSISTANT": "🤖 Assistant",
        "BUBBLE_TOOL": "🔧 Tool",
        "BUBBLE_LOADING": "💭 Thinking...",
        "BUBBLE_ERROR": "🚨 Error",
        "BUBBLE_SUCCESS": "✅ Success",
        "BUBBLE_WARNING": "⚠️ Warning",
        # Trace
        "TRACE_STARTED": "trace — started",
        "TRACE_TOOL": "tool — {summary}",
        "TRACE_AGENT": "agent — {name}",
        "TRACE_GENERATION": "llm — generation",
        "TOOL_SUMMARY_ADD": "adding item",
        "TOOL_SUMMARY_REMOVE": "removing task",
        "TOOL_SUMMARY_COMPLETE": "completing task",
        "TOOL_SUMMARY_LIST": "listing tasks",
        "TOOL_SUMMARY_FORMAT": "formatting list",
    },
    "ru": {
        "CHAT_BANNER": " ===== Список задач ===== ",
        "CHAT_HINT": "Введите 'exit' или 'quit' либо пустое сообщение для выхода.",
        "CHAT_GOODBYE": "До встречи!",
        "CHAT_THINKING": "Думаю...",
        "CHAT_ERROR": "Ошибка: {message}",
        "BUBBLE_USER": "👤 Вы",
        "BUBBLE_ASSISTANT": "🤖 Ассистент",
        "BUBBLE_TOOL": "🔧 Инструмент",
        "BUBBLE_LOADING": "💭 Думаю...",
        "BUBBLE_ERROR": "🚨 Ошибка",
        "BUBBLE_SUCCESS": "✅ Готово",
        "BUBBLE_WARNING": "⚠️ Внимание",
    },
}
