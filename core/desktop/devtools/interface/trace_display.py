"""Agent activity tracing shown as small bubbles in the chat."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from core.desktop.devtools.interface.chat_render import BubbleHandle, trace_bubble
from core.desktop.devtools.interface.i18n import translate


SPAN_FUNCTION = "function"
SPAN_AGENT = "agent"
SPAN_GENERATION = "generation"


TOOL_SUMMARY_KEYS: Dict[str, str] = {
    "add_todo": "TOOL_SUMMARY_ADD",
    "remove_task": "TOOL_SUMMARY_REMOVE",
    "complete_task": "TOOL_SUMMARY_COMPLETE",
    "list_todos": "TOOL_SUMMARY_LIST",
    "format_list": "TOOL_SUMMARY_FORMAT",
}


@dataclass
class Span:
    type: str
    name: str = ""


class TraceProcessor(Protocol):
    def on_trace_start(self, name: str) -> None:
        ...

    def on_span_end(self, span: Span) -> None:
        ...

    def on_trace_end(self, name: str) -> None:
        ...


class NullTraceProcessor:
    def on_trace_start(self, name: str) -> None:
        return None

    def on_span_end(self, span: Span) -> None:
        return None

    def on_trace_end(self, name: str) -> None:
        return None


def tool_summary(name: str) -> str:
    key = TOOL_SUMMARY_KEYS.get(name)
    return translate(key) if key else name


class ChatTraceProcessor:
    """Prints trace bubbles for one agent run.

    Owns the "Thinking..." bubble for the run: it is removed on the first
    trace event, or by ``close`` when no event ever fired.
    """

    def __init__(
        self,
        thinking: Optional[BubbleHandle] = None,
        emit: Optional[Callable[[str, str], None]] = None,
    ):
        self.thinking = thinking
        self.emit = emit or (lambda message, kind: trace_bubble(message, kind))

    def _clear_thinking(self) -> None:
        if self.thinking is not None:
            self.thinking.remove()
            self.thinking = None

    def on_trace_start(self, name: str) -> None:
        self._clear_thinking()
        self.emit(translate("TRACE_STARTED"), "trace")

    def on_span_end(self, span: Span) -> None:
        self._clear_thinking()
        if span.type == SPAN_FUNCTION:
            self.emit(translate("TRACE_TOOL", summary=tool_summary(span.name or "tool")), "tool")
        elif span.type == SPAN_AGENT:
            self.emit(translate("TRACE_AGENT", name=span.name or "agent"), "agent")
        elif span.type == SPAN_GENERATION:
            self.emit(translate("TRACE_GENERATION"), "generation")

    def on_trace_end(self, name: str) -> None:
        return None

    def close(self) -> None:
        """Remove the thinking bubble if the trace never fired."""
        self._clear_thinking()


__all__ = [
    "Span",
    "TraceProcessor",
    "NullTraceProcessor",
    "ChatTraceProcessor",
    "tool_summary",
    "SPAN_FUNCTION",
    "SPAN_AGENT",
    "SPAN_GENERATION",
]
