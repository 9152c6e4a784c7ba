"""Chat agent: lets the model drive TodoManager through tool calls.

One ``run`` is one user turn:

1. send system instructions, recent conversation and the user message;
2. execute every tool call of the reply in order, feeding outputs back;
3. stop as soon as a step produced output from one of ``STOP_AT_TOOLS``
   (the last such output is the answer), or when the model replies with
   plain text.

Tool outputs are returned verbatim so the user sees exactly what the
registry reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from core import ConvoMessage, ROLE_ASSISTANT, ROLE_USER
from core.desktop.devtools.application.todo_manager import TodoManager
from core.desktop.devtools.interface.agent_tools import STOP_AT_TOOLS, dispatch_tool, get_tool_definitions
from core.desktop.devtools.interface.constants import (
    ASSISTANT_INSTRUCTIONS,
    ASSISTANT_NAME,
    DEFAULT_MAX_TURNS,
)
from core.desktop.devtools.interface.trace_display import (
    NullTraceProcessor,
    Span,
    SPAN_AGENT,
    SPAN_FUNCTION,
    SPAN_GENERATION,
    TraceProcessor,
)


logger = logging.getLogger("todo_assistant.agent")


class AgentRunError(RuntimeError):
    pass


class ChatClient(Protocol):
    def complete(self, messages: List[Dict[str, Any]], tools: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        ...


@dataclass
class ToolResult:
    name: str
    output: str
    call_id: str = ""


@dataclass
class RunResult:
    final_output: str
    tool_results: List[ToolResult] = field(default_factory=list)
    turns: int = 0


def final_output_from_results(results: List[ToolResult]) -> Optional[str]:
    """Use the LAST stop-tool output so every call of the step has finished first."""
    outputs = [r for r in results if r.name in STOP_AT_TOOLS]
    if not outputs:
        return None
    return str(outputs[-1].output or "")


class TodoAgent:
    def __init__(
        self,
        manager: TodoManager,
        client: ChatClient,
        *,
        instructions: str = ASSISTANT_INSTRUCTIONS,
        name: str = ASSISTANT_NAME,
        max_turns: int = DEFAULT_MAX_TURNS,
        history_limit: int = 20,
    ):
        self.manager = manager
        self.client = client
        self.instructions = instructions
        self.name = name
        self.max_turns = max_turns
        self.history_limit = history_limit
        self.tools = get_tool_definitions()

    # ------------------------------------------------------------------ history

    def history(self) -> List[ConvoMessage]:
        raw = self.manager.store.get().get("conversation") or []
        return [ConvoMessage.from_dict(item) for item in raw if isinstance(item, dict)]

    def _remember(self, user_message: str, answer: str) -> None:
        raw = list(self.manager.store.get().get("conversation") or [])
        raw.append(ConvoMessage(ROLE_USER, user_message).to_dict())
        raw.append(ConvoMessage(ROLE_ASSISTANT, answer).to_dict())
        self.manager.store.update({"conversation": raw})

    def _initial_messages(self, message: str) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = [{"role": "system", "content": self.instructions}]
        if self.history_limit > 0:
            messages.extend(m.to_dict() for m in self.history()[-self.history_limit:])
        messages.append({"role": ROLE_USER, "content": message})
        return messages

    # ---------------------------------------------------------------------- run

    def _run_tool_calls(
        self,
        tool_calls: List[Dict[str, Any]],
        messages: List[Dict[str, Any]],
        trace: TraceProcessor,
    ) -> List[ToolResult]:
        results: List[ToolResult] = []
        for call in tool_calls:
            function = call.get("function") or {}
            name = str(function.get("name") or "")
            call_id = str(call.get("id") or "")
            output = dispatch_tool(self.manager, name, function.get("arguments"))
            logger.debug("Tool %s(%s) -> %r", name, function.get("arguments"), output[:80])
            results.append(ToolResult(name=name, output=output, call_id=call_id))
            messages.append({"role": "tool", "tool_call_id": call_id, "content": output})
            trace.on_span_end(Span(SPAN_FUNCTION, name))
        return results

    def run(self, message: str, trace: Optional[TraceProcessor] = None) -> RunResult:
        trace = trace or NullTraceProcessor()
        messages = self._initial_messages(message)
        all_results: List[ToolResult] = []
        trace.on_trace_start(self.name)
        try:
            for turn in range(1, self.max_turns + 1):
                reply = self.client.complete(messages, self.tools)
                trace.on_span_end(Span(SPAN_GENERATION))
                tool_calls = reply.get("tool_calls") or []
                if not tool_calls:
                    answer = str(reply.get("content") or "")
                    return self._finish(message, answer, all_results, turn, trace)

                messages.append(
                    {
                        "role": ROLE_ASSISTANT,
                        "content": reply.get("content"),
                        "tool_calls": tool_calls,
                    }
                )
                step_results = self._run_tool_calls(tool_calls, messages, trace)
                all_results.extend(step_results)
                final = final_output_from_results(step_results)
                if final is not None:
                    return self._finish(message, final, all_results, turn, trace)
        finally:
            trace.on_trace_end(self.name)
        raise AgentRunError(f"Max turns ({self.max_turns}) exceeded")

    def _finish(
        self,
        message: str,
        answer: str,
        results: List[ToolResult],
        turns: int,
        trace: TraceProcessor,
    ) -> RunResult:
        trace.on_span_end(Span(SPAN_AGENT, self.name))
        self._remember(message, answer)
        return RunResult(final_output=answer, tool_results=results, turns=turns)


__all__ = [
    "AgentRunError",
    "ChatClient",
    "RunResult",
    "ToolResult",
    "TodoAgent",
    "final_output_from_results",
]
