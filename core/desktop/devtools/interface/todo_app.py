#!/usr/bin/env python3
"""
todo_assistant.py — chat with an LLM agent that manages your todo list.

State lives in one JSON document (todos + conversation). The offline
subcommands (add/done/list/show) operate on the same document without the
model.
"""

from __future__ import annotations

import logging
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from pathlib import Path
from typing import Callable, List, Optional

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from config import (
    USER_CONFIG_PATH,
    get_api_base,
    get_api_key,
    get_history_limit,
    get_model,
    get_user_lang,
    set_api_key,
    set_user_lang,
)
from core import ById, ByTitle
from core.desktop.devtools.application.todo_manager import TodoManager
from core.desktop.devtools.interface.agent_runtime import TodoAgent
from core.desktop.devtools.interface.chat_render import chat_bubble
from core.desktop.devtools.interface.chat_themes import DEFAULT_THEME, THEMES, build_style
from core.desktop.devtools.interface.cli_io import structured_error, structured_response
from core.desktop.devtools.interface.cli_parser import build_parser as build_cli_parser
from core.desktop.devtools.interface.constants import EXIT_WORDS, LANG_PACK, TEST_ERROR_DIRECTIVE
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.prompt_input import PromptInput
from core.desktop.devtools.interface.trace_display import ChatTraceProcessor
from infrastructure.llm_client import ChatCompletionsClient


def _manager(args) -> TodoManager:
    state_file = getattr(args, "state_file", None)
    return TodoManager(state_path=Path(state_file) if state_file else None)


def _is_error(message: str) -> bool:
    return message.startswith("Error:")


class ChatLoop:
    """Prompt → agent → bubbles, until the user leaves."""

    def __init__(
        self,
        agent: TodoAgent,
        prompt: PromptInput,
        *,
        theme: str = DEFAULT_THEME,
        bubble: Callable[..., object] = chat_bubble,
        trace_factory: Callable[..., ChatTraceProcessor] = ChatTraceProcessor,
    ):
        self.agent = agent
        self.prompt = prompt
        self.theme = theme
        self.bubble = bubble
        self.trace_factory = trace_factory

    def banner(self) -> None:
        print_formatted_text(
            FormattedText(
                [
                    ("class:banner", translate("CHAT_BANNER")),
                    ("", "\n"),
                    ("class:text.dim", translate("CHAT_HINT") + "\n"),
                ]
            ),
            style=build_style(self.theme),
        )

    def handle(self, raw: Optional[str]) -> bool:
        """Process one input line. Returns False when the loop should end."""
        message = (raw or "").strip()
        lowered = message.lower()
        if not message or lowered in EXIT_WORDS:
            print(translate("CHAT_GOODBYE"))
            return False

        is_error_test = lowered == TEST_ERROR_DIRECTIVE
        self.bubble(message, "user", theme=self.theme)
        trace = None
        try:
            thinking = self.bubble(translate("CHAT_THINKING"), "loading", theme=self.theme)
            trace = self.trace_factory(thinking)
            result = self.agent.run(message, trace)
            trace.close()
            if is_error_test:
                raise RuntimeError(translate("CHAT_TEST_ERROR"))
            self.bubble(result.final_output or "", "assistant", theme=self.theme)
        except Exception as exc:
            if trace is not None:
                trace.close()
            logging.getLogger("todo_assistant.chat").debug("Agent run failed", exc_info=True)
            self.bubble(translate("CHAT_ERROR", message=str(exc)), "error", theme=self.theme)
        return True

    def run(self) -> int:
        self.banner()
        while self.handle(self.prompt.ask()):
            pass
        return 0


def cmd_chat(args) -> int:
    """Start the interactive chat assistant."""
    if not get_api_key():
        print(translate("CHAT_NO_API_KEY", path=USER_CONFIG_PATH), file=sys.stderr)
        return 1
    theme = getattr(args, "theme", None) or DEFAULT_THEME
    manager = _manager(args)
    client = ChatCompletionsClient(
        api_base=get_api_base(),
        model=getattr(args, "model", None) or get_model(),
        key_provider=get_api_key,
    )
    agent = TodoAgent(manager, client, history_limit=get_history_limit())
    return ChatLoop(agent, PromptInput(theme=theme), theme=theme).run()


def cmd_add(args) -> int:
    manager = _manager(args)
    result = manager.add(" ".join(args.item))
    print(result)
    return 1 if _is_error(result) else 0


def cmd_done(args) -> int:
    manager = _manager(args)
    raw = " ".join(args.id_or_title).strip()
    ref = ById(int(raw)) if raw.isdecimal() else ByTitle(raw)
    result = manager.complete(ref)
    print(result)
    return 1 if _is_error(result) else 0


def cmd_list(args) -> int:
    manager = _manager(args)
    if getattr(args, "json", False):
        return structured_response("list", payload={"tasks": manager.list()})
    for todo in manager.get():
        mark = "x" if todo.completed else " "
        print(f"{todo.id:>3}. [{mark}] {todo.title}")
    return 0


def cmd_show(args) -> int:
    print(_manager(args).format())
    return 0


def _settings_payload() -> dict:
    return {
        "model": get_model(),
        "api_base": get_api_base(),
        "api_key_set": bool(get_api_key()),
        "lang": get_user_lang() or "en",
    }


def cmd_config(args) -> int:
    """Show settings, or store the API key and interface language."""
    api_key = getattr(args, "api_key", None)
    lang = getattr(args, "lang", None)
    if api_key is None and lang is None:
        return structured_response("config", payload=_settings_payload())
    if lang and lang not in LANG_PACK:
        return structured_error(
            "config",
            f"Unknown language: {lang}",
            payload={"available": sorted(LANG_PACK)},
        )
    if api_key is not None:
        set_api_key(api_key)
    if lang is not None:
        set_user_lang(lang)
    return structured_response("config", message="Saved", payload=_settings_payload())


def build_parser():
    """Build CLI argument parser."""
    parser = build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=DEFAULT_THEME)
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if getattr(args, "version", False):
        try:
            print(pkg_version("todo-assistant"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if not getattr(args, "command", None):
        return cmd_chat(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
