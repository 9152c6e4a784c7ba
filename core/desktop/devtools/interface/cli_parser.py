"""CLI parser construction for the todo assistant."""

import argparse
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="todo-assistant — manage a todo list by chatting with an LLM agent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--state-file", dest="state_file", help="JSON state document (default: ./state.json)")
    parser.add_argument("--model", help="chat model name (default from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to stderr")

    sub = parser.add_subparsers(dest="command", help="Commands")

    # chat
    chat_p = sub.add_parser("chat", help="Start the chat assistant (default)")
    chat_p.add_argument("--theme", choices=list(themes.keys()), default=default_theme, help="color palette")
    chat_p.set_defaults(func=commands.cmd_chat)

    # add
    ap = sub.add_parser("add", help="Add a task")
    ap.add_argument("item", nargs="+")
    ap.set_defaults(func=commands.cmd_add)

    # done
    dp = sub.add_parser("done", help="Mark a task complete by id or title")
    dp.add_argument("id_or_title", nargs="+")
    dp.set_defaults(func=commands.cmd_done)

    # list
    lp = sub.add_parser("list", help="List tasks")
    lp.add_argument("--json", action="store_true", help="structured JSON output")
    lp.set_defaults(func=commands.cmd_list)

    # show
    sp = sub.add_parser("show", help="Show the formatted task list")
    sp.set_defaults(func=commands.cmd_show)

    # config
    cp = sub.add_parser("config", help="Show or store chat settings in the user config file")
    cp.add_argument("--api-key", dest="api_key", help="OpenAI API key (empty string removes it)")
    cp.add_argument("--lang", help="interface language (empty string resets to English)")
    cp.set_defaults(func=commands.cmd_config)

    return parser
