from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".todo_assistant_config.yaml"

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_STATE_FILE = "state.json"
DEFAULT_HISTORY_LIMIT = 20


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _setting(env_name: str, key: str, default: str = "") -> str:
    env_value = os.getenv(env_name, "").strip()
    if env_value:
        return env_value
    value = _load_config().get(key)
    return str(value).strip() if value else default


def get_model() -> str:
    return _setting("TODO_ASSISTANT_MODEL", "model", DEFAULT_MODEL)


def get_api_base() -> str:
    return _setting("TODO_ASSISTANT_API_BASE", "api_base", DEFAULT_API_BASE).rstrip("/")


def get_api_key() -> str:
    return _setting("OPENAI_API_KEY", "api_key")


def set_api_key(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["api_key"] = value
    else:
        data.pop("api_key", None)
    _save_config(data)


def get_state_path() -> Path:
    raw = _setting("TODO_ASSISTANT_STATE_FILE", "state_file", DEFAULT_STATE_FILE)
    path = Path(raw).expanduser()
    return path if path.is_absolute() else (Path.cwd() / path).resolve()


def get_user_lang() -> str:
    return _setting("TODO_ASSISTANT_LANG", "lang")


def set_user_lang(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["lang"] = value
    else:
        data.pop("lang", None)
    _save_config(data)


def get_history_limit() -> int:
    raw = _load_config().get("history_limit", DEFAULT_HISTORY_LIMIT)
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_HISTORY_LIMIT
    return max(0, limit)
