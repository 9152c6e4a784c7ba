from pathlib import Path

import pytest

import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "USER_CONFIG_PATH", tmp_path / "cfg.yaml")
    for name in ("TODO_ASSISTANT_MODEL", "TODO_ASSISTANT_API_BASE", "OPENAI_API_KEY",
                 "TODO_ASSISTANT_STATE_FILE", "TODO_ASSISTANT_LANG"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "cfg.yaml"


def test_defaults():
    assert config.get_model() == config.DEFAULT_MODEL
    assert config.get_api_base() == config.DEFAULT_API_BASE
    assert config.get_api_key() == ""
    assert config.get_history_limit() == config.DEFAULT_HISTORY_LIMIT


def test_yaml_values(isolated_config):
    isolated_config.write_text("model: small\napi_base: http://localhost:8000/v1/\nhistory_limit: 4\n", encoding="utf-8")
    assert config.get_model() == "small"
    assert config.get_api_base() == "http://localhost:8000/v1"
    assert config.get_history_limit() == 4


def test_env_overrides_yaml(isolated_config, monkeypatch):
    isolated_config.write_text("model: small\n", encoding="utf-8")
    monkeypatch.setenv("TODO_ASSISTANT_MODEL", "big")
    assert config.get_model() == "big"


def test_corrupt_yaml_is_ignored(isolated_config):
    isolated_config.write_text("model: [unclosed\n", encoding="utf-8")
    assert config.get_model() == config.DEFAULT_MODEL


def test_bad_history_limit(isolated_config):
    isolated_config.write_text("history_limit: lots\n", encoding="utf-8")
    assert config.get_history_limit() == config.DEFAULT_HISTORY_LIMIT


def test_set_and_clear_api_key(isolated_config):
    config.set_api_key(" sk-123 ")
    assert config.get_api_key() == "sk-123"
    config.set_api_key("")
    assert config.get_api_key() == ""
    assert not isolated_config.exists()


def test_set_user_lang(isolated_config):
    config.set_user_lang("ru")
    assert config.get_user_lang() == "ru"


def test_state_path_relative_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert config.get_state_path() == (tmp_path / "state.json").resolve()
    monkeypatch.setenv("TODO_ASSISTANT_STATE_FILE", str(tmp_path / "other.json"))
    assert config.get_state_path() == tmp_path / "other.json"
