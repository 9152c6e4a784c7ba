import json
from pathlib import Path

import pytest

from core import ById, ByTitle, default_app_state
from core.desktop.devtools.application.todo_manager import TodoManager
from infrastructure.file_state_store import FileStateStore


@pytest.fixture
def manager(tmp_path: Path) -> TodoManager:
    return TodoManager(state_path=tmp_path / "state.test.json")


def _stored(manager: TodoManager):
    return json.loads(manager.store.path.read_text(encoding="utf-8"))


class TestGetAndList:
    def test_get_returns_todos_from_state(self, manager):
        manager.add("Buy Milk")
        todos = manager.get()
        assert len(todos) == 1
        assert todos[0].title == "Buy Milk"

    def test_get_empty(self, manager):
        assert manager.get() == []

    def test_list_returns_task_and_status(self, manager):
        manager.add("Buy Milk")
        assert manager.list() == [{"task": "Buy Milk", "status": "open"}]

    def test_list_follows_stored_order(self, manager):
        manager.add("A")
        manager.add("B")
        manager.complete("A")
        assert manager.list() == [
            {"task": "A", "status": "complete"},
            {"task": "B", "status": "open"},
        ]

    def test_list_survives_json_roundtrip(self, manager):
        manager.add("Buy Milk")
        manager.add("Пирог 🥧")
        manager.complete("Buy Milk")
        listing = manager.list()
        assert json.loads(json.dumps(listing)) == listing


class TestFormat:
    def test_empty_placeholder(self, manager):
        formatted = manager.format()
        assert "Here are your tasks" in formatted
        assert "(no tasks)" in formatted

    def test_open_marker(self, manager):
        manager.add("Buy Milk")
        assert "⬜ Buy Milk" in manager.format()

    def test_completed_marker(self, manager):
        manager.add("Buy Milk")
        manager.complete("Buy Milk")
        assert "✅ Buy Milk" in manager.format()

    def test_completed_sorted_last_with_stable_order(self, manager):
        for title in ("one", "two", "three", "four"):
            manager.add(title)
        manager.complete("one")
        manager.complete("three")
        lines = manager.format().splitlines()[2:]
        assert lines == ["⬜ two", "⬜ four", "✅ one", "✅ three"]

    def test_format_does_not_reorder_storage(self, manager):
        manager.add("one")
        manager.add("two")
        manager.complete("one")
        manager.format()
        assert [t["title"] for t in _stored(manager)["todos"]] == ["one", "two"]


class TestAdd:
    def test_adds_item(self, manager):
        res = manager.add("Buy Milk")
        assert res.startswith("Added: Buy Milk")
        assert "⬜ Buy Milk" in res
        assert manager.get()[0].title == "Buy Milk"
        assert manager.get()[0].completed is False

    def test_trims_title(self, manager):
        manager.add("   Buy Milk  ")
        assert manager.get()[0].title == "Buy Milk"

    def test_rejects_empty_title(self, manager):
        assert manager.add("   ") == "Error: Task title is empty."
        assert manager.get() == []

    def test_ids_increase(self, manager):
        for title in ("a", "b", "c"):
            manager.add(title)
        assert [t.id for t in manager.get()] == [1, 2, 3]

    def test_distinct_titles_counted_case_insensitively(self, manager):
        for title in ("Milk", "milk", "Eggs", "EGGS", "bread"):
            manager.add(title)
        assert [t.title for t in manager.get()] == ["Milk", "Eggs", "bread"]

    def test_duplicate_open_is_rejected(self, manager):
        manager.add("Buy Milk")
        res = manager.add("buy milk")
        assert "already" in res
        assert 'Item already "buy milk" exists.' in res
        assert len(manager.get()) == 1
        assert manager.get()[0].title == "Buy Milk"

    def test_completed_duplicate_is_reactivated(self, manager):
        manager.add("Buy Milk")
        manager.complete("Buy Milk")
        res = manager.add("Buy Milk")
        assert "activated it again" in res
        todos = manager.get()
        assert len(todos) == 1
        assert todos[0].completed is False
        assert todos[0].id == 1

    def test_next_id_is_never_reused(self, manager):
        manager.add("a")
        manager.add("b")
        manager.complete("a")
        manager.add("c")
        assert [t.id for t in manager.get()] == [1, 2, 3]

    def test_next_id_follows_max_existing(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(
            json.dumps({"todos": [{"id": 7, "title": "x", "completed": False}], "conversation": []}),
            encoding="utf-8",
        )
        manager = TodoManager(state_path=path)
        manager.add("y")
        assert [t.id for t in manager.get()] == [7, 8]


class TestComplete:
    def test_marks_complete(self, manager):
        manager.add("Buy Milk")
        res = manager.complete("Buy Milk")
        assert res.startswith("Completed: Buy Milk")
        assert manager.get()[0].completed is True

    def test_fuzzy_partial_name(self, manager):
        manager.add("haircut at 10am")
        res = manager.complete("haircut")
        assert "Completed: haircut at 10am" in res
        assert manager.get()[0].completed is True

    def test_by_id(self, manager):
        manager.add("a")
        manager.add("b")
        manager.complete(2)
        assert [t.completed for t in manager.get()] == [False, True]

    def test_accepts_tagged_refs(self, manager):
        manager.add("a")
        manager.add("b")
        manager.complete(ById(1))
        manager.complete(ByTitle("B"))
        assert all(t.completed for t in manager.get())

    def test_not_found(self, manager):
        manager.add("Buy Milk")
        before = _stored(manager)
        assert manager.complete("xyz") == "Error: Task not found."
        assert manager.get()[0].completed is False
        assert _stored(manager) == before

    def test_unknown_id(self, manager):
        manager.add("Buy Milk")
        assert manager.complete(42) == "Error: Task not found."

    def test_blank_reference_completes_nothing(self, manager):
        manager.add("Buy Milk")
        assert manager.complete("") == "Error: Task not found."
        assert manager.complete("   ") == "Error: Task not found."
        assert manager.get()[0].completed is False

    def test_multiple_matches(self, manager):
        manager.add("Buy Milk")
        manager.add("Buy groceries")
        res = manager.complete("Buy")
        assert "Multiple matches" in res
        assert "Buy Milk" in res
        assert "Buy groceries" in res
        assert not any(t.completed for t in manager.get())

    def test_completing_twice_is_allowed(self, manager):
        manager.add("Buy Milk")
        manager.complete("Buy Milk")
        assert manager.complete("Buy Milk").startswith("Completed: Buy Milk")


class TestStateConsistency:
    def test_conversation_is_preserved(self, tmp_path):
        path = tmp_path / "state.json"
        convo = [{"role": "user", "content": "hello"}]
        path.write_text(json.dumps({"todos": [], "conversation": convo}), encoding="utf-8")
        manager = TodoManager(state_path=path)

        manager.add("a")
        manager.complete("a")

        assert _stored(manager)["conversation"] == convo

    def test_sequential_calls_compose(self, manager):
        results = [manager.add(item) for item in ("rice", "cereal", "milk")]
        results += [manager.complete(item) for item in ("rice", "milk")]
        assert all(not r.startswith("Error") for r in results)
        stored = _stored(manager)["todos"]
        assert [(t["id"], t["title"], t["completed"]) for t in stored] == [
            (1, "rice", True),
            (2, "cereal", False),
            (3, "milk", True),
        ]

    def test_operations_see_external_writes(self, tmp_path):
        store = FileStateStore(tmp_path / "state.json", default_app_state())
        manager = TodoManager(store=store)
        manager.add("a")

        store.set({"todos": [{"id": 5, "title": "external", "completed": False}], "conversation": []})

        assert manager.add("b").startswith("Added: b")
        assert [t.id for t in manager.get()] == [5, 6]

    def test_survives_reload(self, tmp_path):
        path = tmp_path / "state.json"
        TodoManager(state_path=path).add("haircut at 10am")
        reloaded = TodoManager(state_path=path)
        assert reloaded.complete("haircut").startswith("Completed: haircut at 10am")

    def test_malformed_rows_are_skipped(self, tmp_path, caplog):
        store = FileStateStore(tmp_path / "state.json", default_app_state())
        store.set(
            {
                "todos": [
                    {"id": "x", "title": "broken", "completed": False},
                    "not a row",
                    {"id": 2, "title": "Buy Milk", "completed": False},
                ],
                "conversation": [],
            }
        )
        manager = TodoManager(store=store)

        with caplog.at_level("WARNING", logger="todo_assistant.todos"):
            assert manager.format() == "Here are your tasks:\n\n⬜ Buy Milk"
        assert "Skipping malformed todo row" in caplog.text
        assert manager.complete("milk").startswith("Completed: Buy Milk")


class TestMessagesIgnoreUiLanguage:
    @pytest.fixture(autouse=True)
    def russian_ui(self, monkeypatch):
        monkeypatch.setenv("TODO_ASSISTANT_LANG", "ru")
        monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)

    def test_ui_strings_are_russian(self):
        from core.desktop.devtools.interface.i18n import translate

        assert translate("CHAT_GOODBYE") == "До встречи!"

    def test_registry_messages_stay_english(self, manager):
        assert manager.format() == "Here are your tasks:\n\n(no tasks)"
        assert manager.add("haircut at 10am").startswith("Added: haircut at 10am")
        assert manager.add("haircut at 10am").startswith('warning: ⚠️  Item already "haircut at 10am" exists.')
        assert manager.complete("xyz") == "Error: Task not found."
        assert manager.complete("haircut").startswith("Completed: haircut at 10am")
        assert manager.add("  ") == "Error: Task title is empty."
