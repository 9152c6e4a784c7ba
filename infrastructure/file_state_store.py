import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict

from application.ports import StateStore


logger = logging.getLogger("todo_assistant.state")


class FileStateStore(StateStore):
    """Single JSON document on disk, mirrored in memory, written through on every change."""

    def __init__(self, path: Path | str, default_state: Dict[str, Any]):
        self.path = Path(path).expanduser().resolve()
        self.default_state = copy.deepcopy(default_state)
        self.state: Dict[str, Any] = self.load()

    def load(self) -> Dict[str, Any]:
        """Read the document; fall back to (and persist) the default state."""
        try:
            if self.path.exists():
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
                logger.warning("State file %s is not a JSON object. Using default.", self.path)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read state from %s: %s. Using default.", self.path, exc)

        state = copy.deepcopy(self.default_state)
        self._save(state)
        return state

    def _save(self, state: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(state, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self) -> Dict[str, Any]:
        return self.state

    def set(self, new_state: Dict[str, Any]) -> None:
        self.state = new_state
        self._save(self.state)

    def update(self, partial: Dict[str, Any]) -> None:
        self.state = {**self.state, **partial}
        self._save(self.state)
