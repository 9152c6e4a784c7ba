from typing import Any, Dict, Protocol


class StateStore(Protocol):
    def load(self) -> Dict[str, Any]:
        ...

    def get(self) -> Dict[str, Any]:
        ...

    def set(self, new_state: Dict[str, Any]) -> None:
        ...

    def update(self, partial: Dict[str, Any]) -> None:
        ...
