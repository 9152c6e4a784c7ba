import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional

import requests


logger = logging.getLogger("todo_assistant.llm")


class LLMClientError(RuntimeError):
    pass


class LLMAuthError(LLMClientError):
    pass


class LLMRateLimitError(LLMClientError):
    pass


class ChatCompletionsClient:
    """OpenAI-compatible ``/chat/completions`` client with tool calling."""

    def __init__(
        self,
        api_base: str,
        model: str,
        key_provider: Callable[[], Optional[str]],
        session: Optional[requests.Session] = None,
        timeout: int = 60,
        max_attempts: int = 3,
    ) -> None:
        self.endpoint = f"{api_base.rstrip('/')}/chat/completions"
        self.model = model
        self.key_provider = key_provider
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts

    def complete(self, messages: List[Dict[str, Any]], tools: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """Send the conversation and return the assistant message of the first choice."""
        api_key = self.key_provider()
        if not api_key:
            raise LLMAuthError("OpenAI API key missing")
        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        body: Dict[str, Any] = {"model": self.model, "messages": messages}
        if tools:
            body["tools"] = tools
            body["tool_choice"] = "auto"
        attempt = 0
        delay = 1.0
        while True:
            attempt += 1
            try:
                response = self.session.post(self.endpoint, json=body, headers=headers, timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt >= self.max_attempts:
                    raise LLMClientError(f"LLM API network error: {exc}") from exc
                logger.warning("LLM request failed (attempt %s): %s", attempt, exc)
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code == 429:
                if attempt < self.max_attempts:
                    self._sleep(delay)
                    delay *= 2
                    continue
                raise LLMRateLimitError(f"HTTP 429 {response.text}")
            if response.status_code >= 500 and attempt < self.max_attempts:
                logger.warning("LLM API returned %s (attempt %s)", response.status_code, attempt)
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code in (401, 403):
                raise LLMAuthError(f"HTTP {response.status_code}")
            if response.status_code >= 400:
                raise LLMClientError(f"LLM API error: {response.status_code} {response.text}")
            try:
                payload = response.json()
            except ValueError as exc:
                raise LLMClientError(f"LLM API returned invalid JSON: {exc}") from exc
            choices = payload.get("choices") or []
            if not choices:
                raise LLMClientError("LLM API returned no choices")
            return choices[0].get("message") or {}

    def _sleep(self, base_delay: float) -> None:
        time.sleep(base_delay + random.uniform(0, base_delay))
