"""Test doubles for the transport and tokenizer collaborators."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from chat_builder.libs.llm.base_transport import BaseTransport


class FakeTransport(BaseTransport):
    """Transport that records payloads and returns a canned response."""

    def __init__(self, response: Any = None, error: Exception | None = None, **options: Any) -> None:
        self.response = response if response is not None else {"choices": [{"index": 0}]}
        self.error = error
        self.options = options
        self.payloads: List[Dict[str, Any]] = []

    async def submit(self, payload: Dict[str, Any]) -> Any:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.response


class FakeTokenizer:
    """Tokenizer with a fixed vocabulary of whole terms."""

    def __init__(self, vocabulary: Dict[str, List[int]]) -> None:
        self.vocabulary = vocabulary
        self.calls: List[str] = []

    def encode(self, text: str) -> list[int]:
        self.calls.append(text)
        return list(self.vocabulary[text])

    def decode(self, tokens: Sequence[int]) -> str:
        reverse = {tuple(ids): term for term, ids in self.vocabulary.items()}
        return reverse[tuple(tokens)]
