"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from chat_builder.core import session as session_module
from chat_builder.libs.llm.request_builder import ChatCompletionRequestBuilder
from tests.fakes import FakeTokenizer, FakeTransport


@pytest.fixture(autouse=True)
def _reset_default_session() -> None:
    """Make every test start without a process-default session."""
    session_module.reset()
    yield
    session_module.reset()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def tokenizer() -> FakeTokenizer:
    return FakeTokenizer(
        {
            "airline": [12, 345],
            "aircraft": [345, 678],
            "plane": [9],
        }
    )


@pytest.fixture
def builder(transport: FakeTransport, tokenizer: FakeTokenizer) -> ChatCompletionRequestBuilder:
    return ChatCompletionRequestBuilder("gpt-4", transport=transport, tokenizer=tokenizer)
