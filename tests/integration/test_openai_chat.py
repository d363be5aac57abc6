"""Live chat-completion tests against the OpenAI API.

Require OPENAI_API_KEY (and optionally OPENAI_ORG_ID) in the environment.
"""

import os

import pytest

from chat_builder import NotInitializedError, initialize, request

API_KEY = os.environ.get("OPENAI_API_KEY")

pytestmark = pytest.mark.integration


def test_request_before_initialize_raises():
    with pytest.raises(NotInitializedError):
        request("gpt-3.5-turbo")


@pytest.mark.asyncio
@pytest.mark.skipif(not API_KEY, reason="OPENAI_API_KEY not set")
async def test_chat_completion_returns_choices():
    initialize(API_KEY, os.environ.get("OPENAI_ORG_ID"))

    response = await (
        request("gpt-3.5-turbo")
        .system_prompt("You have the role of a copywriter.")
        .system_prompt("You write concisely, in a sophisticated and elegant tone of voice.")
        .user_prompt("Write a short slogan for an airline.")
        .limit_output(100)
        .go()
    )

    assert len(response.choices) > 0


@pytest.mark.asyncio
@pytest.mark.skipif(not API_KEY, reason="OPENAI_API_KEY not set")
async def test_bias_excludes_words():
    words_to_exclude = ["airline", "aeroplane", "aircraft"]
    initialize(API_KEY, os.environ.get("OPENAI_ORG_ID"))

    builder = (
        request("gpt-3.5-turbo")
        .system_prompt("You have the role of a copywriter.")
        .system_prompt("You write concisely, in a sophisticated and elegant tone of voice.")
        .user_prompt("Write a short slogan for an airline.")
        .limit_output(100)
    )
    builder.set_bias(words_to_exclude, -100)

    response = await builder.go()

    content = response.choices[0].message.content
    assert isinstance(content, str)
    for word in words_to_exclude:
        assert word not in content
