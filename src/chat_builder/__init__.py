"""Chained builder for validated chat-completion requests.

Typical use::

    from chat_builder import initialize, request

    initialize("sk-...")
    response = await (
        request("gpt-3.5-turbo")
        .system_prompt("You have the role of a copywriter.")
        .user_prompt("Write a short slogan for an airline.")
        .set_bias(["airline", "aircraft"], -100)
        .limit_output(100)
        .go()
    )
"""

from chat_builder.core.errors import (
    ChatBuilderError,
    FailedToCreateClientError,
    IncorrectUseError,
    InvalidApiKeyError,
    InvalidParameterError,
    NotInitializedError,
    OpenAIFailureError,
)
from chat_builder.core.session import (
    Credentials,
    Session,
    initialize,
    initialize_from_settings,
    request,
    reset,
)
from chat_builder.core.settings import Settings, load_settings
from chat_builder.libs.llm.functions import FunctionDefinition
from chat_builder.libs.llm.request_builder import ChatCompletionRequestBuilder, ChatModel
from chat_builder.libs.llm.tokenizer import decode, encode

__version__ = "0.1.0"

__all__ = [
    "ChatBuilderError",
    "ChatCompletionRequestBuilder",
    "ChatModel",
    "Credentials",
    "FailedToCreateClientError",
    "FunctionDefinition",
    "IncorrectUseError",
    "InvalidApiKeyError",
    "InvalidParameterError",
    "NotInitializedError",
    "OpenAIFailureError",
    "Session",
    "Settings",
    "decode",
    "encode",
    "initialize",
    "initialize_from_settings",
    "load_settings",
    "request",
    "reset",
]
