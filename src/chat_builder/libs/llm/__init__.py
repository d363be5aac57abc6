"""
LLM Module.

This package contains the chat-completion request builder and the
collaborators it talks to:
- Request builder and request object
- Messages and function definitions
- Base transport, OpenAI transport and transport factory
- Tokenizer used for logit bias
"""

from chat_builder.libs.llm.base_transport import BaseTransport
from chat_builder.libs.llm.functions import FunctionDefinition, FunctionRegistry
from chat_builder.libs.llm.messages import FunctionCall, Message, Role
from chat_builder.libs.llm.openai_transport import OpenAITransport
from chat_builder.libs.llm.request_builder import (
    BuilderState,
    ChatCompletionRequest,
    ChatCompletionRequestBuilder,
    ChatModel,
    FunctionCallPolicy,
)
from chat_builder.libs.llm.tokenizer import TiktokenTokenizer, Tokenizer
from chat_builder.libs.llm.transport_factory import TransportFactory

__all__ = [
    # Builder
    "BuilderState",
    "ChatCompletionRequest",
    "ChatCompletionRequestBuilder",
    "ChatModel",
    "FunctionCallPolicy",
    # Data types
    "FunctionCall",
    "FunctionDefinition",
    "FunctionRegistry",
    "Message",
    "Role",
    # Transports
    "BaseTransport",
    "OpenAITransport",
    "TransportFactory",
    # Tokenizer
    "TiktokenTokenizer",
    "Tokenizer",
]
