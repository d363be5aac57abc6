"""Chat-completion request builder.

:class:`ChatCompletionRequestBuilder` accumulates one
:class:`ChatCompletionRequest` through chained calls, enforcing every
parameter rule at the moment it is set, and hands the finished request to a
transport exactly once in :meth:`ChatCompletionRequestBuilder.go`.

Example:
    >>> builder = session.request("gpt-4")
    >>> response = await (
    ...     builder.system_prompt("You write concisely.")
    ...     .user_prompt("Write a short slogan for an airline.")
    ...     .limit_output(100)
    ...     .go()
    ... )
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from chat_builder.core.errors import (
    IncorrectUseError,
    InvalidParameterError,
    OpenAIFailureError,
)
from chat_builder.core.validation import validate_range
from chat_builder.libs.llm.base_transport import BaseTransport
from chat_builder.libs.llm.functions import (
    FunctionRegistry,
    JSONSchema,
    normalize_function,
)
from chat_builder.libs.llm.messages import Message
from chat_builder.libs.llm.tokenizer import TiktokenTokenizer, Tokenizer


MAX_N_CHOICES = 100
SAMPLING_RANGE = (0, 2)
PENALTY_RANGE = (-2, 2)
BIAS_RANGE = (-100, 100)


class ChatModel(str, Enum):
    """Supported chat-completion model identifiers."""

    GPT_35_TURBO = "gpt-3.5-turbo"
    GPT_35_TURBO_16K = "gpt-3.5-turbo-16k"
    GPT_4 = "gpt-4"
    GPT_4_32K = "gpt-4-32k"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"

    @classmethod
    def parse(cls, model: Union[str, "ChatModel"]) -> "ChatModel":
        """Resolve a model identifier.

        Raises:
            InvalidParameterError: If the model is not supported.
        """
        try:
            return cls(model)
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            raise InvalidParameterError(
                "model", f"(={model!r}) is not supported, use one of: {supported}."
            ) from None


class FunctionCallPolicy(str, Enum):
    """Whether the model may answer with a function call."""

    AUTO = "auto"
    NONE = "none"


class BuilderState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FINALIZED = "finalized"


@dataclass
class ChatCompletionRequest:
    """The request object a builder accumulates.

    Attributes:
        model: Target model.
        messages: Conversation in the order it was appended.
        temperature: Sampling temperature; exclusive with ``top_p``.
        top_p: Nucleus sampling mass; exclusive with ``temperature``.
        max_tokens: Output token limit.
        presence_penalty: Presence penalty.
        frequency_penalty: Frequency penalty.
        functions: Functions the model may call.
        logit_bias: Token id to weight.
        function_call: Function-call policy.
    """

    model: ChatModel
    messages: List[Message] = field(default_factory=list)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    functions: FunctionRegistry = field(default_factory=FunctionRegistry)
    logit_bias: Dict[int, float] = field(default_factory=dict)
    function_call: FunctionCallPolicy = FunctionCallPolicy.AUTO

    def to_payload(self, n: int = 1) -> Dict[str, Any]:
        """Return the Chat Completions request body, omitting unset fields."""
        payload: Dict[str, Any] = {
            "model": self.model.value,
            "messages": [message.to_dict() for message in self.messages],
            "n": n,
        }
        optional = {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.functions:
            payload["functions"] = self.functions.to_payload()
            payload["function_call"] = self.function_call.value
        if self.logit_bias:
            payload["logit_bias"] = {str(token): weight for token, weight in self.logit_bias.items()}
        return payload


def _stringify(value: Any) -> str:
    """Return ``value`` unchanged if it is text, otherwise its JSON encoding."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class ChatCompletionRequestBuilder:
    """Chained builder for a single chat-completion request.

    Every mutator returns the builder. Violations raise immediately; after
    any raised error the builder should be discarded. :meth:`go` is the only
    coroutine and may be awaited once.
    """

    def __init__(
        self,
        model: Union[str, ChatModel],
        transport: BaseTransport,
        tokenizer: Optional[Tokenizer] = None,
    ) -> None:
        self._state = BuilderState.UNINITIALIZED
        self._request = ChatCompletionRequest(model=ChatModel.parse(model))
        self._transport = transport
        self._tokenizer = tokenizer
        self._state = BuilderState.READY

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def request(self) -> ChatCompletionRequest:
        """The request accumulated so far (read-only by convention)."""
        return self._request

    def _ensure_ready(self) -> None:
        if self._state is BuilderState.FINALIZED:
            raise IncorrectUseError("this request has already been submitted.")

    def _ensure_registered(self, function_name: str) -> None:
        if function_name not in self._request.functions:
            raise InvalidParameterError(
                "functionName",
                "must describe this function using describe_function(...) first.",
            )

    # ── sampling ────────────────────────────────────────────────────

    def tune_by_temperature(self, temperature: float) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        validate_range("temperature", temperature, *SAMPLING_RANGE)
        if self._request.top_p is not None:
            raise IncorrectUseError("cannot set 'temperature' if 'top_p' is already set.")
        self._request.temperature = temperature
        return self

    def tune_by_probability_mass(self, top_p: float) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        validate_range("topP", top_p, *SAMPLING_RANGE)
        if self._request.temperature is not None:
            raise IncorrectUseError("cannot set 'topP' if 'temperature' is already set.")
        self._request.top_p = top_p
        return self

    def limit_output(self, n_of_tokens: int) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        if isinstance(n_of_tokens, bool) or not isinstance(n_of_tokens, int):
            raise InvalidParameterError(
                "nOfTokens", f"(={n_of_tokens!r}) must be a whole number of tokens."
            )
        validate_range("nOfTokens", n_of_tokens, 0, math.inf)
        self._request.max_tokens = n_of_tokens
        return self

    def set_presence_penalty(self, presence_penalty: float) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        validate_range("presencePenalty", presence_penalty, *PENALTY_RANGE)
        self._request.presence_penalty = presence_penalty
        return self

    def set_frequency_penalty(self, frequency_penalty: float) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        validate_range("frequencyPenalty", frequency_penalty, *PENALTY_RANGE)
        self._request.frequency_penalty = frequency_penalty
        return self

    def set_bias(
        self, terms: Union[str, Iterable[str]], weight: float
    ) -> "ChatCompletionRequestBuilder":
        """Bias every token of each term by ``weight``.

        Args:
            terms: One term or several. Each is split into token ids.
            weight: Value in [-100, 100]; -100 effectively bans the tokens.

        Raises:
            InvalidParameterError: If ``weight`` is out of range.
            IncorrectUseError: If any term is empty.
        """
        self._ensure_ready()
        validate_range("weight", weight, *BIAS_RANGE)
        if isinstance(terms, str):
            terms = [terms]
        terms = list(terms)
        if any(not term for term in terms):
            raise IncorrectUseError("'term' must not be empty.")

        if self._tokenizer is None:
            self._tokenizer = TiktokenTokenizer(self._request.model.value)
        tokens = [token for term in terms for token in self._tokenizer.encode(term)]
        self._request.logit_bias.update(dict.fromkeys(tokens, weight))
        return self

    # ── messages ────────────────────────────────────────────────────

    def system_prompt(self, message: str) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        self._request.messages.append(Message.system(message))
        return self

    def user_prompt(self, message: str) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        self._request.messages.append(Message.user(message))
        return self

    def assistant_prompt(self, message: str) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        self._request.messages.append(Message.assistant(message))
        return self

    def assistant_call_function_prompt(
        self, function_name: str, function_args: Any
    ) -> "ChatCompletionRequestBuilder":
        """Append an assistant turn that calls a described function.

        Non-string arguments are JSON-encoded.

        Raises:
            InvalidParameterError: If the function was not described first.
        """
        self._ensure_ready()
        self._ensure_registered(function_name)
        self._request.messages.append(
            Message.assistant_function_call(function_name, _stringify(function_args))
        )
        return self

    def function_response_prompt(
        self, function_name: str, function_response: Any
    ) -> "ChatCompletionRequestBuilder":
        """Append the result of a described function.

        Non-string responses are JSON-encoded.

        Raises:
            InvalidParameterError: If the function was not described first.
        """
        self._ensure_ready()
        self._ensure_registered(function_name)
        self._request.messages.append(
            Message.function(function_name, _stringify(function_response))
        )
        return self

    # ── functions ───────────────────────────────────────────────────

    def describe_function(
        self,
        f: Union[Dict[str, Any], Callable[..., Any], str, Any],
        description: Optional[str] = None,
        parameters: Optional[JSONSchema] = None,
    ) -> "ChatCompletionRequestBuilder":
        """Register a function the model may call.

        Args:
            f: A ``FunctionDefinition`` or mapping (name-validated), a callable
                (its ``__name__`` is used), or a bare function name.
            description: Description for callable/name shapes.
            parameters: JSON Schema for callable/name shapes.

        Raises:
            InvalidParameterError: If a structured name is invalid or the name
                is already described.
        """
        self._ensure_ready()
        self._request.functions.add(normalize_function(f, description, parameters))
        return self

    def stop_function_calls(self) -> "ChatCompletionRequestBuilder":
        self._ensure_ready()
        self._request.function_call = FunctionCallPolicy.NONE
        return self

    # ── terminal ────────────────────────────────────────────────────

    async def go(self, n_choices: int = 1) -> Any:
        """Submit the request and return the provider response unchanged.

        Args:
            n_choices: Number of completions to generate, in [1, 100].

        Raises:
            InvalidParameterError: If ``n_choices`` is out of range.
            IncorrectUseError: If no prompt was supplied or the request was
                already submitted.
            OpenAIFailureError: If the transport call fails.
        """
        self._ensure_ready()
        validate_range("nChoices", n_choices, 1, MAX_N_CHOICES)
        if not self._request.messages:
            raise IncorrectUseError(
                "no prompts have been supplied for the large language model (LLM) to use."
            )

        payload = self._request.to_payload(n=n_choices)
        self._state = BuilderState.FINALIZED
        try:
            return await self._transport.submit(payload)
        except Exception as exc:
            raise OpenAIFailureError(exc) from exc
