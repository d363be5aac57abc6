"""Chat message types appended by the request builder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Role(str, Enum):
    """Author of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"


@dataclass(frozen=True)
class FunctionCall:
    """Assistant directive to call a registered function.

    Attributes:
        name: Registered function name.
        arguments: Arguments serialized as text (usually JSON).
    """

    name: str
    arguments: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "arguments": self.arguments}


@dataclass(frozen=True)
class Message:
    """One entry of the conversation.

    Assistant messages carry either ``content`` or ``function_call``;
    function messages carry the ``name`` of the function they answer.
    """

    role: Role
    content: Optional[str] = None
    name: Optional[str] = None
    function_call: Optional[FunctionCall] = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)

    @classmethod
    def assistant_function_call(cls, name: str, arguments: str) -> "Message":
        return cls(role=Role.ASSISTANT, function_call=FunctionCall(name, arguments))

    @classmethod
    def function(cls, name: str, content: str) -> "Message":
        return cls(role=Role.FUNCTION, name=name, content=content)

    def to_dict(self) -> Dict[str, Any]:
        """Return the Chat Completions wire representation."""
        payload: Dict[str, Any] = {"role": self.role.value}
        if self.function_call is not None:
            payload["content"] = None
            payload["function_call"] = self.function_call.to_dict()
            return payload
        payload["content"] = self.content
        if self.name is not None:
            payload["name"] = self.name
        return payload
