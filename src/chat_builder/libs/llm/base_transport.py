"""Base abstraction for chat-completion transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseTransport(ABC):
    """Abstract interface for clients that deliver a finished request.

    Implementations translate the builder's payload into a provider call and
    return the provider response untouched. Network, auth and server
    failures are raised, never returned.
    """

    @abstractmethod
    async def submit(self, payload: dict[str, Any]) -> Any:
        """Send one chat-completion request.

        Args:
            payload: Chat Completions request body, e.g.
                `{"model": "gpt-4", "messages": [{"role": "user", "content": "hi"}]}`.

        Returns:
            The provider's raw response object.
        """
