"""Factory for creating transport instances from a provider name."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from chat_builder.libs.llm.base_transport import BaseTransport


TransportCreator = Callable[..., BaseTransport]


class TransportFactory:
    """Factory that resolves transport implementations by provider name."""

    _registry: dict[str, TransportCreator] = {}

    @classmethod
    def register(cls, provider: str, creator: TransportCreator) -> None:
        """Register a provider constructor.

        Args:
            provider: Provider key (e.g. "openai").
            creator: Callable accepting ``api_key``, ``organization`` and
                provider options, returning a transport.
        """

        normalized = provider.strip().lower()
        if not normalized:
            raise ValueError("Provider name cannot be empty")
        cls._registry[normalized] = creator

    @classmethod
    def create(
        cls,
        provider: str,
        api_key: str,
        organization: Optional[str] = None,
        **options: Any,
    ) -> BaseTransport:
        """Create a transport for ``provider``.

        Args:
            provider: Registered provider key.
            api_key: API key handed to the transport.
            organization: Optional organization identifier.
            **options: Provider-specific options (base_url, timeout, ...).

        Returns:
            A configured transport implementation.

        Raises:
            ValueError: If provider is missing or not registered.
        """

        if not isinstance(provider, str) or not provider.strip():
            raise ValueError("Missing required transport provider: openai.provider")

        normalized = provider.strip().lower()
        creator = cls._registry.get(normalized)
        if creator is None:
            available = ", ".join(sorted(cls._registry)) or "<none>"
            raise ValueError(
                f"Unsupported openai.provider: {normalized}. Registered providers: {available}"
            )

        return creator(api_key=api_key, organization=organization, **options)
