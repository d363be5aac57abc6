"""OpenAI Chat Completions transport.

This module submits finished requests through the official ``openai``
package using its asynchronous client.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from openai import AsyncOpenAI

from chat_builder.libs.llm.base_transport import BaseTransport
from chat_builder.observability.logger import get_logger


logger = get_logger(__name__)


class OpenAITransport(BaseTransport):
    """OpenAI provider transport.

    Attributes:
        api_key: The API key for authentication.
        organization: Optional organization identifier sent with each call.
        base_url: Optional API base URL override.
        timeout: Optional request timeout in seconds.
        max_retries: Optional retry count handed to the SDK client.

    Example:
        >>> transport = OpenAITransport(api_key="sk-...")
        >>> response = await transport.submit(
        ...     {"model": "gpt-4", "messages": [{"role": "user", "content": "hi"}]}
        ... )
    """

    def __init__(
        self,
        api_key: str,
        organization: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Create the underlying ``AsyncOpenAI`` client.

        Raises:
            openai.OpenAIError: If the SDK rejects the configuration.
        """
        self.api_key = api_key
        self.organization = organization
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries

        client_options: dict[str, Any] = {
            "api_key": api_key,
            "organization": organization,
            "base_url": base_url,
        }
        if timeout is not None:
            client_options["timeout"] = timeout
        if max_retries is not None:
            client_options["max_retries"] = max_retries

        self._client = AsyncOpenAI(**client_options)

        # Store any additional kwargs for future use
        self._extra_config = kwargs

    async def submit(self, payload: dict[str, Any]) -> Any:
        """Call ``chat.completions.create`` and return the SDK response as-is."""
        logger.info(
            "Submitting chat completion (model=%s, messages=%d, n=%s)",
            payload.get("model"),
            len(payload.get("messages", [])),
            payload.get("n", 1),
        )
        start = time.perf_counter()
        response = await self._client.chat.completions.create(**payload)
        cost_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("Chat completion finished in %sms", cost_ms)
        return response
