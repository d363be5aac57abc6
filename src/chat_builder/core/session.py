"""Client session gate.

A :class:`Session` holds validated credentials and creates one transport per
request builder. ``initialize`` stores a process-default session so that the
usual flow stays "initialize once, build many requests":

    >>> initialize("sk-...")
    >>> builder = request("gpt-4")

Passing a session explicitly avoids the default altogether:

    >>> session = Session("sk-...", organization="org-...")
    >>> builder = session.request("gpt-4")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional, Union

from chat_builder.core.errors import (
    FailedToCreateClientError,
    InvalidApiKeyError,
    InvalidParameterError,
    NotInitializedError,
)
from chat_builder.core.settings import DEFAULT_SETTINGS_PATH, Settings, load_settings
from chat_builder.libs.llm.base_transport import BaseTransport
from chat_builder.libs.llm.openai_transport import OpenAITransport
from chat_builder.libs.llm.request_builder import ChatCompletionRequestBuilder, ChatModel
from chat_builder.libs.llm.tokenizer import Tokenizer
from chat_builder.libs.llm.transport_factory import TransportFactory
from chat_builder.observability.logger import configure_logging, get_logger


logger = get_logger(__name__)

DEFAULT_PROVIDER = "openai"
API_KEY_ENV = "OPENAI_API_KEY"
ORGANIZATION_ENV = "OPENAI_ORG_ID"

# Settings keys forwarded to the transport constructor.
_TRANSPORT_OPTION_KEYS = ("base_url", "timeout", "max_retries")

TransportFactory.register(DEFAULT_PROVIDER, OpenAITransport)


@dataclass(frozen=True)
class Credentials:
    """API key and optional organization identifier."""

    api_key: str
    organization: Optional[str] = None

    def __repr__(self) -> str:
        return f"Credentials(api_key='***', organization={self.organization!r})"


class Session:
    """Validated credentials plus the options used to build transports.

    Args:
        api_key: Provider API key; must be non-empty.
        organization: Optional organization identifier.
        provider: Transport provider registered with :class:`TransportFactory`.
        tokenizer: Optional tokenizer shared by the builders of this session.
        default_model: Model used when :meth:`request` is called without one.
        **transport_options: Forwarded to the transport (base_url, timeout, ...).

    Raises:
        InvalidApiKeyError: If ``api_key`` is empty or missing.
    """

    def __init__(
        self,
        api_key: Optional[str],
        organization: Optional[str] = None,
        *,
        provider: str = DEFAULT_PROVIDER,
        tokenizer: Optional[Tokenizer] = None,
        default_model: Optional[Union[str, ChatModel]] = None,
        **transport_options: Any,
    ) -> None:
        if not api_key:
            raise InvalidApiKeyError()
        self.credentials = Credentials(api_key=api_key, organization=organization or None)
        self.provider = provider
        self.tokenizer = tokenizer
        self.default_model = default_model
        self.transport_options = transport_options

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        **kwargs: Any,
    ) -> "Session":
        """Build a session from the ``openai`` settings section.

        API key resolution: explicit > settings (openai.api_key) > env
        ``OPENAI_API_KEY``. Organization follows the same order with
        ``OPENAI_ORG_ID``.
        """
        config = settings.openai
        resolved_key = api_key or config.get("api_key") or os.environ.get(API_KEY_ENV)
        resolved_org = (
            organization or config.get("organization") or os.environ.get(ORGANIZATION_ENV)
        )
        options = {
            key: config[key] for key in _TRANSPORT_OPTION_KEYS if config.get(key) is not None
        }
        options.setdefault("default_model", config.get("default_model"))
        options.update(kwargs)
        return cls(
            resolved_key,
            resolved_org,
            provider=config.get("provider", DEFAULT_PROVIDER),
            **options,
        )

    def create_transport(self) -> BaseTransport:
        """Construct a fresh transport from the stored credentials.

        Raises:
            FailedToCreateClientError: If construction raises for any reason.
        """
        try:
            return TransportFactory.create(
                self.provider,
                api_key=self.credentials.api_key,
                organization=self.credentials.organization,
                **self.transport_options,
            )
        except Exception as exc:
            raise FailedToCreateClientError(exc) from exc

    def request(
        self, model: Optional[Union[str, ChatModel]] = None
    ) -> ChatCompletionRequestBuilder:
        """Start a new request builder for ``model``, or the session default.

        Raises:
            InvalidParameterError: If no model is given and the session has no default.
        """
        model = model or self.default_model
        if not model:
            raise InvalidParameterError(
                "model", "must be given when the session has no default model."
            )
        return ChatCompletionRequestBuilder(
            model,
            transport=self.create_transport(),
            tokenizer=self.tokenizer,
        )


_default_session: Optional[Session] = None


def initialize(api_key: Optional[str], organization: Optional[str] = None, **options: Any) -> Session:
    """Validate credentials and make them the process-default session.

    Calling it again replaces the previous session.

    Raises:
        InvalidApiKeyError: If ``api_key`` is empty or missing.
    """
    global _default_session
    session = Session(api_key, organization, **options)
    _default_session = session
    logger.info(
        "Session initialized (provider=%s, organization=%s)",
        session.provider,
        session.credentials.organization or "<none>",
    )
    return session


def get_session() -> Session:
    """Return the process-default session.

    Raises:
        NotInitializedError: If ``initialize`` has not been called.
    """
    if _default_session is None:
        raise NotInitializedError()
    return _default_session


def reset() -> None:
    """Forget the process-default session."""
    global _default_session
    _default_session = None


def request(
    model: Optional[Union[str, ChatModel]] = None, session: Optional[Session] = None
) -> ChatCompletionRequestBuilder:
    """Start a request builder on ``session`` or the process-default session.

    Raises:
        NotInitializedError: If no session is given and none was initialized.
        FailedToCreateClientError: If the transport cannot be constructed.
        InvalidParameterError: If ``model`` is not supported, or is omitted
            without a session default.
    """
    return (session or get_session()).request(model)


def initialize_from_settings(
    settings: Union[Settings, str] = DEFAULT_SETTINGS_PATH, **kwargs: Any
) -> Session:
    """Load settings, apply logging configuration and initialize the default session.

    Args:
        settings: A loaded :class:`Settings` or the path of a YAML settings file.
        **kwargs: Forwarded to :meth:`Session.from_settings` (e.g. ``api_key``).

    Raises:
        FileNotFoundError: If a settings path does not exist.
        ValueError: If the settings are invalid.
        InvalidApiKeyError: If no API key can be resolved.
    """
    global _default_session
    if isinstance(settings, str):
        settings = load_settings(settings)
    configure_logging(settings.observability)
    session = Session.from_settings(settings, **kwargs)
    _default_session = session
    logger.info(
        "Session initialized from settings (provider=%s, organization=%s)",
        session.provider,
        session.credentials.organization or "<none>",
    )
    return session
