"""Tokenizer collaborator used to expand bias terms into token ids.

The byte-pair encoding itself comes from ``tiktoken``; this module only
adapts it to the small ``encode``/``decode`` interface the builder needs.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Protocol, Sequence

import tiktoken


DEFAULT_ENCODING = "cl100k_base"


class Tokenizer(Protocol):
    """Anything that maps text to token ids and back."""

    def encode(self, text: str) -> list[int]:
        """Return the ordered token ids for ``text``."""

    def decode(self, tokens: Sequence[int]) -> str:
        """Return the text for ``tokens``."""


@lru_cache(maxsize=None)
def _encoding_for(model: Optional[str]) -> tiktoken.Encoding:
    if model:
        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            pass
    return tiktoken.get_encoding(DEFAULT_ENCODING)


class TiktokenTokenizer:
    """Tokenizer backed by the ``tiktoken`` encoding of a model.

    Models unknown to ``tiktoken`` use ``cl100k_base``.
    """

    def __init__(self, model: Optional[str] = None) -> None:
        self.model = model
        self._encoding = _encoding_for(model)

    @property
    def encoding_name(self) -> str:
        return self._encoding.name

    def encode(self, text: str) -> list[int]:
        # Special-token markers such as "<|endoftext|>" are plain text here.
        return self._encoding.encode(text, disallowed_special=())

    def decode(self, tokens: Sequence[int]) -> str:
        return self._encoding.decode(list(tokens))


def encode(text: str, model: Optional[str] = None) -> list[int]:
    """Encode ``text`` with the tokenizer of ``model`` (default ``cl100k_base``)."""
    return TiktokenTokenizer(model).encode(text)


def decode(tokens: Sequence[int], model: Optional[str] = None) -> str:
    """Decode ``tokens`` with the tokenizer of ``model`` (default ``cl100k_base``)."""
    return TiktokenTokenizer(model).decode(tokens)
