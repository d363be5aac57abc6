"""
Libs Layer - Pluggable abstraction layer.

This package contains the request builder and its collaborators:
- Transports (with a provider factory)
- Tokenizer
"""

__all__ = []
