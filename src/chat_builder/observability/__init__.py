"""
Observability Layer - Logging.

This package contains observability components:
- Human-readable and JSON Lines logging
"""

__all__ = []
