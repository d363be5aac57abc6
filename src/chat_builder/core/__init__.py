"""
Core Layer - Session gate, validation and configuration.

This package contains:
- Error hierarchy (errors.py)
- Validation primitives (validation.py)
- Configuration management (settings.py)
- Session gate (session.py)
"""

__all__ = []
