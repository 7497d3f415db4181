# src/auth/__init__.py
"""Session handling for journal actions."""

from .session import SessionChannel, SessionContext

__all__ = [
    "SessionChannel",
    "SessionContext",
]
