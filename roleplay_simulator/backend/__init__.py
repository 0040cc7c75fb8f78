"""Dialogue backends."""

from .base import DialogueBackend, SessionHandle
from .chat_model import ChatModelBackend, classify_exception

__all__ = ["DialogueBackend", "SessionHandle", "ChatModelBackend", "classify_exception"]
