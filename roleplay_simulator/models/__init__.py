"""Models package for roleplay sessions."""

from .roles import SenderRole
from .persona import Difficulty, PersonaType
from .scenario import RANDOM_PERSONA, Identity, Scenario
from .message import ChatMessage, MessageStatus
from .settings import AppSettings, IdentitySettings
from .session import SessionConfig

__all__ = [
    "SenderRole",
    "Difficulty",
    "PersonaType",
    "RANDOM_PERSONA",
    "Identity",
    "Scenario",
    "ChatMessage",
    "MessageStatus",
    "AppSettings",
    "IdentitySettings",
    "SessionConfig",
]
