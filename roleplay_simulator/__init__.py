"""Roleplay Simulator - customer-service chat roleplay with a simulated consumer."""

# Public API exports
from .models import (
    AppSettings,
    ChatMessage,
    Difficulty,
    Identity,
    IdentitySettings,
    MessageStatus,
    PersonaType,
    Scenario,
    SenderRole,
    SessionConfig,
)
from .errors import (
    BackendError,
    BackendErrorKind,
    MissingCredentialError,
    NoActiveScenariosError,
    NoPersonaTypesError,
    RoleplayError,
    SessionStartError,
)
from .backend import ChatModelBackend, DialogueBackend, SessionHandle
from .delivery import DeliveryListener, DeliveryPipeline, DeliveryTimings
from .prompts import Instruction, InstructionBuilder
from .session import RoleplaySession, SessionResolver, resolve_session
from .store import SettingsStore

__version__ = "0.1.0"

__all__ = [
    # Models
    "AppSettings",
    "ChatMessage",
    "Difficulty",
    "Identity",
    "IdentitySettings",
    "MessageStatus",
    "PersonaType",
    "Scenario",
    "SenderRole",
    "SessionConfig",
    # Errors
    "BackendError",
    "BackendErrorKind",
    "MissingCredentialError",
    "NoActiveScenariosError",
    "NoPersonaTypesError",
    "RoleplayError",
    "SessionStartError",
    # Collaborators
    "ChatModelBackend",
    "DialogueBackend",
    "SessionHandle",
    "SettingsStore",
    # Engine
    "DeliveryListener",
    "DeliveryPipeline",
    "DeliveryTimings",
    "Instruction",
    "InstructionBuilder",
    "RoleplaySession",
    "SessionResolver",
    "resolve_session",
]
