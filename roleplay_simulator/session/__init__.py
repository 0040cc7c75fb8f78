"""Session resolution and orchestration."""

from .resolver import RandomSource, SessionResolver, resolve_session
from .roleplay import RoleplaySession

__all__ = [
    "RandomSource",
    "SessionResolver",
    "resolve_session",
    "RoleplaySession",
]
