"""Dialogue backend interface.

The backend is the generative service that speaks for the consumer. The
library only relies on this shape; transport, authentication and model
choice belong to the implementation.
"""

from __future__ import annotations

import abc
import uuid

import attrs


@attrs.frozen
class SessionHandle:
    """Opaque reference to a backend chat session."""

    id: str = attrs.field(factory=lambda: uuid.uuid4().hex)


class DialogueBackend(abc.ABC):
    """Generative backend that plays the consumer."""

    @abc.abstractmethod
    async def initialize_session(self, instruction: str) -> SessionHandle:
        """Open a chat session driven by the given system instruction.

        Raises:
            MissingCredentialError: The backend has no credential to work with
        """
        ...

    @abc.abstractmethod
    async def send_message(self, handle: SessionHandle, text: str) -> str:
        """Send the agent's message and return the consumer's full reply.

        The reply may contain break, system and image markers.

        Raises:
            BackendError: The exchange failed; ``kind`` classifies the failure
        """
        ...

    async def close_session(self, handle: SessionHandle) -> None:
        """Release any state kept for the session. Optional."""
        return None
