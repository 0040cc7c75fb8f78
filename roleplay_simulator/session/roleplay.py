"""One roleplay run, from configuration to the end of the chat."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from ..backend.base import DialogueBackend
from ..defaults import CONNECTED_NOTICE
from ..delivery.markers import RenderSegment
from ..delivery.pipeline import DeliveryListener, DeliveryPipeline, DeliveryTimings
from ..export import export_transcript, transcript_filename
from ..models.message import ChatMessage
from ..models.session import SessionConfig
from ..models.settings import AppSettings
from ..prompts.instruction import Instruction, InstructionBuilder
from .resolver import RandomSource, SessionResolver

logger = logging.getLogger(__name__)


class RoleplaySession:
    """A live roleplay session.

    Use ``RoleplaySession.start`` to create one. Each session owns its
    configuration snapshot and its delivery pipeline; ending it cancels every
    pending timer and any reply still being revealed.
    """

    def __init__(
        self,
        config: SessionConfig,
        instruction: Instruction,
        backend: DialogueBackend,
        pipeline: DeliveryPipeline,
    ) -> None:
        self.config = config
        self.instruction = instruction
        self.backend = backend
        self.pipeline = pipeline
        self.started_at = datetime.now()

    @classmethod
    async def start(
        cls,
        settings: AppSettings,
        backend: DialogueBackend,
        rng: RandomSource | None = None,
        timings: DeliveryTimings | None = None,
        listener: DeliveryListener | None = None,
    ) -> RoleplaySession:
        """Resolve a configuration, initialize the backend and open the chat.

        Raises:
            NoActiveScenariosError: No scenario is active
            NoPersonaTypesError: No persona type is defined
            MissingCredentialError: The backend cannot be initialized
        """
        resolver = SessionResolver(rng) if rng is not None else SessionResolver()
        config = resolver.resolve(settings)
        instruction = InstructionBuilder().build(config)
        handle = await backend.initialize_session(instruction.text)

        pipeline = DeliveryPipeline(
            backend=backend,
            handle=handle,
            images=instruction.images,
            timings=timings,
            listener=listener,
        )
        session = cls(config, instruction, backend, pipeline)
        identity = config.identity
        pipeline.post_system_notice(CONNECTED_NOTICE.format(name=identity.name, phone=identity.phone, city=identity.city))
        logger.info(f"Started roleplay session {handle.id} with {len(config.scenarios)} scenario(s)")
        return session

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self.pipeline.messages

    @property
    def is_active(self) -> bool:
        return not self.pipeline.is_closed

    async def send(self, text: str) -> ChatMessage | None:
        """Send the agent's message and wait until the reply has been delivered."""
        return await self.pipeline.send(text)

    def render(self, message: ChatMessage) -> tuple[RenderSegment, ...]:
        return self.pipeline.render(message)

    async def end(self) -> None:
        """End the roleplay. Safe to call more than once."""
        if self.pipeline.is_closed:
            return
        self.pipeline.close()
        await self.backend.close_session(self.pipeline.handle)
        logger.info(f"Ended roleplay session {self.pipeline.handle.id}")

    def transcript_path(self, directory: str | Path) -> Path:
        """Path of a new transcript file in ``directory``, named after the consumer and the current time."""
        return Path(directory) / transcript_filename(self.config.identity.name, datetime.now())

    def export_transcript(self, path: str | Path | None = None) -> str:
        """Export the message log as CSV; a directory path gets a generated file name."""
        if path is not None and Path(path).is_dir():
            path = self.transcript_path(path)
        return export_transcript(self.messages, self.config.identity.name, path)
