"""Message delivery pipeline.

Owns the visible message log of one session. Agent messages go out with a
``sent`` status that two timers advance to ``delivered`` and ``read``. Backend
replies are split into bubbles and revealed one by one with a typing delay, so
the consumer reads like a person typing several short messages.
"""

from __future__ import annotations

import abc
import asyncio
import itertools
import logging
from collections.abc import Sequence
from datetime import datetime

import attrs

from ..backend.base import DialogueBackend, SessionHandle
from ..errors import BackendError, BackendErrorKind, describe_backend_error
from ..models.message import ChatMessage, MessageStatus
from ..models.roles import SenderRole
from .markers import RenderSegment, Segment, render_segments, split_response
from .scheduler import KeyedTaskScheduler, Sleep

logger = logging.getLogger(__name__)


@attrs.frozen
class DeliveryTimings:
    """Pacing of status ticks and bubble reveals, in seconds."""

    delivered_after: float = 1.0
    read_after: float = attrs.field(default=2.0)
    typing_per_char: float = 0.03
    min_typing: float = 1.0
    max_typing: float = 3.0
    inter_bubble_pause: float = 0.5

    @read_after.validator
    def _check_read_after(self, attribute: attrs.Attribute, value: float) -> None:
        # Read must land after delivered, or the delivered tick is lost.
        if value <= self.delivered_after:
            raise ValueError(f"read_after ({value}) must be greater than delivered_after ({self.delivered_after})")

    def typing_delay(self, text: str) -> float:
        """Simulated typing time for a bubble, proportional to its length and clamped."""
        return min(max(len(text) * self.typing_per_char, self.min_typing), self.max_typing)


class DeliveryListener(abc.ABC):
    """Receives pipeline events, typically to refresh a chat view."""

    @abc.abstractmethod
    def on_message_added(self, message: ChatMessage) -> None:
        """Called when a bubble is appended to the log."""
        ...

    @abc.abstractmethod
    def on_status_changed(self, message: ChatMessage) -> None:
        """Called when an agent message's status moves forward."""
        ...

    @abc.abstractmethod
    def on_typing_changed(self, typing: bool) -> None:
        """Called when the consumer's typing indicator turns on or off."""
        ...


class NullDeliveryListener(DeliveryListener):
    def on_message_added(self, message: ChatMessage) -> None:
        pass

    def on_status_changed(self, message: ChatMessage) -> None:
        pass

    def on_typing_changed(self, typing: bool) -> None:
        pass


class DeliveryPipeline:
    """Message log and delivery behaviour for one session.

    A closed pipeline is inert: pending status timers and an in-flight reply
    are cancelled, and nothing is appended to the log afterwards.

    Args:
        backend: Dialogue backend playing the consumer
        handle: Backend session to talk to
        images: The session's flattened image sequence, for rendering
        timings: Status and reveal pacing
        listener: Receives log, status and typing events
        sleep: Awaitable delay function; injectable for tests
    """

    def __init__(
        self,
        backend: DialogueBackend,
        handle: SessionHandle,
        images: Sequence[str] = (),
        timings: DeliveryTimings | None = None,
        listener: DeliveryListener | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.backend = backend
        self.handle = handle
        self.images = tuple(images)
        self.timings = timings or DeliveryTimings()
        self.listener = listener or NullDeliveryListener()
        self._sleep = sleep
        self._timers = KeyedTaskScheduler(sleep)
        self._messages: list[ChatMessage] = []
        self._ids = itertools.count(1)
        self._turns: set[asyncio.Task] = set()
        self._typing = False
        self._closed = False

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def typing(self) -> bool:
        """Whether the consumer's typing indicator is lit."""
        return self._typing

    @property
    def is_busy(self) -> bool:
        """A reply is still being fetched or revealed; hosts should hold back new sends."""
        return any(not turn.done() for turn in self._turns)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def get_message(self, message_id: str) -> ChatMessage | None:
        return next((m for m in self._messages if m.id == message_id), None)

    def post_system_notice(self, text: str) -> ChatMessage | None:
        return self._append(SenderRole.SYSTEM, text)

    async def send(self, text: str) -> ChatMessage | None:
        """Send an agent message and deliver the consumer's reply.

        Returns once every reply bubble has been revealed, or immediately if
        the pipeline is closed meanwhile.

        Returns:
            The agent message, or None if the text is blank or the pipeline is closed
        """
        if self._closed or not text.strip():
            return None
        message = self._append(SenderRole.AGENT, text, status=MessageStatus.SENT)
        if message is None:
            return None
        self._arm_status_timers(message)

        turn = asyncio.create_task(self._exchange(text), name=f"turn-{message.id}")
        self._turns.add(turn)
        turn.add_done_callback(self._turns.discard)
        try:
            await turn
        except asyncio.CancelledError:
            # close() cancels the turn; only our own cancellation propagates
            if not (turn.cancelled() and self._closed):
                raise
        return message

    def remove_message(self, message_id: str) -> bool:
        """Drop a message from the log and cancel its pending status timers."""
        message = self.get_message(message_id)
        if message is None:
            return False
        self._timers.cancel(message_id)
        self._messages.remove(message)
        return True

    def close(self) -> None:
        """Tear down: cancel pending timers and the in-flight reply."""
        if self._closed:
            return
        self._closed = True
        self._timers.cancel_all()
        for turn in list(self._turns):
            turn.cancel()
        self._set_typing(False)
        logger.debug(f"Delivery pipeline for session {self.handle.id} closed")

    def render(self, message: ChatMessage) -> tuple[RenderSegment, ...]:
        """Text and image segments of a bubble, resolved against the session images."""
        return render_segments(message.text, self.images)

    def _arm_status_timers(self, message: ChatMessage) -> None:
        self._timers.schedule(
            message.id, self.timings.delivered_after, lambda: self._advance_status(message.id, MessageStatus.DELIVERED)
        )
        self._timers.schedule(
            message.id, self.timings.read_after, lambda: self._advance_status(message.id, MessageStatus.READ)
        )

    def _advance_status(self, message_id: str, status: MessageStatus) -> None:
        if self._closed:
            return
        message = self.get_message(message_id)
        if message is None:
            return
        if message.advance_status(status):
            logger.debug(f"Message {message_id} is now {status.value}")
            self.listener.on_status_changed(message)

    async def _exchange(self, text: str) -> None:
        self._set_typing(True)
        try:
            reply = await self._fetch_reply(text)
            if reply is not None:
                await self._reveal(split_response(reply))
        finally:
            self._set_typing(False)

    async def _fetch_reply(self, text: str) -> str | None:
        """The backend's reply, or None after posting a system notice for a failure."""
        try:
            return await self.backend.send_message(self.handle, text)
        except BackendError as e:
            logger.warning(f"Backend failed for session {self.handle.id}: {e}")
            kind = e.kind
        except Exception:
            logger.exception(f"Unexpected failure talking to the backend for session {self.handle.id}")
            kind = BackendErrorKind.UNKNOWN
        self._append(SenderRole.SYSTEM, describe_backend_error(kind))
        return None

    async def _reveal(self, segments: tuple[Segment, ...]) -> None:
        for i, segment in enumerate(segments):
            if self._closed:
                return
            if not segment.is_system:
                self._set_typing(True)
                await self._sleep(self.timings.typing_delay(segment.text))
            if self._append(segment.sender, segment.text) is None:
                return
            self._set_typing(False)
            if i < len(segments) - 1 and not segment.is_system:
                await self._sleep(self.timings.inter_bubble_pause)

    def _append(self, sender: SenderRole, text: str, status: MessageStatus | None = None) -> ChatMessage | None:
        if self._closed:
            return None
        message = ChatMessage(
            id=f"{self.handle.id}-{next(self._ids)}",
            sender=sender,
            text=text,
            timestamp=datetime.now(),
            status=status,
        )
        self._messages.append(message)
        logger.debug(f"Added {message}")
        self.listener.on_message_added(message)
        return message

    def _set_typing(self, typing: bool) -> None:
        if self._typing != typing:
            self._typing = typing
            self.listener.on_typing_changed(typing)
