"""Chat message models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

import attrs

from .roles import SenderRole


class MessageStatus(str, Enum):
    """Delivery status of an agent message, in progression order."""

    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = (MessageStatus.SENT, MessageStatus.DELIVERED, MessageStatus.READ)


@attrs.define
class ChatMessage:
    """One visible chat bubble.

    Only ``status`` ever changes after creation, and only forward.
    """

    id: str
    sender: SenderRole
    text: str
    timestamp: datetime = attrs.field(factory=datetime.now)
    status: MessageStatus | None = None

    def advance_status(self, status: MessageStatus) -> bool:
        """Move the delivery status forward.

        Returns:
            True if the status changed; False for repeats, regressions and
            messages that carry no status (consumer and system bubbles).
        """
        if self.status is None or status.rank <= self.status.rank:
            return False
        self.status = status
        return True

    def __str__(self) -> str:
        return f"[{self.sender.upper()}] {self.text}"
