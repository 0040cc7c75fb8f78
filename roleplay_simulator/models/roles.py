"""Sender roles for chat bubbles."""

from __future__ import annotations

from enum import Enum


class SenderRole(str, Enum):
    """Who authored a chat bubble."""

    AGENT = "agent"
    CONSUMER = "consumer"
    SYSTEM = "system"
