#!/usr/bin/env python3
"""
Console roleplay example.

Starts a roleplay session from the stored settings and lets you chat with the
simulated consumer in the terminal. Bubbles appear as the consumer "types"
them; agent messages show their delivery ticks.

Note on logging vs. print:
- logger.info/debug/error: Used for internal process information and debugging
- print(): Used for the chat itself

Usage:
    python examples/console_roleplay.py [settings.json]

Commands while chatting:
    /greet   insert the greeting template
    /export  write the transcript to the current directory
    /end     end the session

Requirements:
    - OpenAI API key set in environment (OPENAI_API_KEY) or a .env file
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import override

from roleplay_simulator import (
    ChatMessage,
    ChatModelBackend,
    DeliveryListener,
    RoleplaySession,
    SenderRole,
    SessionStartError,
    SettingsStore,
)
from roleplay_simulator.defaults import GREETING_TEMPLATE
from roleplay_simulator.delivery import ImageSegment

logger = logging.getLogger(__name__)

_TICKS = {"sent": "✓", "delivered": "✓✓", "read": "✓✓ (dibaca)"}


class ConsoleListener(DeliveryListener):
    """Prints bubbles and status changes as they happen."""

    def __init__(self) -> None:
        self.session: RoleplaySession | None = None

    @override
    def on_message_added(self, message: ChatMessage) -> None:
        if message.sender == SenderRole.AGENT:
            return
        label = "SISTEM" if message.sender == SenderRole.SYSTEM else "Konsumen"
        parts = []
        segments = self.session.render(message) if self.session else ()
        for segment in segments:
            if isinstance(segment, ImageSegment):
                parts.append(f"<gambar #{segment.index}>")
            else:
                parts.append(segment.text)
        print(f"  [{label}] {''.join(parts) or message.text}")

    @override
    def on_status_changed(self, message: ChatMessage) -> None:
        if message.status is not None:
            logger.debug(f"{message.text[:30]!r}: {_TICKS[message.status.value]}")

    @override
    def on_typing_changed(self, typing: bool) -> None:
        if typing:
            print("  ... sedang mengetik")


async def main() -> None:
    settings_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("roleplay_settings.json")
    settings = SettingsStore(settings_path).load()
    listener = ConsoleListener()

    try:
        session = await RoleplaySession.start(settings, ChatModelBackend.from_env(), listener=listener)
    except SessionStartError as e:
        print(f"Error: {e}")
        return
    listener.session = session
    print(f"Persona: {session.config.persona_type} | Masalah: {len(session.config.scenarios)}")

    while session.is_active:
        text = await asyncio.to_thread(input, "Agent> ")
        if text == "/end":
            await session.end()
        elif text == "/export":
            path = session.transcript_path(Path.cwd())
            session.export_transcript(path)
            print(f"Transcript saved: {path}")
        else:
            await session.send(GREETING_TEMPLATE if text == "/greet" else text)

    logger.info("Roleplay ended")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())
