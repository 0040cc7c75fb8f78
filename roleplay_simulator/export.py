"""Transcript export."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import pandas as pd

from .delivery.markers import replace_image_markers
from .models.message import ChatMessage
from .models.roles import SenderRole

COLUMNS = ("Pengirim", "Pesan", "Waktu")
TIMESTAMP_FORMAT = "%d/%m/%Y %H.%M.%S"


def sender_label(message: ChatMessage, consumer_name: str) -> str:
    if message.sender == SenderRole.AGENT:
        return "Agent"
    if message.sender == SenderRole.SYSTEM:
        return "System"
    return consumer_name


def transcript_frame(messages: Sequence[ChatMessage], consumer_name: str) -> pd.DataFrame:
    """One row per message: sender label, text with image markers replaced, timestamp."""
    rows = [
        (sender_label(m, consumer_name), replace_image_markers(m.text), m.timestamp.strftime(TIMESTAMP_FORMAT))
        for m in messages
    ]
    return pd.DataFrame(rows, columns=list(COLUMNS))


def export_transcript(messages: Sequence[ChatMessage], consumer_name: str, path: str | Path | None = None) -> str:
    """Serialize a message log to CSV.

    Fields are comma separated and embedded double quotes are doubled.

    Args:
        messages: Message log to export
        consumer_name: Label used for consumer bubbles
        path: Where to write the CSV; when None only the text is returned

    Returns:
        The CSV text
    """
    csv_text = transcript_frame(messages, consumer_name).to_csv(index=False, lineterminator="\n")
    if path is not None:
        Path(path).write_text(csv_text, encoding="utf-8")
    return csv_text


def transcript_filename(consumer_name: str, exported_at: datetime) -> str:
    return f"chat_history_{consumer_name.replace(' ', '_')}_{exported_at.strftime('%Y%m%dT%H%M%S')}.csv"
