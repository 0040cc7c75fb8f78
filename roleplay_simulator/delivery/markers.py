"""Inline markers in backend replies and how they are interpreted.

``[BREAK]`` separates chat bubbles, a leading ``[SISTEM]`` turns a bubble into
a system notice, and ``[SEND_IMAGE: n]`` places image ``n`` of the session's
flattened image sequence inline.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

import attrs

from ..models.roles import SenderRole

BREAK_MARKER = "[BREAK]"
SYSTEM_MARKER = "[SISTEM]"
IMAGE_TAG = "SEND_IMAGE"
IMAGE_PLACEHOLDER = "[IMAGE SENT]"

_BREAK_PATTERN = re.compile(re.escape(BREAK_MARKER), re.IGNORECASE)
_IMAGE_PATTERN = re.compile(rf"\[{IMAGE_TAG}:\s*(\d+)\]")


@attrs.frozen
class Segment:
    """One reply segment, destined to become exactly one bubble."""

    text: str
    sender: SenderRole

    @property
    def is_system(self) -> bool:
        return self.sender == SenderRole.SYSTEM


@attrs.frozen
class TextSegment:
    text: str


@attrs.frozen
class ImageSegment:
    index: int
    source: str


type RenderSegment = TextSegment | ImageSegment


def format_image_marker(index: int) -> str:
    return f"[{IMAGE_TAG}: {index}]"


def split_response(text: str) -> tuple[Segment, ...]:
    """Split a backend reply into bubble segments.

    Parts are trimmed and blank parts dropped. A part starting with the system
    marker loses the marker and becomes a system segment.
    """
    segments = []
    for part in _BREAK_PATTERN.split(text):
        part = part.strip()
        if part.startswith(SYSTEM_MARKER):
            part = part.removeprefix(SYSTEM_MARKER).strip()
            sender = SenderRole.SYSTEM
        else:
            sender = SenderRole.CONSUMER
        if part:
            segments.append(Segment(text=part, sender=sender))
    return tuple(segments)


def render_segments(text: str, images: Sequence[str]) -> tuple[RenderSegment, ...]:
    """Split bubble text into ordered text and image segments.

    Image markers whose index has no image are dropped silently; a malformed
    reply must not break the conversation.
    """
    segments: list[RenderSegment] = []
    position = 0
    for match in _IMAGE_PATTERN.finditer(text):
        if match.start() > position:
            segments.append(TextSegment(text[position:match.start()]))
        index = int(match.group(1))
        if index < len(images):
            segments.append(ImageSegment(index=index, source=images[index]))
        position = match.end()
    if position < len(text):
        segments.append(TextSegment(text[position:]))
    return tuple(segments)


def replace_image_markers(text: str, placeholder: str = IMAGE_PLACEHOLDER) -> str:
    return _IMAGE_PATTERN.sub(placeholder, text)
