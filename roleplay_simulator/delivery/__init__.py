"""Message delivery: reply splitting, pacing and delivery statuses."""

from .markers import (
    BREAK_MARKER,
    IMAGE_PLACEHOLDER,
    SYSTEM_MARKER,
    ImageSegment,
    Segment,
    TextSegment,
    format_image_marker,
    render_segments,
    replace_image_markers,
    split_response,
)
from .pipeline import DeliveryListener, DeliveryPipeline, DeliveryTimings, NullDeliveryListener
from .scheduler import KeyedTaskScheduler

__all__ = [
    "BREAK_MARKER",
    "IMAGE_PLACEHOLDER",
    "SYSTEM_MARKER",
    "ImageSegment",
    "Segment",
    "TextSegment",
    "format_image_marker",
    "render_segments",
    "replace_image_markers",
    "split_response",
    "DeliveryListener",
    "DeliveryPipeline",
    "DeliveryTimings",
    "NullDeliveryListener",
    "KeyedTaskScheduler",
]
