"""
Copilot stream events: parse one WebSocket frame into a tagged event.

The backend sends one JSON object per frame with an ``event`` discriminator.
Known kinds get their own EventKind; anything else maps to UNKNOWN and is
ignored by the consumer.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.core.errors import BackendProtocolError

GENERIC_ERROR_MESSAGE = "An unknown error occurred during the AI chat."


class EventKind(str, Enum):
    APPEND_TEXT = "appendText"
    CITATION = "citation"
    DONE = "done"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass
class ChatEvent:
    """One decoded frame. ``payload`` is the raw JSON object."""

    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        value = self.payload.get("text")
        return str(value) if value else ""

    @property
    def error_message(self) -> str:
        value = self.payload.get("message")
        return str(value) if value else GENERIC_ERROR_MESSAGE


def parse_event(raw: str | bytes) -> ChatEvent:
    """
    Decode a raw frame into a ChatEvent.

    Raises:
        BackendProtocolError: If the frame is not a JSON object.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise BackendProtocolError("Failed to process message from AI service.") from e
    if not isinstance(data, dict):
        raise BackendProtocolError("Failed to process message from AI service.")
    tag = data.get("event")
    try:
        kind = EventKind(tag)
    except ValueError:
        kind = EventKind.UNKNOWN
    return ChatEvent(kind=kind, payload=data)
