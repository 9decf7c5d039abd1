"""
Copilot session: turn one question into one WebSocket exchange with the backend.

Responsibility: Create (and cache) a backend conversation over HTTP, then open a
single WebSocket, announce client capabilities, send the message, and assemble
appendText/citation events until a terminal event. Called by the API layer;
no FastAPI here.
"""

import asyncio
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable

import httpx
import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from app.core.config import (
    CHAT_TIMEOUT,
    CONVERSATION_TIMEOUT,
    COPILOT_BASE_URL,
    COPILOT_ORIGIN,
    COPILOT_USER_AGENT,
    COPILOT_WS_URL,
    DEFAULT_MODEL,
)
from app.core.errors import (
    BackendProtocolError,
    BackendUnavailableError,
    ExchangeTimeoutError,
    InvalidModelError,
    TransportError,
)
from app.services.chat_events import EventKind, parse_event

logger = logging.getLogger(__name__)

# Public model names -> backend "mode" tokens
MODEL_MODES: dict[str, str] = {
    "default": "chat",
    "think-deeper": "reasoning",
    "gpt-5": "smart",
}

CHAT_QUERY = (
    "api-version=2&features=-,ncedge,edgepagecontext"
    "&setflight=-,ncedge,edgepagecontext&ncedge=1"
)

# Capability announcement; must precede the "send" frame or the backend may drop it
SET_OPTIONS_FRAME: dict[str, Any] = {
    "event": "setOptions",
    "supportedFeatures": ["partial-generated-images"],
    "supportedCards": [
        "weather",
        "local",
        "image",
        "sports",
        "video",
        "ads",
        "safetyHelpline",
        "quiz",
        "finance",
        "recipe",
    ],
    "ads": {
        "supportedTypes": ["text", "product", "multimedia", "tourActivity", "propertyPromotion"],
    },
}


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass
class Citation:
    """One source reference streamed by the backend."""

    title: str | None = None
    icon: str | None = None
    url: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Citation":
        return cls(
            title=_optional_str(payload.get("title")),
            icon=_optional_str(payload.get("iconUrl")),
            url=_optional_str(payload.get("url")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ChatResult:
    """Assembled answer: text fragments and citations in arrival order."""

    text: str = ""
    citations: list[Citation] = field(default_factory=list)


def resolve_mode(model: str) -> str:
    """Map a public model name to the backend mode token. Raises InvalidModelError if unknown."""
    mode = MODEL_MODES.get(model)
    if mode is None:
        raise InvalidModelError(model, list(MODEL_MODES))
    return mode


def build_send_frame(conversation_id: str, mode: str, message: str) -> dict[str, Any]:
    return {
        "event": "send",
        "mode": mode,
        "conversationId": conversation_id,
        "content": [{"type": "text", "text": message}],
        "context": {},
    }


class CopilotSession:
    """
    Holds at most one backend conversation id and runs chat exchanges against it.

    The conversation id is created lazily on the first chat and reused for every
    later chat on the same instance. It is never refreshed, so a long-lived
    instance keeps talking to a conversation the backend may have expired.
    """

    def __init__(
        self,
        base_url: str = COPILOT_BASE_URL,
        ws_url: str = COPILOT_WS_URL,
        chat_timeout: float = CHAT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        ws_connect: Callable[..., Any] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.ws_url = ws_url
        self.chat_timeout = chat_timeout
        self.headers = {"origin": COPILOT_ORIGIN, "user-agent": COPILOT_USER_AGENT}
        self.conversation_id: str | None = None
        self._transport = transport
        self._ws_connect = ws_connect or websockets.connect
        self._lock = asyncio.Lock()

    @property
    def chat_url(self) -> str:
        return f"{self.ws_url}?{CHAT_QUERY}"

    async def ensure_conversation(self) -> str:
        """Return the cached conversation id, creating one on the backend if needed."""
        if self.conversation_id:
            return self.conversation_id
        async with self._lock:
            # Another caller may have created it while we waited
            if not self.conversation_id:
                self.conversation_id = await self._create_conversation()
        return self.conversation_id

    async def _create_conversation(self) -> str:
        url = f"{self.base_url}/c/api/conversations"
        logger.info("[copilot:create_conversation] IN  url=%s", url)
        try:
            async with httpx.AsyncClient(timeout=CONVERSATION_TIMEOUT, transport=self._transport) as client:
                response = await client.post(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning("[copilot:create_conversation] request failed: %s", e)
            raise BackendUnavailableError("Failed to create a new conversation with the AI service.") from e

        if not response.is_success:
            logger.warning(
                "[copilot:create_conversation] error %s: %s", response.status_code, response.text[:200]
            )
            raise BackendUnavailableError("Failed to create a new conversation with the AI service.")
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("[copilot:create_conversation] non-JSON body: %r", response.text[:200])
            raise BackendUnavailableError("Failed to create a new conversation with the AI service.") from e

        conversation_id = data.get("id") if isinstance(data, dict) else None
        if not conversation_id or not isinstance(conversation_id, str):
            logger.warning("[copilot:create_conversation] response without id: %r", data)
            raise BackendUnavailableError("Failed to create a new conversation with the AI service.")
        logger.info("[copilot:create_conversation] OUT conversation_id=%s", conversation_id[:16])
        return conversation_id

    async def chat(self, message: str, model: str = DEFAULT_MODEL) -> ChatResult:
        """
        Send one message and wait for the full answer.

        Raises:
            BackendUnavailableError: Conversation could not be created.
            InvalidModelError: ``model`` is not in MODEL_MODES (no connection is opened).
            BackendProtocolError: Malformed frame or backend error event.
            TransportError: Connection failed or closed before a terminal event.
            ExchangeTimeoutError: No terminal event within ``chat_timeout`` seconds.
        """
        conversation_id = await self.ensure_conversation()
        mode = resolve_mode(model)
        logger.info("[copilot:chat] IN  message_len=%d model=%s mode=%s", len(message), model, mode)
        try:
            result = await asyncio.wait_for(
                self._exchange(conversation_id, mode, message), timeout=self.chat_timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning("[copilot:chat] no terminal event after %.1fs", self.chat_timeout)
            raise ExchangeTimeoutError(
                f"The AI service did not finish responding within {self.chat_timeout:g}s."
            ) from e
        logger.info(
            "[copilot:chat] OUT text_len=%d citations=%d", len(result.text), len(result.citations)
        )
        return result

    async def _exchange(self, conversation_id: str, mode: str, message: str) -> ChatResult:
        result = ChatResult()
        try:
            async with self._ws_connect(self.chat_url, additional_headers=self.headers) as ws:
                await ws.send(json.dumps(SET_OPTIONS_FRAME))
                await ws.send(json.dumps(build_send_frame(conversation_id, mode, message)))
                async for raw in ws:
                    event = parse_event(raw)
                    if event.kind is EventKind.APPEND_TEXT:
                        result.text += event.text
                    elif event.kind is EventKind.CITATION:
                        result.citations.append(Citation.from_payload(event.payload))
                    elif event.kind is EventKind.DONE:
                        await ws.close()
                        return result
                    elif event.kind is EventKind.ERROR:
                        logger.warning("[copilot:exchange] backend error event: %r", event.payload)
                        await ws.close()
                        raise BackendProtocolError(event.error_message)
                    else:
                        logger.debug("[copilot:exchange] ignoring event=%r", event.payload.get("event"))
        except ConnectionClosed as e:
            logger.warning("[copilot:exchange] connection closed: %s", e)
            raise TransportError(f"WebSocket closed unexpectedly: {e}") from e
        except (WebSocketException, OSError) as e:
            logger.warning("[copilot:exchange] websocket failed: %s", e)
            raise TransportError(f"WebSocket error: {e}") from e
        raise TransportError("WebSocket closed before the AI service finished responding.")
