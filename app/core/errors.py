"""
Application errors for clean API error handling.

Services raise these; the API layer maps each kind to an HTTP status and a
machine-readable ``code`` so callers can tell a bad request from a backend outage.
"""


class ChatServiceError(Exception):
    """Base class for every failure of a chat request."""

    code: str = "internal_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(ChatServiceError):
    """Raised when the client input is unusable (e.g. missing or blank query). No backend contact."""

    code = "invalid_request"


class InvalidModelError(ChatServiceError):
    """Raised when the model selector is not one of the known names."""

    code = "invalid_model"

    def __init__(self, model: str, available: list[str]) -> None:
        self.model = model
        self.available = available
        super().__init__(f"Available models: {', '.join(available)}")


class BackendUnavailableError(ChatServiceError):
    """Raised when a conversation cannot be created on the backend."""

    code = "backend_unavailable"


class BackendProtocolError(ChatServiceError):
    """Raised on a malformed frame or an explicit error event from the backend."""

    code = "backend_protocol_error"


class TransportError(ChatServiceError):
    """Raised when the WebSocket connection fails or closes before a terminal event."""

    code = "transport_error"


class ExchangeTimeoutError(TransportError):
    """Raised when the backend does not reach a terminal event before the deadline."""

    code = "timeout"
