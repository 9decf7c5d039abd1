"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# HTTP server
HOST: str = os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0"
PORT: int = int(os.getenv("PORT", "3000").strip() or "3000")

# Copilot backend (conversation creation over HTTP, chat over WebSocket)
COPILOT_BASE_URL: str = (
    os.getenv("COPILOT_BASE_URL", "https://copilot.microsoft.com").strip().rstrip("/")
    or "https://copilot.microsoft.com"
)
COPILOT_WS_URL: str = (
    os.getenv("COPILOT_WS_URL", "wss://copilot.microsoft.com/c/api/chat").strip()
    or "wss://copilot.microsoft.com/c/api/chat"
)
# The backend rejects requests without a browser-like origin and user agent
COPILOT_ORIGIN: str = "https://copilot.microsoft.com"
COPILOT_USER_AGENT: str = (
    os.getenv(
        "COPILOT_USER_AGENT",
        "Mozilla/5.0 (Linux; Android 15; SM-F958 Build/AP3A.240905.015) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/130.0.6723.86 Mobile Safari/537.36",
    ).strip()
)

# Timeouts (seconds)
CONVERSATION_TIMEOUT: float = float(os.getenv("CONVERSATION_TIMEOUT", "15").strip() or "15")
CHAT_TIMEOUT: float = float(os.getenv("CHAT_TIMEOUT", "120").strip() or "120")

# Prompting
DEFAULT_LANGUAGE: str = "Bahasa Indonesia"
DEFAULT_MODEL: str = "default"

# Streamlit UI -> API
API_BASE: str = os.getenv("API_BASE", f"http://localhost:{PORT}").strip()
