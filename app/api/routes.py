"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.api.handlers import handle_ai_query
from app.schemas.query import AIRequest, AIResponse, ErrorResponse
from app.services.copilot_client import CopilotSession

logger = logging.getLogger(__name__)
router = APIRouter()

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


def get_copilot_session() -> CopilotSession:
    """One session per request, so requests never share a conversation id."""
    return CopilotSession()


# --- System ---

@router.get("/", tags=["system"], include_in_schema=False)
def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html")


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- AI ---

@router.post(
    "/api/ai",
    response_model=AIResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["ai"],
    summary="Ask the AI backend",
    description="Send a query (optionally with persona `customModel`, `language` and `model`); receive the assembled answer, citations and metadata. 400 on invalid input or unknown model, 500 on backend failure.",
)
async def post_ai(body: AIRequest, session: CopilotSession = Depends(get_copilot_session)):
    return await handle_ai_query(body, session)
