"""
API handlers: validate request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi.responses import JSONResponse

from app.core.config import DEFAULT_LANGUAGE, DEFAULT_MODEL
from app.core.errors import ChatServiceError, InvalidModelError, InvalidRequestError
from app.schemas.query import AIRequest, AIResponse, CitationOut, ErrorResponse, ResponseMetadata
from app.services.copilot_client import CopilotSession
from app.services.prompt_builder import build_prompt

logger = logging.getLogger(__name__)

MISSING_QUERY_MESSAGE = "Bad Request: 'query' field is missing or empty."


def validate_query(query: object) -> str:
    """Return the query if it is a non-blank string. Raises InvalidRequestError otherwise."""
    if not isinstance(query, str) or not query.strip():
        raise InvalidRequestError(MISSING_QUERY_MESSAGE)
    return query


def error_response(exc: ChatServiceError) -> JSONResponse:
    """Map a service error to its HTTP response. Client errors are 400, everything else 500."""
    if isinstance(exc, InvalidRequestError):
        body = ErrorResponse(error=exc.message)
        status_code = 400
    elif isinstance(exc, InvalidModelError):
        body = ErrorResponse(error=exc.message, code=exc.code)
        status_code = 400
    else:
        body = ErrorResponse(error="Internal Server Error", message=exc.message, code=exc.code)
        status_code = 500
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_ai_query(body: AIRequest, session: CopilotSession) -> AIResponse | JSONResponse:
    """
    Answer one query: build the prompt, run a single chat exchange, attach metadata.
    Validation failures return before the backend is contacted.
    """
    try:
        query = validate_query(body.query)
    except InvalidRequestError as e:
        logger.info("[handlers:ai_query] rejected: %s", e.message)
        return error_response(e)

    language = (body.language or "").strip() or DEFAULT_LANGUAGE
    persona = (body.persona or "").strip() or None
    model = (body.model or "").strip() or DEFAULT_MODEL
    prompt = build_prompt(query, persona=persona, language=language)
    logger.info(
        "[handlers:ai_query] IN  query_len=%d persona=%r language=%r model=%s",
        len(query), persona, language, model,
    )

    start = time.perf_counter()
    try:
        result = await session.chat(prompt, model=model)
    except ChatServiceError as e:
        logger.warning("[handlers:ai_query] %s: %s", e.code, e.message)
        return error_response(e)
    except Exception as e:
        logger.exception("[handlers:ai_query] chat failed")
        return error_response(ChatServiceError(str(e)))
    duration_ms = int((time.perf_counter() - start) * 1000)

    response_text = (result.text or "").strip()
    citations = [CitationOut(**c.to_dict()) for c in (result.citations or [])]
    metadata = ResponseMetadata(
        query_length=len(query),
        prompt_length=len(prompt),
        response_length=len(response_text),
        citation_count=len(citations),
        execution_time=f"{duration_ms}ms",
        timestamp=datetime.now(timezone.utc).isoformat(),
        model_used=model,
        persona=persona,
        language=language,
    )
    logger.info(
        "[handlers:ai_query] OUT response_len=%d citations=%d time=%dms",
        len(response_text), len(citations), duration_ms,
    )
    return AIResponse(response=response_text, citations=citations, metadata=metadata)
