"""Schemas for the /api/ai endpoint. Field aliases match the JSON the frontend sends and expects."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AIRequest(BaseModel):
    """Request body for POST /api/ai. ``query`` is validated in the handler so a blank value maps to 400."""

    model_config = ConfigDict(populate_by_name=True)

    query: Any = Field(None, description="User question (required, non-blank).")
    persona: str | None = Field(None, alias="customModel", description="Optional persona the assistant should adopt.")
    language: str | None = Field(None, description="Output language. Defaults to Bahasa Indonesia.")
    model: str | None = Field(None, description="Model selector: default, think-deeper or gpt-5.")


class CitationOut(BaseModel):
    title: str | None = None
    icon: str | None = None
    url: str | None = None


class ResponseMetadata(BaseModel):
    """Diagnostics echoed back with every successful answer."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    query_length: int = Field(..., alias="queryLength")
    prompt_length: int = Field(..., alias="promptLength")
    response_length: int = Field(..., alias="responseLength")
    citation_count: int = Field(..., alias="citationCount")
    execution_time: str = Field(..., alias="executionTime", description="Wall time, e.g. '1532ms'.")
    timestamp: str = Field(..., description="ISO-8601 UTC time the answer was assembled.")
    model_used: str = Field(..., alias="modelUsed")
    persona: str | None = None
    language: str


class AIResponse(BaseModel):
    """Response for a successful POST /api/ai."""

    success: bool = True
    response: str = Field(..., description="Assembled answer text, trimmed.")
    citations: list[CitationOut] = Field(default_factory=list)
    metadata: ResponseMetadata

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "response": "Hi there",
                    "citations": [],
                    "metadata": {
                        "queryLength": 4,
                        "promptLength": 81,
                        "responseLength": 8,
                        "citationCount": 0,
                        "executionTime": "1532ms",
                        "timestamp": "2025-01-01T00:00:00+00:00",
                        "modelUsed": "default",
                        "persona": None,
                        "language": "Bahasa Indonesia",
                    },
                }
            ]
        }
    )


class ErrorResponse(BaseModel):
    """Body for 400/500 responses. ``message`` carries the underlying failure for server errors."""

    success: bool = False
    error: str
    message: str | None = None
    code: str | None = None
