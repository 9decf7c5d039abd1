# Run from project root: uvicorn app.main:app --reload   (or: python -m app.main)

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.handlers import MISSING_QUERY_MESSAGE
from app.api.routes import router
from app.core.config import HOST, PORT
from app.schemas.query import ErrorResponse

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


app = FastAPI(title="Copilot AI Proxy")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable or mistyped bodies are a client error, same as a blank query."""
    logger.info("[main:validation_error] path=%s errors=%s", request.url.path, exc.errors())
    body = ErrorResponse(error=MISSING_QUERY_MESSAGE)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return PlainTextResponse("Error 404: Not Found", status_code=404)
    return await http_exception_handler(request, exc)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server is running on http://localhost:%d", PORT)
    uvicorn.run("app.main:app", host=HOST, port=PORT)
