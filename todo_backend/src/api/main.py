import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..domain import (
    DomainError,
    InvalidStatusTransitionError,
    InvalidTodoTitleError,
    TodoNotFoundError,
)
from .logging_setup import configure_logging
from .settings import get_settings
from .routers import todos as todos_router

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Todo lifecycle operations with status transitions, filtering and pagination.",
    },
]

_settings = get_settings()
configure_logging(_settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Todo Backend",
    description="Backend API service for managing todos and their status transitions.",
    version="0.2.0",
    openapi_tags=openapi_tags,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# DomainError subclasses not listed here map to 400.
DOMAIN_ERROR_STATUS = [
    (TodoNotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidTodoTitleError, status.HTTP_400_BAD_REQUEST),
    (InvalidStatusTransitionError, status.HTTP_409_CONFLICT),
]


def _status_for(exc: DomainError) -> int:
    for error_cls, code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Translate domain failures into JSON error responses.

    Response format:
        {
            "status_code": 404,
            "error": "TODO_NOT_FOUND",
            "message": "...",
            "timestamp": "...",
            "path": "/api/v1/todos/1"
        }
    """
    status_code = _status_for(exc)
    logger.warning("[%s] %s | %s %s", exc.code, exc.message, request.method, request.url.path)
    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "error": exc.code,
            "message": exc.message,
            "timestamp": exc.timestamp.isoformat(),
            "path": request.url.path,
        },
    )


# Global exception handlers for consistent JSON on validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    logger.info("Request validation failed | %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "backend": _settings.persistence_backend}


# Include routers
app.include_router(todos_router.router)
