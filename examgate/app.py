"""Main FastAPI application."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from examgate.database import init_db
from examgate.errors import ExamGateError
from examgate.logging_setup import setup_console_logging
from examgate.routes import access, health, results

setup_console_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="Exam Gate API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database on startup."""
    init_db()


@app.exception_handler(ExamGateError)
async def exam_gate_error_handler(request: Request, exc: ExamGateError) -> JSONResponse:
    """Render domain errors as ``{ok: false, error, code}``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.public_message, "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body validation failures in the same envelope."""
    problems = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "ok": False,
            "error": "; ".join(problems) or "Invalid request",
            "code": "invalid_request",
        },
    )


# Include routers
app.include_router(health.router)
app.include_router(access.router)
app.include_router(results.router)
