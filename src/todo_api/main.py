"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from todo_api.api.routes import auth, tasks
from todo_api.config import get_settings
from todo_api.core.logging import setup_logging
from todo_api.database import init_db
from todo_api.telemetry import TelemetryManager

# Missing JWT settings raise here and the process refuses to start
settings = get_settings()

# Configure logging
setup_logging(settings)
logger = logging.getLogger(__name__)

# Initialize telemetry
telemetry_manager = TelemetryManager(settings)
telemetry_manager.setup()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting TodoApi application")

    init_db(settings)
    logger.info("Database initialized")

    yield

    telemetry_manager.shutdown()
    logger.info("Shutting down TodoApi application")


app = FastAPI(
    title="TodoApi",
    description="Multi-user to-do list with JWT authentication",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with OpenTelemetry
if settings.otel_enabled:
    FastAPIInstrumentor.instrument_app(app)
    logger.info("FastAPI instrumented with OpenTelemetry")

# Include routers
app.include_router(auth.router)
app.include_router(tasks.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness endpoint."""
    return "ToDoList Api is running now!"


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with a readable message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Invalid request"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
