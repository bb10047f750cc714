"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from recipebox.config import settings
from recipebox.database import async_engine, init_models
from recipebox.logging_config import SERVICE_NAME, LoggingContext, configure_logging, get_logger
from recipebox.routers import ingredients_router, shopping_list_router

API_VERSION = "0.1.0"
REQUEST_ID_HEADER = "X-Request-ID"

configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables for the SQL store on startup and release the engine on shutdown."""
    logger.info(f"Starting Recipebox API ({settings.environment}, {settings.store_backend} store)")

    if settings.store_backend == "sql":
        await init_models()
        logger.info("Database tables initialized")

    yield

    logger.info("Shutting down Recipebox API")
    await async_engine.dispose()


app = FastAPI(
    title="Recipebox API",
    description="Household recipes, ingredient parsing and shopping lists",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log line of a request with its request ID."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(ingredients_router)
app.include_router(shopping_list_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME, "store": settings.store_backend}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Recipebox API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
