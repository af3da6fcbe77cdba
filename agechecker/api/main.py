"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import make_asgi_app

from agechecker import __version__
from agechecker.config import get_settings
from agechecker.api.routes import lookup
from agechecker.api import dependencies

logger = logging.getLogger(__name__)
settings = get_settings()

POWERED_BY = "TelegramAgeChecker"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logger.info("Starting up Telegram Account Age Checker API...")

    try:
        dependencies.get_account_lookup()
    except Exception as e:
        logger.warning(f"Failed to initialize account lookup: {e}")

    yield

    logger.info("Shutting down Telegram Account Age Checker API...")
    await dependencies.cleanup()


app = FastAPI(
    title=settings.app_name,
    description="Estimates Telegram account creation dates from user IDs and usernames",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_powered_by_header(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Powered-By"] = POWERED_BY
    return response


# Include routers
app.include_router(lookup.router, prefix="/api/user", tags=["lookup"])

# Prometheus exposition
app.mount("/metrics", make_asgi_app())


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness endpoint."""
    return "Telegram Account Age Checker API is running"


@app.get("/health")
async def health():
    """Health check with server timestamp."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run():
    """Run the API with uvicorn."""
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
