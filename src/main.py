"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler

logger = structlog.get_logger()

setup_logging()

API_DESCRIPTION = """\
## Group Restaurant Matching

TableMatch lets a group swipe through nearby restaurants together and
surfaces the places everyone liked.

### Features
- **Sessions**: one active voting round per group, sourced from the places
  service with an offline fallback
- **Votes**: per-candidate approve/reject, safe to retry
- **Matches**: candidates approved by every voter

### Authentication
All endpoints except `/health` require a bearer token:
```
Authorization: Bearer <your_token>
```

### Rate Limits
- Votes: 120 requests/minute
- Reads: 60 requests/minute
- Session start/conclude: 10 requests/minute
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Health check endpoints"},
    {"name": "sessions", "description": "Voting session lifecycle and session votes"},
    {"name": "votes", "description": "Standalone group votes and their matches"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and warn when sourcing is limited to the fallback pool."""
    if not settings.places_api_key_configured:
        logger.warning("places_api_key_missing", detail="fallback pool will be used")
    logger.info("app_started", environment=settings.app_env)
    yield
    logger.info("app_stopped")


def _add_middleware(app: FastAPI) -> None:
    # LIFO order: the last one added is the outermost
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=API_VERSION,
        debug=settings.debug,
        contact={"name": "TableMatch Support"},
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _add_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
