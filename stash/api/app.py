"""FastAPI application."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from stash.api.errors import (
    ApiError,
    api_error_handler,
    database_error_handler,
    request_validation_handler,
)
from stash.api.limiter import limiter
from stash.config import settings
from stash.db.base import init_db

ALLOWED_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create tables on startup."""
    logging.basicConfig(level=settings.log_level)
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not set, skipping table creation")
    yield


app = FastAPI(
    title="Stash API",
    description="Links, snippets and resumes for a job search",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}", "code": "RATE_LIMITED"},
    )


app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from stash.api.routes import links, resumes, snippets  # noqa: E402

app.include_router(links.router, prefix="/links", tags=["Links"])
app.include_router(snippets.router, prefix="/snippets", tags=["Snippets"])
app.include_router(resumes.router, prefix="/resumes", tags=["Resumes"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
