"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth
from src.api.responses import error_envelope
from src.config import get_settings
from src.database import init_db
from src.errors import AccountError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    logger.info(f"Account API started ({settings.environment})")
    yield


app = FastAPI(
    title="Shop Account API",
    description="Registration, login, password reset and role-gated access for the shop",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError):
    """Render account errors as the standard failure envelope."""
    return error_envelope(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Render unparseable request bodies as the standard failure envelope."""
    logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return error_envelope("Invalid request body", status.HTTP_400_BAD_REQUEST)


# Register routers
app.include_router(auth.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
