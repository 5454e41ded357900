"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import __version__
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    http_error_handler,
    validation_error_handler,
)
from api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware
from api.routes import health, keypair, message, token, transfer
from core.config.runtime import ServiceConfig, get_default_config


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging; respects SIGIL_LOG_LEVEL via ServiceConfig."""
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or get_default_config()

    app = FastAPI(
        title="Sigil API",
        description="""
HTTP API for Ed25519 keypair generation, message signing and signature
verification, plus unsigned Solana instruction builders.

## Endpoints

- **POST /keypair** - Generate a keypair
- **POST /message/sign** - Sign a message with a secret key
- **POST /message/verify** - Verify a detached signature
- **POST /token/create** - Build an SPL InitializeMint instruction
- **POST /token/mint** - Build an SPL MintTo instruction
- **POST /send/sol** - Build a system transfer instruction
- **POST /send/token** - Build an SPL token transfer instruction
- **GET /health** - Health check

## Response Format

Success: `{"success": true, "data": {...}}`

Failure: `{"success": false, "error": "..."}`
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.config = config

    # Middleware added last runs first: CORS, then headers, then rate limit.
    if config.rate_limit.enabled:
        app.add_middleware(RateLimitMiddleware, config=config.rate_limit)

    if config.security_headers:
        app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(keypair.router)
    app.include_router(message.router)
    app.include_router(token.router)
    app.include_router(transfer.router)

    logger.debug(
        f"App created (rate_limit={config.rate_limit.enabled}, "
        f"security_headers={config.security_headers})"
    )
    return app


configure_logging(get_default_config().log_level)

# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _config = get_default_config()
    uvicorn.run(app, host=_config.host, port=_config.port)
