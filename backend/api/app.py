"""
FastAPI App Factory - Creates and configures the app
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.errors import (
    InvalidArgumentError,
    InvalidReplyError,
    RotorIOError,
    RotorTimeoutError,
)
from .routes import connection_router, rotor_router


# Matched by exception MRO, so subclasses win over OSError/ValueError
ERROR_STATUS = (
    (InvalidArgumentError, 400),
    (InvalidReplyError, 400),
    (RotorTimeoutError, 504),
    (RotorIOError, 502),
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""

    app = FastAPI(
        title="r0tor Rotor API",
        description="REST API for the Hambits r0tor az/el antenna rotor",
        version="0.1.0",
    )

    # CORS - must be added first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _register(exc_type, status_code):
        @app.exception_handler(exc_type)
        async def handler(request: Request, exc: Exception):
            return JSONResponse(
                status_code=status_code,
                content={"detail": str(exc), "error": type(exc).__name__},
            )

    for exc_type, status_code in ERROR_STATUS:
        _register(exc_type, status_code)

    # Global exception handler to ensure CORS headers on errors
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc)},
        )

    # Register routers with /api prefix
    app.include_router(connection_router, prefix="/api")
    app.include_router(rotor_router, prefix="/api")

    return app
