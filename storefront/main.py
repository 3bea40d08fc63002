from contextlib import asynccontextmanager
from typing import Optional
import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.api import api_router
from storefront.core.config import Settings, settings as default_settings
from storefront.core.logging import configure_logging
from storefront.db.init_db import Database, init_db

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the API application.

    The store handle is created here (or passed in by tests) and attached to
    ``app.state.database``; request handlers get sessions from it through
    the ``get_db`` dependency.
    """
    settings = settings or default_settings
    database = database or Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(database)
        yield
        await database.dispose()

    app = FastAPI(
        title="Storefront API",
        description="Products, customers, purchases and sales reporting for a small storefront",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.settings = settings

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed or missing fields are a plain 400, like every other client error
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
            for error in errors
        )
        logger.info(f"Rejected request to {request.url.path}: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": message or "Invalid request"},
        )

    # Include routers
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health_check():
        return {"status": "healthy", "version": __version__}

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to the Storefront API",
            "docs": "/docs",
        }

    return app


def run(host: str = "0.0.0.0", port: Optional[int] = None) -> None:
    configure_logging(default_settings.LOG_LEVEL)
    uvicorn.run(
        "storefront.main:create_app",
        factory=True,
        host=host,
        port=port or default_settings.PORT,
    )


if __name__ == "__main__":
    run()
