# api/main.py
import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from bookshare.config import Settings, configure_logging
from bookshare.errors import (
    BookshareError, NotFound, AlreadyLiked, Forbidden, InvalidArgument,
    Inconsistent, StoreUnavailable, AuthError
)
from bookshare.sa.database import Database
from api.routes import auth, books, chatrooms

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidArgument: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    AlreadyLiked: status.HTTP_409_CONFLICT,
    Inconsistent: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: BookshareError) -> int:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def bookshare_error_handler(request: Request, exc: BookshareError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    if isinstance(exc, StoreUnavailable):
        headers = {"Retry-After": "1"}
    return JSONResponse(
        status_code=code,
        content={"detail": exc.message, "error": type(exc).__name__},
        headers=headers,
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API with its own settings and database; nothing is shared across apps"""
    settings = settings or Settings.from_env()
    configure_logging(settings)
    database = database or Database(settings.database_url, timeout=settings.store_timeout)

    app = FastAPI(title="Bookshare")
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BookshareError, bookshare_error_handler)

    app.include_router(auth.router, prefix="/api")
    app.include_router(books.router, prefix="/api")
    app.include_router(chatrooms.router, prefix="/api")

    # Initialize database on startup
    @app.on_event("startup")
    async def startup_event():
        app.state.database.init_db()

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.database.dispose()

    @app.get("/")
    async def root():
        return {"message": "Bookshare API ready"}

    return app
