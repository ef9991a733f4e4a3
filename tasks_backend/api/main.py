import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tasks_database.db import Database

from .. import __version__
from ..config import Settings, get_settings
from ..errors import AppError, AuthError
from ..security import make_pwd_context
from . import auth, tasks

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the API application.

    The storage handle is created here (or injected) and shared by every
    request through ``app.state``; tables are ensured at startup.
    """
    settings = settings or get_settings()
    owns_database = database is None
    database = database or Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        logger.info("Task API started (prefix=%r)", settings.api_prefix or "/")
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        title="Task Manager API",
        description="Backend API for user auth and personal task management.",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Authentication", "description": "User registration, login, and security"},
            {"name": "Tasks", "description": "Create, update, view, delete, toggle and filter tasks"},
        ],
    )
    app.state.settings = settings
    app.state.database = database
    app.state.pwd_context = make_pwd_context(settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(tasks.router, prefix=settings.api_prefix)

    # Root Health Check
    @app.get("/", summary="Health Check", tags=["General"])
    def health_check():
        """Simple health check endpoint."""
        return {"message": "Healthy"}

    @app.exception_handler(AppError)
    def app_error_handler(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    return app
