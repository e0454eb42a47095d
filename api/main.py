"""Main FastAPI application."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import router
from config.settings import Settings, settings as default_settings
from models.database import ExerciseStore
from services.exercise_service import UserNotFoundError
from utils.logger import setup_logger

logger = setup_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _resolve(directory: str) -> Path:
    path = Path(directory)
    return path if path.is_absolute() else PROJECT_ROOT / path


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; the store is opened by the lifespan."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        # Startup
        logger.info("Starting application...")
        store = ExerciseStore(settings)
        await store.connect()
        app.state.store = store
        logger.info("Application started successfully")

        yield

        # Shutdown
        logger.info("Shutting down application...")
        await store.close()
        logger.info("Application shut down")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Exercise tracker: users, exercises and filtered exercise logs",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    logger.info(f"CORS configured with origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render errors as ``{"error": ...}``."""
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(UserNotFoundError)
    async def user_not_found_handler(request: Request, exc: UserNotFoundError):
        """Unknown users are a soft error unless strict mode is on."""
        logger.info(f"User not found: {exc.user_id}")
        status_code = 404 if settings.strict_not_found else 200
        return JSONResponse(status_code=status_code, content={"error": "User not found"})

    app.include_router(router)

    static_dir = _resolve(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/public", StaticFiles(directory=static_dir), name="public")
    else:
        logger.warning(f"Static directory not found: {static_dir}")

    index_page = _resolve(settings.views_dir) / "index.html"

    @app.get("/", include_in_schema=False)
    async def root():
        """Landing page."""
        return FileResponse(index_page)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name
        }

    return app


# Create FastAPI app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
