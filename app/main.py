import logging
from logging.handlers import RotatingFileHandler
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.deps import get_database
from app.api.routers import ai, auth, places, route, trips, weather
from app.core.config import Settings
from app.core.database import Database
from app.core.errors import SkyCastError

logger = logging.getLogger("skycast_server")

# Leading parts of a validation error location that name the request part, not the field
LOCATION_PREFIXES = ("body", "query", "path", "header")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=logging.INFO)
    # Avoid stacking file handlers when the factory runs more than once
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return
    handler = RotatingFileHandler(
        settings.log_file, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SkyCastError)
    async def handle_app_error(request: Request, exc: SkyCastError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", ()) if p not in LOCATION_PREFIXES)
            message = f"{field}: {first.get('msg')}" if field else first.get("msg")
        else:
            message = "Invalid request"
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        # Full traceback for server admins, generic text for the client
        logger.exception(f"SERVER ERROR on {request.method} {request.url.path}")
        return _error(500, "An unexpected error occurred")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings.warn_on_insecure_defaults()
        database = Database(settings.database_url)
        database.create_all()
        app.state.db = database
        logger.info("Database initialized.")
        yield
        database.dispose()
        logger.info("Database connections closed.")

    app = FastAPI(title="SkyCast Travel Planner API", lifespan=lifespan)
    app.state.settings = settings

    app.include_router(auth.router)
    app.include_router(trips.router)
    app.include_router(weather.router)
    app.include_router(route.router)
    app.include_router(ai.router)
    app.include_router(places.router)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/api/health")
    def health_check(database: Database = Depends(get_database)):
        return {
            "status": "OK",
            "message": "SkyCast API is running",
            "database": "Connected" if database.ping() else "Disconnected",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
