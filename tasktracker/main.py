import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import auth
from .api import health
from .api import tasks
from .config import get_settings
from .database import create_db_and_tables, describe_database
from .dependencies.auth import get_current_user_id
from .errors import AppError, StoreError, ValidationError
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting server in {settings.env_name} environment ({settings.environment})")
    logger.info(f"Database: {describe_database(settings.database_url)}")
    create_db_and_tables()
    yield


def _error_response(error: AppError) -> JSONResponse:
    body = error.to_dict()
    headers = None
    if error.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    if isinstance(error, StoreError) and error.cause is not None and get_settings().is_development:
        body["error"] = str(error.cause)
    return JSONResponse(status_code=error.status_code, content=body, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return _error_response(ValidationError("Invalid request", errors=errors))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = {"message": "Something went wrong!"}
    if get_settings().is_development:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title="tasktracker", lifespan=lifespan)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Mount routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(
        tasks.router,
        prefix="/api/tasks",
        tags=["tasks"],
        dependencies=[Depends(get_current_user_id)],
    )

    # Health check endpoints for probes
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("tasktracker.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
